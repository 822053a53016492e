# scripts/dump_inventory.py

"""
재고 뷰를 조회하여 JSON, XML 또는 CSV로 표준 출력에 내보내는 명령행 도구입니다.

사용 예:
    python scripts/dump_inventory.py --aisle A1 --format csv
    python scripts/dump_inventory.py --discrepancy all
    python scripts/dump_inventory.py --stats
"""

import asyncio

import typer

from cwms.core.config import settings
from cwms.core.database import SessionQueryExecutor, get_async_session_context
from cwms.core.exceptions import CwmsError
from cwms.core.responses import OutputFormat, ResponseShape, emit_response
from cwms.domains.wms.filters import AisleFilter
from cwms.domains.wms.services import InventoryQueryService

cli = typer.Typer()


async def dump_records(
    service: InventoryQueryService,
    *,
    aisle: str = "",
    discrepancy: str = "",
    stats: bool = False,
    output_format: OutputFormat = OutputFormat.JSON,
) -> str:
    """조회 결과를 요청한 형식의 텍스트로 반환합니다. 조회 오류는 그대로 전달됩니다."""
    if stats:
        records = await service.list_aisle_stats()
        response = emit_response(records, ResponseShape.KEYED, output_format, root_tag="aisles", item_tag="aisle")
    else:
        records = await service.list_inventory(AisleFilter(aisle=aisle, discrepancy=discrepancy))
        response = emit_response(records, ResponseShape.FLAT, output_format, root_tag="inventoryList", item_tag="inventory")
    return response.body.decode("utf-8")


@cli.command()
def main(
    aisle: str = typer.Option("", '--aisle', '-a', help="이 통로의 재고만 조회합니다."),
    discrepancy: str = typer.Option(
        "", '--discrepancy', '-d',
        help="불일치 필터입니다. 'all'이면 불일치가 있는 모든 재고를 조회합니다."
    ),
    stats: bool = typer.Option(False, '--stats', help="재고 대신 통로별 통계를 조회합니다."),
    output_format: OutputFormat = typer.Option(OutputFormat.JSON, '--format', '-f', help="출력 형식입니다."),
):
    """
    CWMS 재고 뷰를 조회하여 표준 출력으로 내보냅니다.
    """
    async def run_dump() -> str:
        async with get_async_session_context() as db:
            service = InventoryQueryService(SessionQueryExecutor(db), timeout=settings.QUERY_TIMEOUT_SECONDS)
            return await dump_records(
                service, aisle=aisle, discrepancy=discrepancy, stats=stats, output_format=output_format
            )

    try:
        output = asyncio.run(run_dump())
    except CwmsError as e:
        typer.echo(f"오류: 재고 조회에 실패했습니다: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(output)


if __name__ == "__main__":
    cli()
