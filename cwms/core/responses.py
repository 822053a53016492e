# cwms/core/responses.py

"""
조회 결과를 HTTP 응답으로 직렬화하는 모듈입니다.

- 응답 모양(ResponseShape): KEYED는 레코드 id를 키로 하는 매핑, FLAT은 순서 있는 목록입니다.
- 출력 형식(OutputFormat): JSON(기본), XML, CSV.
  XML/CSV는 레코드 클래스에 선언된 `XML_TAGS`, `CSV_COLUMNS`를 따릅니다.
"""

import csv
import io
import xml.etree.ElementTree as ET
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Sequence, Tuple

from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, TypeAdapter

from cwms.core.nullable import NullString


class ResponseShape(str, Enum):
    KEYED = "keyed"
    FLAT = "flat"


class OutputFormat(str, Enum):
    JSON = "json"
    XML = "xml"
    CSV = "csv"


_DATETIME_ADAPTER = TypeAdapter(datetime)


def format_timestamp(value: datetime) -> str:
    """JSON 응답과 같은 형식(UTC는 'Z' 접미사)으로 시각을 문자열로 만듭니다."""
    return _DATETIME_ADAPTER.dump_python(value, mode="json")


def _field_text(value: Any) -> str:
    if isinstance(value, NullString):
        return value.to_text()
    if isinstance(value, datetime):
        return format_timestamp(value)
    if value is None:
        return ""
    return str(value)


def _aliases(model: BaseModel) -> List[Tuple[str, str]]:
    return [
        (name, info.serialization_alias or name)
        for name, info in type(model).model_fields.items()
    ]


# =============================================================================
# JSON
# =============================================================================
def _to_jsonable(record: Any) -> Any:
    if isinstance(record, BaseModel):
        return record.model_dump(mode="json", by_alias=True)
    return record


def render_json(records: Sequence[Any], shape: ResponseShape) -> Any:
    if shape == ResponseShape.KEYED:
        return {str(record.id): _to_jsonable(record) for record in records}
    return [_to_jsonable(record) for record in records]


# =============================================================================
# XML
# =============================================================================
def _record_to_element(record: Any, default_tag: str) -> ET.Element:
    if not isinstance(record, BaseModel):
        element = ET.Element(default_tag)
        element.text = _field_text(record)
        return element

    element = ET.Element(getattr(record, "XML_ELEMENT", default_tag))
    tags: Dict[str, str] = getattr(record, "XML_TAGS", None) or {
        name: alias for name, alias in _aliases(record)
    }
    parents: Dict[str, ET.Element] = {}

    for name, tag in tags.items():
        text = _field_text(getattr(record, name))
        path, _, option = tag.partition(",")
        if option == "omitempty" and text == "":
            continue
        if path.startswith("@"):
            element.set(path[1:], text)
            continue

        *ancestors, leaf = path.split(">")
        parent = element
        for depth in range(len(ancestors)):
            key = ">".join(ancestors[: depth + 1])
            if key not in parents:
                parents[key] = ET.SubElement(parent, ancestors[depth])
            parent = parents[key]
        ET.SubElement(parent, leaf).text = text

    return element


def render_xml(records: Sequence[Any], root_tag: str = "records", item_tag: str = "record") -> str:
    root = ET.Element(root_tag)
    for record in records:
        root.append(_record_to_element(record, item_tag))
    return ET.tostring(root, encoding="unicode", xml_declaration=True)


# =============================================================================
# CSV
# =============================================================================
def _csv_columns(record: Any) -> List[Tuple[str, str]]:
    if not isinstance(record, BaseModel):
        return []
    columns = getattr(record, "CSV_COLUMNS", None)
    return list(columns) if columns else _aliases(record)


def render_csv(records: Sequence[Any], item_tag: str = "record") -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    if not records:
        return ""

    columns = _csv_columns(records[0])
    if not columns:
        writer.writerow([item_tag])
        for record in records:
            writer.writerow([_field_text(record)])
        return output.getvalue()

    writer.writerow([header for _, header in columns])
    for record in records:
        row = []
        for name, _ in columns:
            value = getattr(record, name)
            if isinstance(value, NullString):
                row.append(value.to_csv().decode("utf-8"))
            else:
                row.append(_field_text(value))
        writer.writerow(row)
    return output.getvalue()


# =============================================================================
# 응답 생성
# =============================================================================
def emit_response(
    records: Sequence[Any],
    shape: ResponseShape,
    output_format: OutputFormat = OutputFormat.JSON,
    *,
    root_tag: str = "records",
    item_tag: str = "record",
) -> Response:
    """레코드 목록을 요청된 모양과 형식의 응답으로 변환합니다."""
    if output_format == OutputFormat.XML:
        return Response(content=render_xml(records, root_tag, item_tag), media_type="application/xml")
    if output_format == OutputFormat.CSV:
        return Response(content=render_csv(records, item_tag), media_type="text/csv; charset=utf-8")
    return JSONResponse(content=render_json(records, shape))
