# tests/test_responses.py

"""
응답 직렬화(JSON/XML/CSV) 테스트 모듈입니다.
"""

import json
import xml.etree.ElementTree as ET

from cwms.core.responses import OutputFormat, ResponseShape, emit_response, render_csv, render_json, render_xml
from cwms.domains.wms.mappers import map_aisle_stats_row, map_inventory_row
from tests.fakes import AISLE_STATS_ROWS, INVENTORY_ROWS


def _inventory(*indexes):
    return [map_inventory_row(INVENTORY_ROWS[i]) for i in indexes]


def test_keyed_json_uses_record_id():
    stats = [map_aisle_stats_row(row) for row in AISLE_STATS_ROWS]

    body = render_json(stats, ResponseShape.KEYED)

    assert list(body) == ["A1", "B2"]
    assert body["B2"]["numberUnscanned"] == 3


def test_keyed_json_with_duplicate_ids_keeps_last():
    first, second = [map_aisle_stats_row(row) for row in AISLE_STATS_ROWS]
    duplicate = second.model_copy(update={"id": "A1"})

    body = render_json([first, duplicate], ResponseShape.KEYED)

    assert list(body) == ["A1"]
    assert body["A1"]["numberUnscanned"] == 3


def test_xml_nesting_and_omitempty():
    """[성공] 불일치가 비어 있으면 <Discrepancy> 요소를 생략합니다."""
    document = ET.fromstring(render_xml(_inventory(0, 2), "inventoryList", "inventory"))

    first, third = document.findall("inventory")
    assert first.get("id") == "1"
    assert first.find("item/SKU").text == "SKU-100"
    assert first.find("item/Discrepancy") is None
    assert first.find("time/start").text == "2024-01-01T08:00:00"
    assert len(first.findall("position")) == 1
    assert first.find("position/DisplayName").text == "A1-01-01"

    assert third.find("item/Discrepancy").text == "wrong sku"


def test_xml_plain_strings():
    document = ET.fromstring(render_xml(["A1", "B2"], "aisles", "aisle"))

    assert document.tag == "aisles"
    assert [e.text for e in document.findall("aisle")] == ["A1", "B2"]


def test_csv_stats_uses_json_field_names():
    stats = [map_aisle_stats_row(row) for row in AISLE_STATS_ROWS]

    lines = render_csv(stats).splitlines()

    assert lines[0] == "id,numberOccupied,numberEmpty,numberException,numberUnscanned,lastScanned"
    assert lines[1] == "A1,1,1,1,0,2024-01-01T08:05:00Z"


def test_csv_plain_strings_and_empty_input():
    assert render_csv(["A1", "B2"], "aisle").splitlines() == ["aisle", "A1", "B2"]
    assert render_csv([]) == ""


def test_emit_response_media_types():
    records = _inventory(0)

    json_response = emit_response(records, ResponseShape.FLAT)
    assert json.loads(json_response.body)[0]["displayname"] == "A1-01-01"

    xml_response = emit_response(records, ResponseShape.FLAT, OutputFormat.XML)
    assert xml_response.media_type == "application/xml"

    csv_response = emit_response(records, ResponseShape.FLAT, OutputFormat.CSV)
    assert csv_response.media_type.startswith("text/csv")
