from __future__ import annotations

from fastapi.testclient import TestClient

from linetable.main import create_app
from linetable.settings import Settings

MEASUREMENT = "Station,Upper Creek\nSections,12\nWidth,3.5\nCorrected,false\nNotes\n"


def get_client(**overrides) -> TestClient:
    app = create_app(Settings(**overrides))
    return TestClient(app)


def test_healthz() -> None:
    resp = get_client().get("/healthz")
    assert resp.status_code == 200
    assert resp.text == "ok\n"


def test_lookup_string() -> None:
    resp = get_client().post("/lookup", json={"text": MEASUREMENT, "label": "station"})
    body = resp.json()

    assert resp.status_code == 200
    assert body["value"] == "Upper Creek"
    assert body["kind"] == "string"
    assert body["line_count"] == 5


def test_lookup_typed_values() -> None:
    client = get_client()
    assert client.post("/lookup", json={"text": MEASUREMENT, "label": "Sections", "kind": "int"}).json()["value"] == 12
    assert client.post("/lookup", json={"text": MEASUREMENT, "label": "width", "kind": "double"}).json()["value"] == 3.5
    assert client.post("/lookup", json={"text": MEASUREMENT, "label": "Corrected", "kind": "bool"}).json()["value"] is False


def test_lookup_line() -> None:
    client = get_client()
    body = client.post("/lookup", json={"text": MEASUREMENT, "label": "width", "kind": "line"}).json()
    assert body["value"] == {"index": 3, "raw": "Width,3.5", "fields": ["Width", "3.5"]}

    missing = client.post("/lookup", json={"text": MEASUREMENT, "label": "Operator", "kind": "line"})
    assert missing.status_code == 200
    assert missing.json()["value"] is None


def test_lookup_custom_delimiter() -> None:
    resp = get_client().post(
        "/lookup", json={"text": "Rate;4.5;m3/s", "label": "rate", "delimiter": ";"}
    )
    assert resp.json()["value"] == "4.5;m3/s"


def test_lookup_missing_label_is_404() -> None:
    resp = get_client().post("/lookup", json={"text": MEASUREMENT, "label": "Operator"})
    assert resp.status_code == 404
    assert "Operator" in resp.json()["detail"]


def test_lookup_invalid_values_are_422() -> None:
    client = get_client()
    assert client.post("/lookup", json={"text": MEASUREMENT, "label": "Notes"}).status_code == 422
    assert (
        client.post("/lookup", json={"text": MEASUREMENT, "label": "Station", "kind": "int"}).status_code
        == 422
    )
    assert client.post("/lookup", json={"text": MEASUREMENT, "label": "  "}).status_code == 422


def test_lookup_rejects_oversized_body() -> None:
    client = get_client(max_input_bytes=64)
    resp = client.post("/lookup", json={"text": MEASUREMENT * 10, "label": "Station"})
    assert resp.status_code == 413


def test_lines_lists_everything() -> None:
    body = get_client().post("/lines", json={"text": "A,1\n\nB,2\n"}).json()
    assert [line["index"] for line in body["lines"]] == [1, 2, 3]
    assert body["lines"][1]["fields"] == []
    assert body["last_line_number"] == 3


def test_lines_filter_by_field() -> None:
    body = get_client().post(
        "/lines", json={"text": "A,red\nB,blue\nC,RED", "contains": "red"}
    ).json()
    assert [line["raw"] for line in body["lines"]] == ["A,red", "C,RED"]

    none = get_client().post("/lines", json={"text": "A,red", "contains": "green"}).json()
    assert none["lines"] == []


def test_metrics_endpoint() -> None:
    client = get_client()
    client.post("/lookup", json={"text": MEASUREMENT, "label": "Sections", "kind": "int"})
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "linetable_lookups_total" in resp.text


def test_metrics_disabled() -> None:
    resp = get_client(metrics_enabled=False).get("/metrics")
    assert resp.status_code == 404
