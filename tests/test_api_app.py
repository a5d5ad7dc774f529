import io

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from magscan_backend import api_app
from magscan_backend.models import REPORT_COLUMNS


@pytest.fixture
def client(monkeypatch, settings):
    monkeypatch.setattr(api_app, "_settings", settings)
    return TestClient(api_app.app)


@pytest.fixture
def tree(tmp_path, make_file):
    make_file(tmp_path / "A", "7_01022024_1_1.dat", "a|b|c|10|20|d|e", when=(2024, 2, 3, 8, 0))
    make_file(tmp_path / "A", "7_01022024_2_1.dat", "a|b|c|11|21|d|e", when=(2024, 2, 3, 9, 0))
    make_file(tmp_path / "B", "8_02022024_1_1.dat", "", when=(2024, 2, 4, 9, 0))
    return tmp_path


def test_health(client):
    assert client.get("/health").json() == {"ok": True, "status": "running"}


@pytest.mark.parametrize("payload", [{}, {"mainFolderPath": ""}, {"mainFolderPath": None}])
def test_files_requires_main_folder_path(client, payload):
    resp = client.post("/files", json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"error": "mainFolderPath is required in the request body."}


def test_files_without_body(client):
    resp = client.post("/files")
    assert resp.status_code == 400


def test_files_returns_workbook(client, tree):
    resp = client.post("/files", json={"mainFolderPath": str(tree)})

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert resp.headers["content-disposition"] == "attachment; filename=results.xlsx"

    ws = load_workbook(io.BytesIO(resp.content))["Results"]
    rows = [[c.value for c in row] for row in ws.iter_rows()]
    assert rows[0] == REPORT_COLUMNS
    assert rows[1] == ["2024-02-03", "7_01022024_2_1.dat", "7", "01/02/2024", "11", "21"]
    assert rows[2][:4] == ["2024-02-04", "8_02022024_1_1.dat", "8", "02/02/2024"]
    assert len(rows) == 3


def test_files_missing_folder_is_server_error(client, tmp_path):
    resp = client.post("/files", json={"mainFolderPath": str(tmp_path / "missing")})
    assert resp.status_code == 500
    assert resp.json() == {"error": "An error occurred while processing the request."}


def test_files_dangling_entry_gives_no_report(client, tree):
    (tree / "A" / "9_01022024_1_1.dat").symlink_to(tree / "A" / "gone.dat")

    resp = client.post("/files", json={"mainFolderPath": str(tree)})

    assert resp.status_code == 500
    assert resp.headers["content-type"].startswith("application/json")
    assert resp.json() == {"error": "An error occurred while processing the request."}


def test_preview_returns_records_by_date(client, tree):
    resp = client.post("/files/preview", json={"mainFolderPath": str(tree)})

    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 2
    assert list(body["dates"]) == ["2024-02-03", "2024-02-04"]
    assert body["dates"]["2024-02-03"] == [{
        "modificationDate": "2024-02-03",
        "fileName": "7_01022024_2_1.dat",
        "magazineCode": "7",
        "dateFromFilename": "01/02/2024",
        "inValue": "11",
        "outValue": "21",
    }]
    assert body["dates"]["2024-02-04"][0]["inValue"] == ""


def test_preview_empty_tree(client, tmp_path):
    resp = client.post("/files/preview", json={"mainFolderPath": str(tmp_path)})
    assert resp.json() == {"dates": {}, "count": 0}
