import pytest
from fastapi.testclient import TestClient

from result_sheet.main import app
from result_sheet.routes.result_routes import get_result_store

from tests.conftest import SHEET_TEXT


@pytest.fixture
def client(store):
    app.dependency_overrides[get_result_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


def upload(client, image, semester="1", year="1", content_type="image/png"):
    return client.post(
        "/api/upload",
        files={"resultSheet": ("sheet.png", image, content_type)},
        data={"semester": semester, "year": year},
    )


def test_root(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "running" in r.json()["message"]


def test_upload_sheet(client, store, sheet_png, fake_ocr):
    r = upload(client, sheet_png, semester="2", year="3")

    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Results processed successfully", "count": 2}
    assert len(store.find_all()) == 2


def test_upload_without_file(client, fake_ocr):
    r = client.post("/api/upload", data={"semester": "1", "year": "1"})
    assert r.status_code == 400
    assert r.json()["error"] == "No file uploaded"


def test_upload_non_image(client, fake_ocr):
    r = upload(client, b"a,b,c", content_type="text/csv")
    assert r.status_code == 400
    assert r.json()["error"] == "Only image files are allowed!"


@pytest.mark.parametrize("semester,year", [("3", "1"), ("1", "4"), ("0", "1")])
def test_upload_out_of_range_semester_or_year(client, sheet_png, fake_ocr, semester, year):
    r = upload(client, sheet_png, semester=semester, year=year)
    assert r.status_code == 422
    assert fake_ocr.calls == 0


def test_upload_bad_grade(client, store, sheet_png, fake_ocr):
    fake_ocr.text = SHEET_TEXT.replace("B+", "D+")
    r = upload(client, sheet_png)

    assert r.status_code == 422
    body = r.json()
    assert body["success"] is False
    assert body["details"] == "invalid grade 'D+' for Jane Doe"
    assert store.find_all() == []


def test_upload_undecodable_image(client, fake_ocr):
    r = upload(client, b"not really a png")
    assert r.status_code == 400
    assert r.json()["error"] == "Result processing failed"


def test_calculate_then_lookup(client, sheet_png, fake_ocr):
    upload(client, sheet_png, semester="1", year="1")
    upload(client, sheet_png, semester="2", year="1")

    r = client.post("/api/calculate-final")
    assert r.status_code == 200
    assert r.json()["students_updated"] == 2

    r = client.get("/api/student/20/COM/002")
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["index_no"] == "20/COM/002"
    assert data["semester"] == 2
    assert data["final_class"] == "First Class"
    assert data["year_gpa"] == {"1": data["final_gpa"]}


def test_lookup_unknown_student(client):
    r = client.get("/api/student/00/NOPE/000")
    assert r.status_code == 404
    assert r.json() == {"success": False, "error": "Student not found"}


def test_upload_too_large(client, sheet_png, fake_ocr, monkeypatch):
    from result_sheet.core.config import CONFIG

    monkeypatch.setattr(CONFIG, "MAX_UPLOAD_BYTES", 10)
    r = upload(client, sheet_png)
    assert r.status_code == 413
    assert fake_ocr.calls == 0


def test_upload_ocr_engine_failure(client, store, sheet_png, monkeypatch):
    from result_sheet.core.errors import RecognitionError
    from result_sheet.services import ocr_service

    async def broken(image):
        raise RecognitionError("tesseract failed: not installed")

    monkeypatch.setattr(ocr_service, "recognize", broken)
    r = upload(client, sheet_png)

    assert r.status_code == 502
    assert r.json() == {
        "success": False,
        "error": "Result processing failed",
        "details": "tesseract failed: not installed",
    }
    assert store.find_all() == []


class BrokenStore:
    def find_all(self):
        raise RuntimeError("db down")


@pytest.fixture
def broken_client():
    app.dependency_overrides[get_result_store] = lambda: BrokenStore()
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


def test_unhandled_error_hides_details_outside_development(broken_client, monkeypatch):
    from result_sheet.core.config import CONFIG

    monkeypatch.setattr(CONFIG, "ENVIRONMENT", "production")
    r = broken_client.post("/api/calculate-final")

    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Internal server error"}


def test_unhandled_error_shows_details_in_development(broken_client, monkeypatch):
    from result_sheet.core.config import CONFIG

    monkeypatch.setattr(CONFIG, "ENVIRONMENT", "development")
    r = broken_client.post("/api/calculate-final")

    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Internal server error", "details": "db down"}
