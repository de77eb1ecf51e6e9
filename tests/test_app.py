from __future__ import annotations

from dataclasses import replace

from fastapi.testclient import TestClient

from app import create_app
from demo_reset.utils.config import get_settings


def test_create_app_initializes_schema_on_startup(tmp_path):
    settings = replace(get_settings(), database_path=tmp_path / "app.db", admin_token=None)
    app = create_app(settings)

    with TestClient(app) as client:
        summary = client.get("/summary")
        reset = client.post("/reset")

    assert summary.status_code == 200
    assert summary.json()["bookings"] == 0
    assert reset.status_code == 200
    assert app.state.repository.count_rows("guests") == 10
