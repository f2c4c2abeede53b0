from __future__ import annotations

from datetime import datetime

import pytest

from outbound_board.config import load_settings
from outbound_board.core.exceptions import StoreUnavailable, WriteConflict
from outbound_board.main import create_app

KIM = "김민수"
LEE = "이지연"


@pytest.fixture
def client(container):
    app = create_app(load_settings("outbound_board.config.testing"), container=container)
    return app.test_client()


def login(client, name, pin):
    res = client.post("/api/login", json={"name": name, "pin": pin})
    assert res.status_code == 200
    return {"Authorization": f"Bearer {res.get_json()['token']}"}


def test_login_rejects_bad_pin(client):
    res = client.post("/api/login", json={"name": KIM, "pin": "0"})
    assert res.status_code == 401
    assert res.get_json()["success"] is False


def test_mark_out_and_return_flow(client):
    headers = login(client, KIM, "1234")

    res = client.post("/api/outbounds", json={"location": "Client HQ"}, headers=headers)
    assert res.status_code == 200
    body = res.get_json()
    assert body["record"]["status"] == "out"
    assert body["record"]["place"] == "Client HQ"
    assert body["log_lost"] is False

    res = client.post("/api/outbounds/return", headers=headers)
    assert res.get_json()["record"]["status"] == "returned"

    summary = client.get("/api/status/summary").get_json()
    kim = next(u for u in summary["users"] if u["employee_id"] == KIM)
    assert kim["status"] == "returned"
    assert kim["color"] == "#9AA0A6"


def test_token_required(client):
    assert client.post("/api/outbounds", json={"location": "A"}).status_code == 401
    res = client.post("/api/outbounds", json={"location": "A"}, headers={"Authorization": "Bearer nope"})
    assert res.status_code == 401


def test_bad_expected_return_is_400(client):
    headers = login(client, KIM, "1234")
    res = client.post("/api/outbounds", json={"location": "A", "expected_return_at": "soon"}, headers=headers)
    assert res.status_code == 400


def test_clearing_someone_else_is_forbidden(client):
    headers = login(client, KIM, "1234")
    assert client.delete(f"/api/records/{LEE}", headers=headers).status_code == 403


def test_admin_clear_unknown_is_404(client):
    headers = login(client, "admin", "0000")
    assert client.delete("/api/records/Nobody", headers=headers).status_code == 404


def test_snapshot_and_logs(client):
    headers = login(client, KIM, "1234")
    client.post("/api/checkin", headers=headers)

    snapshot = client.get("/api/snapshot").get_json()
    assert snapshot["records"][KIM]["status"] == "in"
    assert snapshot["summary"]["counts"]["office"] == 1

    logs = client.get("/api/logs?limit=1").get_json()
    assert len(logs) == 1
    assert logs[0]["action"] == "in"


def test_admin_endpoints(client):
    admin = login(client, "admin", "0000")

    res = client.post("/api/admin/employees", json={"name": "Choi", "department": "Sales", "pin": 4321}, headers=admin)
    assert res.status_code == 201
    assert res.get_json()["record"]["status"] == "unregistered"

    names = [e["employee_id"] for e in client.get("/api/admin/employees", headers=admin).get_json()]
    assert "Choi" in names

    assert client.delete("/api/admin/employees/Choi", headers=admin).get_json()["record"]["status"] == "removed"

    stats = client.get("/api/admin/stats?period=month", headers=admin).get_json()
    assert stats["period"] == "month"
    assert client.get("/api/admin/stats?period=year", headers=admin).status_code == 400

    staff = login(client, KIM, "1234")
    assert client.get("/api/admin/stats", headers=staff).status_code == 403


@pytest.mark.parametrize("error, status", [(WriteConflict("raced"), 409), (StoreUnavailable("down"), 503)])
def test_store_errors_map_to_http_status(client, container, monkeypatch, error, status):
    headers = login(client, KIM, "1234")

    def boom(*args, **kwargs):
        raise error

    monkeypatch.setattr(container.engine, "apply", boom)
    res = client.post("/api/outbounds", json={"location": "A"}, headers=headers)

    assert res.status_code == status
    assert res.get_json()["message"] == str(error)


def test_stream_is_event_stream(client):
    res = client.get("/api/stream")
    assert res.status_code == 200
    assert res.mimetype == "text/event-stream"
    first = next(iter(res.response))
    if isinstance(first, bytes):
        first = first.decode("utf-8")
    assert first.startswith("event: ")
    res.close()


def test_expected_return_with_utc_offset_is_converted_to_local_time(client):
    headers = login(client, KIM, "1234")
    stamp = "2026-02-03T12:00:00+09:00"

    res = client.post("/api/outbounds", json={"location": "A", "expected_return_at": stamp}, headers=headers)

    assert res.status_code == 200
    local = datetime.fromisoformat(stamp).astimezone().replace(tzinfo=None)
    assert res.get_json()["record"]["expected_return_at"] == local.isoformat()


def test_non_text_fields_are_400(client):
    headers = login(client, KIM, "1234")
    res = client.post("/api/outbounds", json={"location": 123}, headers=headers)
    assert res.status_code == 400
    assert res.get_json()["success"] is False

    res = client.post("/api/outbounds", json={"location": "A", "expected_return_at": 5}, headers=headers)
    assert res.status_code == 400

    admin = login(client, "admin", "0000")
    res = client.post("/api/outbounds/return", json={"employee_id": 5}, headers=admin)
    assert res.status_code == 400


def test_admin_self_check_in_does_not_show_on_board(client):
    admin = login(client, "admin", "0000")
    assert client.post("/api/checkin", headers=admin).status_code == 200

    summary = client.get("/api/status/summary").get_json()
    assert "admin" not in [u["employee_id"] for u in summary["users"]]
