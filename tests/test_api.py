from types import SimpleNamespace

import pytest

from shopclock.core.exceptions import StoreError
from shopclock.main import create_app


@pytest.fixture
def app(tmp_path):
    settings = SimpleNamespace(
        SECRET_KEY="test-secret",
        DEBUG=False,
        TESTING=True,
        LOG_LEVEL="WARNING",
        STORE_BACKEND="memory",
        BACKUP_DIR=str(tmp_path / "backups"),
        AUTO_BACKUP_ON_START=False,
        DEFAULT_STAFF_NAMES=("Alice", "Bob", "Charlie"),
    )
    return create_app(settings)


@pytest.fixture
def client(app):
    return app.test_client()


def _staff_id(client, name):
    return next(s["id"] for s in client.get("/api/staff").get_json() if s["name"] == name)


def test_demo_staff_seeded(client):
    names = [s["name"] for s in client.get("/api/staff").get_json()]
    assert names == ["Alice", "Bob", "Charlie"]


def test_clock_in_then_today(client):
    alice = _staff_id(client, "Alice")

    resp = client.post(f"/api/staff/{alice}/clock-in")
    assert resp.status_code == 200
    assert resp.get_json()["state"] == "WORKING"

    today = client.get(f"/api/staff/{alice}/today").get_json()
    assert today["clockIn"] is not None
    assert today["isOnBreak"] is False


def test_unknown_staff_and_action(client):
    assert client.post("/api/staff/NOPE/clock-in").status_code == 404
    alice = _staff_id(client, "Alice")
    assert client.post(f"/api/staff/{alice}/dance").status_code == 404


def test_manual_edit_validates_date(client):
    alice = _staff_id(client, "Alice")
    resp = client.put(f"/api/staff/{alice}/records/2026-13-01", json={})
    assert resp.status_code == 400

    resp = client.put(
        f"/api/staff/{alice}/records/2026-01-05",
        json={"clockIn": "2026-01-05T09:00:00", "clockOut": "2026-01-05T18:00:00", "breakMinutes": 60},
    )
    assert resp.status_code == 200
    assert resp.get_json()["breakMinutes"] == 60


def test_payroll_is_gated_once_owner_password_exists(client):
    assert client.get("/api/payroll?month=2026-01").status_code == 200

    assert client.post("/api/owner/password", json={"password": "weak"}).status_code == 400
    assert client.post("/api/owner/password", json={"password": "s3cret!pw"}).status_code == 200

    other = client.application.test_client()
    assert other.get("/api/payroll?month=2026-01").status_code == 403
    assert other.post("/api/owner/verify", json={"password": "bad"}).status_code == 401
    assert other.post("/api/owner/verify", json={"password": "s3cret!pw"}).status_code == 200
    assert other.get("/api/payroll?month=2026-01").status_code == 200


def test_payroll_csv_download(client):
    alice = _staff_id(client, "Alice")
    client.patch(f"/api/staff/{alice}", json={"hourlyWageYen": 1200, "mealAllowanceYen": 500})
    client.put(
        f"/api/staff/{alice}/records/2026-01-05",
        json={"clockIn": "2026-01-05T09:00:00", "clockOut": "2026-01-05T18:00:00", "breakMinutes": 60, "mealCount": 1},
    )

    resp = client.get("/api/payroll.csv?month=2026-01&rounding=minute1")
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert resp.data.startswith(b"\xef\xbb\xbf")

    text = resp.data.decode("utf-8-sig")
    assert not text.endswith("\n")
    assert text.splitlines()[0].startswith("2026年01月,打刻,日付,1,2,")
    assert "9100" in text


def test_bad_rounding_rejected(client):
    assert client.get("/api/payroll?rounding=hourly").status_code == 400


def test_sign_in_switches_namespace(client):
    assert client.post("/api/accounts", json={"account_id": "shop", "password": "abcd"}).status_code == 201
    assert client.post("/api/session/sign-in", json={"account_id": "shop", "password": "nope"}).status_code == 401

    resp = client.post("/api/session/sign-in", json={"account_id": "shop", "password": "abcd"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["account_id"] == "shop"
    assert body["namespace"] != "default"

    # migrated from the default namespace on first sign-in
    assert len(client.get("/api/staff").get_json()) == 3

    out = client.post("/api/session/sign-out").get_json()
    assert out["namespace"] == "default"


def test_backup_then_restore(client):
    resp = client.post("/api/backup")
    assert resp.status_code == 200
    assert resp.get_json()["ok"] is True

    alice = _staff_id(client, "Alice")
    client.delete(f"/api/staff/{alice}")
    assert len(client.get("/api/staff").get_json()) == 2

    assert client.post("/api/restore").status_code == 200
    assert len(client.get("/api/staff").get_json()) == 3


def test_payroll_summary_names_rounding_mode(client):
    body = client.get("/api/payroll?month=2026-01&rounding=quarter15").get_json()
    assert body["rounding"] == "quarter15"
    assert body["rounding_label"] == "15分丸め"
    assert [line["name"] for line in body["lines"]] == ["Alice", "Bob", "Charlie"]


def test_storage_failure_is_a_json_error(app, client, monkeypatch):
    def broken_set(key, value):
        raise StoreError("database went away")

    monkeypatch.setattr(app.extensions["shopclock"].kv, "set", broken_set)

    resp = client.post("/api/accounts", json={"account_id": "shop", "password": "abcd"})
    assert resp.status_code == 503
    assert "error" in resp.get_json()
