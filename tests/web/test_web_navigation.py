from __future__ import annotations

import pytest

from src.bluemoon_portal.bluemoon_portal.auth.credentials import Credential, InMemoryCredentialStore
from src.bluemoon_portal.bluemoon_portal.container import build_container
from src.bluemoon_portal.bluemoon_portal.core.exceptions import ApiError
from src.bluemoon_portal.bluemoon_portal.main import create_app

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

PAYMENTS = [
    {
        "id": 5,
        "hoKhau": {"id": 1, "chuHo": "Lê A", "soHoKhau": "HK001"},
        "khoanThu": {"id": 2, "tenKhoanThu": "Phí vệ sinh", "soTien": 6000},
        "ngayNop": "2026-05-03",
        "tongTien": 6000,
        "soTien": 6000,
        "daXacNhan": True,
    },
]


class FakeClient:
    """Stands in for the REST server; ``fail`` makes every read fail."""

    def __init__(self, *, fail=False):
        self.fail = fail
        self.calls = []

    def get(self, path, *, params=None):
        self.calls.append(("GET", path, params))
        if self.fail:
            raise ApiError("Máy chủ trả về lỗi 503", status=503)
        if path.startswith("/payments"):
            return PAYMENTS
        return []

    def post(self, path, json=None, *, params=None):
        self.calls.append(("POST", path, json))
        if path == "/auth/login":
            return {"token": "h.p.s", "user": {"username": json["username"], "role": "ROLE_KE_TOAN"}}
        return json

    def put(self, path, json=None, *, params=None):
        self.calls.append(("PUT", path, json))
        return json

    def patch(self, path, json=None, *, params=None):
        self.calls.append(("PATCH", path, json))

    def delete(self, path, *, params=None):
        self.calls.append(("DELETE", path, params))


def make_app(monkeypatch, *, role=None, client=None):
    monkeypatch.setenv("APP_ENV", "testing")
    credential = Credential(token="h.p.s", user={"username": "u", "role": role}) if role else None
    container = build_container(
        api_base_url="http://bluemoon.test/api",
        store=InMemoryCredentialStore(credential),
        client=client or FakeClient(),
    )
    return create_app(container=container)


def test_unauthenticated_request_goes_to_login(monkeypatch):
    resp = make_app(monkeypatch).test_client().get("/households")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")


def test_login_page_renders_for_anonymous(monkeypatch):
    resp = make_app(monkeypatch).test_client().get("/login")

    assert resp.status_code == 200
    assert resp.get_json()["view"] == "login"


def test_login_lands_on_role_home(monkeypatch):
    app = make_app(monkeypatch)

    resp = app.test_client().post("/login", json={"username": "kt01", "password": "secret"})

    body = resp.get_json()
    assert body["success"] is True
    assert body["role"] == "KE_TOAN"
    assert body["redirect"] == "/fees"


@pytest.mark.parametrize(
    "role, path, target",
    [
        ("TO_TRUONG", "/dashboard", "/households"),
        ("KE_TOAN", "/dashboard", "/fees"),
        ("KE_TOAN", "/households", "/fees"),
        ("TO_TRUONG", "/payments", "/households"),
        ("USER", "/users", "/dashboard"),
        ("ADMIN", "/login", "/dashboard"),
    ],
)
def test_role_redirects(monkeypatch, role, path, target):
    resp = make_app(monkeypatch, role=role).test_client().get(path)

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith(target)


def test_failed_load_offers_retry(monkeypatch):
    resp = make_app(monkeypatch, role="ADMIN", client=FakeClient(fail=True)).test_client().get("/dashboard")

    assert resp.status_code == 502
    body = resp.get_json()
    assert body["items"] == []
    assert body["error"]["retry_url"] == "/dashboard"


def test_payments_list_carries_display_fields(monkeypatch):
    resp = make_app(monkeypatch, role="KE_TOAN").test_client().get("/payments")

    item = resp.get_json()["items"][0]
    assert item["householdOwnerName"] == "Lê A"
    assert item["feeName"] == "Phí vệ sinh"


def test_menu_for_accountant(monkeypatch):
    body = make_app(monkeypatch, role="KE_TOAN").test_client().get("/menu").get_json()

    assert [i["endpoint"] for i in body["items"]] == ["accountant_dashboard", "fees", "payments", "statistics"]
    assert body["role"] == "KE_TOAN"


def test_statistics_export_xlsx(monkeypatch):
    resp = make_app(monkeypatch, role="KE_TOAN").test_client().get(
        "/statistics/export?start=2026-05-01&end=2026-05-31"
    )

    assert resp.status_code == 200
    assert resp.mimetype == XLSX_MIMETYPE
    assert "bao_cao_nop_phi_20260501_20260531.xlsx" in resp.headers["Content-Disposition"]


def test_statistics_export_csv(monkeypatch):
    resp = make_app(monkeypatch, role="ADMIN").test_client().get(
        "/statistics/export?start=2026-05-01&end=2026-05-31&format=csv"
    )

    text = resp.data.decode("utf-8-sig")
    assert resp.mimetype == "text/csv"
    assert text.splitlines()[0].startswith("payment_date,payment_id,so_ho_khau")
    assert "Lê A" in text


def test_statistics_rejects_reversed_period(monkeypatch):
    resp = make_app(monkeypatch, role="ADMIN").test_client().get("/statistics?start=2026-05-31&end=2026-05-01")

    assert resp.status_code == 400
