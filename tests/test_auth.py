import pytest
from starlette.requests import Request

from bandsite.core.security import create_session_token, is_authenticated, revoke_session, verify_session_token
from tests.conftest import ADMIN_PASSWORD, ADMIN_USERNAME, login


ADMIN_WRITES = [
    ("put", "/api/admin/content/about", {"value": {"members": []}}),
    ("patch", "/api/admin/content/about", {"bio": ["x"]}),
    ("put", "/api/admin/about", {"bio": ["x"]}),
    ("post", "/api/admin/media", {"item": {"url": "/x.jpg"}, "type": "photos"}),
    ("put", "/api/admin/socials", {"instagram": "https://instagram.com/x"}),
    ("put", "/api/admin/orders", {"id": "1", "status": "shipped"}),
]


def test_login_sets_session_cookie(client):
    resp = client.post("/api/admin/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert "admin_session" in resp.cookies

    session = client.get("/api/admin/session").json()
    assert session["authenticated"] is True
    assert session["expiresAt"]


def test_login_rejects_bad_credentials(client):
    resp = client.post("/api/admin/login", json={"username": ADMIN_USERNAME, "password": "nope"})
    assert resp.status_code == 401
    assert client.get("/api/admin/session").json() == {"authenticated": False, "expiresAt": None}


def test_login_missing_fields_is_400(client):
    resp = client.post("/api/admin/login", json={"username": ADMIN_USERNAME})
    assert resp.status_code == 400
    assert "password" in resp.json()["errors"]


@pytest.mark.parametrize("method, url, body", ADMIN_WRITES)
def test_admin_writes_require_session(client, method, url, body):
    resp = getattr(client, method)(url, json=body)
    assert resp.status_code == 401
    assert client.get("/api/public/content/about").json() is None


def test_admin_reads_require_session(client):
    assert client.get("/api/admin/content/about").status_code == 401
    assert client.get("/api/admin/messages").status_code == 401
    assert client.get("/api/admin/payment-config").status_code == 401


def test_logout_revokes_session(client):
    login(client)
    token = client.cookies.get("admin_session")
    assert client.get("/api/admin/content/about").status_code == 200

    assert client.post("/api/admin/logout").json() == {"success": True}
    # 로그아웃한 토큰을 다시 보내도 거절된다
    client.cookies.clear()
    resp = client.get("/api/admin/content/about", headers={"Cookie": f"admin_session={token}"})
    assert resp.status_code == 401


def test_login_rate_limit(client):
    for _ in range(10):
        client.post("/api/admin/login", json={"username": ADMIN_USERNAME, "password": "nope"})
    resp = client.post("/api/admin/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert resp.status_code == 429


def _request(token=None):
    headers = [(b"cookie", f"admin_session={token}".encode())] if token else []
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


async def test_is_authenticated_checks_signature_and_revocation(fake_redis):
    token, _ = create_session_token()
    assert await is_authenticated(_request(token), fake_redis) is True
    assert await is_authenticated(_request(), fake_redis) is False
    assert await is_authenticated(_request(token + "x"), fake_redis) is False

    await revoke_session(fake_redis, verify_session_token(token))
    assert await is_authenticated(_request(token), fake_redis) is False
