from bandsite.main import app
from bandsite.services.content_store import RemoteContentStore, get_content_store


def test_unreachable_backend_is_502(client):
    # 닫힌 포트: 연결 거부
    app.dependency_overrides[get_content_store] = lambda: RemoteContentStore(
        "http://127.0.0.1:9", timeout_seconds=2.0
    )
    resp = client.get("/api/public/content/about")
    assert resp.status_code == 502
    assert resp.json() == {"detail": "Content backend unavailable"}

    resp = client.get("/api/public/music")
    assert resp.status_code == 502


def test_root(client):
    body = client.get("/").json()
    assert body["status"] == "running"
