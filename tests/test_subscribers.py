def test_subscribe_flow(admin):
    resp = admin.post("/api/public/subscribe", json={"email": "Fan@Example.com", "name": "Fan"})
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["email"] == "fan@example.com"
    assert data["preferences"]["newsletter"] is True
    assert data["source"] == "website"

    assert admin.post("/api/public/subscribe", json={"email": "fan@example.com"}).status_code == 409

    unsub = admin.request("DELETE", "/api/public/subscribe", json={"email": "fan@example.com"})
    assert unsub.status_code == 200

    again = admin.post(
        "/api/public/subscribe",
        json={"email": "fan@example.com", "preferences": {"merchDrops": False}},
    )
    assert again.status_code == 200
    assert again.json()["data"]["isActive"] is True
    assert again.json()["data"]["preferences"]["merchDrops"] is False


def test_unsubscribe_unknown_email(client):
    resp = client.request("DELETE", "/api/public/subscribe", json={"email": "ghost@example.com"})
    assert resp.status_code == 404


def test_subscribe_invalid_email(client):
    resp = client.post("/api/public/subscribe", json={"email": "not-an-email"})
    assert resp.status_code == 400
    assert "email" in resp.json()["errors"]


def test_admin_list_stats_delete(admin):
    admin.post("/api/public/subscribe", json={"email": "a@example.com", "source": "show"})
    admin.post("/api/public/subscribe", json={"email": "b@example.com", "source": "merch"})
    admin.post("/api/public/subscribe", json={"email": "c@example.com"})
    admin.request("DELETE", "/api/public/subscribe", json={"email": "c@example.com"})

    listing = admin.get("/api/admin/subscribers").json()
    assert listing["total"] == 3
    active = admin.get("/api/admin/subscribers", params={"active": "true"}).json()
    assert active["total"] == 2

    stats = admin.get("/api/admin/subscribers/stats").json()["data"]
    assert stats["total"] == 3
    assert stats["active"] == 2
    assert stats["inactive"] == 1
    assert stats["bySource"] == {"show": 1, "merch": 1}

    subscriber_id = listing["data"][0]["id"]
    assert admin.delete(f"/api/admin/subscribers/{subscriber_id}").json() == {"success": True}
    assert admin.delete(f"/api/admin/subscribers/{subscriber_id}").status_code == 404
