from unittest.mock import AsyncMock, patch


MESSAGE = {
    "type": "booking",
    "name": "Venue Booker",
    "email": "booker@example.com",
    "subject": "Show in March",
    "message": "We would love to have you play our club in March.",
}


def _submit(client, **overrides):
    return client.post("/api/public/contact", json={**MESSAGE, **overrides})


def test_submit_contact_sends_notification(client):
    with patch("bandsite.api.messages.send_contact_notification", new=AsyncMock(return_value=True)) as notify:
        resp = _submit(client)
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["data"]["id"]
    notify.assert_awaited_once()
    assert notify.await_args.args[0]["type"] == "booking"


def test_submit_contact_survives_mail_failure(client):
    with patch("bandsite.api.messages.send_contact_notification", new=AsyncMock(return_value=False)):
        assert _submit(client).status_code == 201


def test_submit_contact_validation(client):
    resp = _submit(client, message="too short", type="fanmail")
    assert resp.status_code == 400
    errors = resp.json()["errors"]
    assert "message" in errors
    assert "type" in errors


def test_submit_contact_strips_tags(admin):
    _submit(admin, name="<b>Venue</b> Booker")
    data = admin.get("/api/admin/messages").json()["data"]
    assert data[0]["name"] == "Venue Booker"


def test_list_filters_and_unread_count(admin):
    _submit(admin)
    _submit(admin, type="press")
    _submit(admin, type="press")

    listing = admin.get("/api/admin/messages", params={"limit": 2}).json()
    assert listing["total"] == 3
    assert listing["totalPages"] == 2
    assert len(listing["data"]) == 2
    assert listing["unreadCount"] == 3

    press = admin.get("/api/admin/messages", params={"type": "press"}).json()
    assert press["total"] == 2


def test_status_update_and_stats(admin):
    message_id = _submit(admin).json()["data"]["id"]
    _submit(admin, type="merch")

    resp = admin.patch(f"/api/admin/messages/{message_id}", json={"status": "replied"})
    assert resp.json()["data"]["status"] == "replied"
    assert admin.patch(f"/api/admin/messages/{message_id}", json={"status": "spam"}).status_code == 400

    stats = admin.get("/api/admin/messages/stats").json()["data"]
    assert stats["total"] == 2
    assert stats["byStatus"] == {"replied": 1, "new": 1}
    assert stats["byType"] == {"booking": 1, "merch": 1}


def test_mark_read_and_delete(admin):
    first = _submit(admin).json()["data"]["id"]
    second = _submit(admin).json()["data"]["id"]

    resp = admin.post("/api/admin/messages/mark-read", json={"ids": [first, second, "not-a-uuid"]})
    assert resp.json() == {"success": True, "updated": 2}
    assert admin.get("/api/admin/messages").json()["unreadCount"] == 0

    assert admin.delete(f"/api/admin/messages/{first}").json() == {"success": True}
    assert admin.get(f"/api/admin/messages/{first}").status_code == 404
    assert admin.get(f"/api/admin/messages/{second}").json()["data"]["status"] == "read"


def test_unknown_message_is_404(admin):
    assert admin.get("/api/admin/messages/00000000-0000-0000-0000-000000000000").status_code == 404
    assert admin.delete("/api/admin/messages/garbage").status_code == 404
