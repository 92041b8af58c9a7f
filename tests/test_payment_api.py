STRIPE = {"publishableKey": "pk_test_abc123", "secretKey": "sk_test_supersecret", "mode": "test"}


def test_public_view_before_configuration(client):
    assert client.get("/api/public/payment-config").json() == {"configured": False, "activeProvider": None}


def test_save_masks_and_encrypts(admin):
    resp = admin.put("/api/admin/payment-config", json={"activeProvider": "stripe", "stripe": STRIPE})
    assert resp.status_code == 200
    masked = resp.json()["config"]["stripe"]
    assert masked["secretKey"].startswith("sk_test")
    assert "supersecret" not in masked["secretKey"]
    assert masked["isConfigured"] is True

    raw = admin.get("/api/admin/content/payment_config").json()["value"]
    assert raw["stripe"]["secretKey"].startswith("enc:")

    assert admin.get("/api/public/payment-config").json() == {"configured": True, "activeProvider": "stripe"}


def test_masked_value_round_trip_keeps_secret(admin):
    admin.put("/api/admin/payment-config", json={"activeProvider": "stripe", "stripe": STRIPE})
    before = admin.get("/api/admin/content/payment_config").json()["value"]["stripe"]["secretKey"]

    view = admin.get("/api/admin/payment-config").json()["config"]
    admin.put("/api/admin/payment-config", json=view)
    after = admin.get("/api/admin/content/payment_config").json()["value"]["stripe"]["secretKey"]
    assert after == before


def test_provider_check(admin):
    admin.put("/api/admin/payment-config", json={"activeProvider": "stripe", "stripe": STRIPE})
    assert admin.post("/api/admin/payment-config/test", json={"provider": "stripe"}).json()["success"] is True
    result = admin.post("/api/admin/payment-config/test", json={"provider": "paypal"}).json()
    assert result == {"success": False, "message": "Missing client ID or client secret"}
