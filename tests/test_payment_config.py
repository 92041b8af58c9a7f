from bandsite.services import payment_config


def test_mask_secret():
    assert payment_config.mask_secret("short") == "••••••••"
    assert payment_config.mask_secret("sk_test_abcdef") == "sk_test" + "•" * 7
    assert payment_config.mask_secret("x" * 100) == "x" * 7 + "•" * 20


def test_encrypt_round_trip():
    token = payment_config.encrypt("sk_test_secret")
    assert token.startswith("enc:")
    assert "sk_test_secret" not in token
    assert payment_config.decrypt(token) == "sk_test_secret"
    assert payment_config.decrypt("plain") == "plain"


def test_merge_encrypts_and_marks_configured():
    incoming = {
        "activeProvider": "stripe",
        "stripe": {"publishableKey": "pk_test_123", "secretKey": "sk_test_456", "mode": "test"},
    }
    merged = payment_config.merge_incoming(incoming, payment_config.normalize(None))
    assert merged["stripe"]["secretKey"].startswith("enc:")
    assert merged["stripe"]["isConfigured"] is True
    assert merged["square"]["isConfigured"] is False
    assert payment_config.public_view(merged) == {"configured": True, "activeProvider": "stripe"}


def test_masked_value_keeps_existing_secret():
    existing = payment_config.merge_incoming(
        {"stripe": {"publishableKey": "pk_test_123", "secretKey": "sk_test_456"}},
        payment_config.normalize(None),
    )
    view = payment_config.masked_view(existing)
    assert "••" in view["stripe"]["secretKey"]

    merged = payment_config.merge_incoming({"stripe": view["stripe"]}, existing)
    assert merged["stripe"]["secretKey"] == existing["stripe"]["secretKey"]
    assert payment_config.decrypt(merged["stripe"]["secretKey"]) == "sk_test_456"


def test_public_view_hides_unconfigured_provider():
    config = payment_config.normalize({"activeProvider": "paypal"})
    assert payment_config.public_view(config) == {"configured": False, "activeProvider": None}


def test_check_provider():
    config = payment_config.merge_incoming(
        {"stripe": {"publishableKey": "pk_live_1", "secretKey": "sk_live_2", "mode": "test"}},
        payment_config.normalize(None),
    )
    result = payment_config.check_provider(config, "stripe")
    assert result["success"] is False
    assert "sk_test_" in result["message"]

    assert payment_config.check_provider(config, "square")["success"] is False
