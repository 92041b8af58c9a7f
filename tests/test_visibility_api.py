from bandsite.services.visibility import default_config, get_disabled_pages


def test_public_defaults(client):
    resp = client.get("/api/public/visibility")
    assert resp.json() == default_config()
    assert resp.headers["cache-control"] == "no-store, max-age=0"


def test_patch_single_path(admin):
    resp = admin.patch("/api/admin/visibility", json={"path": "pages.store", "value": False})
    assert resp.status_code == 200
    assert resp.json()["config"]["pages"]["store"] is False
    assert resp.json()["updatedAt"]

    public = admin.get("/api/public/visibility").json()
    assert public["pages"]["store"] is False
    assert get_disabled_pages(public) == ["/store"]


def test_patch_unknown_path_is_400(admin):
    resp = admin.patch("/api/admin/visibility", json={"path": "pages.backstage", "value": False})
    assert resp.status_code == 400
    assert "path" in resp.json()["errors"]


def test_put_full_tree(admin):
    config = default_config()
    config["sections"]["home"]["marquee"] = False
    resp = admin.put("/api/admin/visibility", json={"config": config})
    assert resp.status_code == 200

    stored = admin.get("/api/admin/content/visibility").json()["value"]
    assert stored["config"]["sections"]["home"]["marquee"] is False
    assert stored["updatedAt"]
    assert admin.get("/api/admin/visibility").json()["updatedAt"] == stored["updatedAt"]


def test_put_missing_group_is_400(admin):
    config = default_config()
    del config["elements"]
    resp = admin.put("/api/admin/visibility", json={"config": config})
    assert resp.status_code == 400
    assert "elements" in resp.json()["errors"]
    assert admin.get("/api/admin/content/visibility").json()["value"] is None
