"""
도메인별 관리자/공개 엔드포인트
"""


def _release(**overrides):
    release = {
        "title": "Squirrelcore Vol. 1",
        "type": "ep",
        "releaseDate": "2024-10-31",
        "slug": "vol-1",
        "tracks": [{"title": "Hail Squatan", "duration": "3:12", "audioUrl": "/uploads/a.mp3", "lyrics": "nuts"}],
    }
    release.update(overrides)
    return release


def _show(**overrides):
    show = {"date": "2025-03-01", "venue": {"name": "The Burrow", "city": "Orlando", "state": "FL"}}
    show.update(overrides)
    return show


def _product(**overrides):
    product = {
        "name": "Squatan Tee",
        "slug": "squatan-tee",
        "category": "apparel",
        "variants": [{"name": "M", "price": 2500, "stock": 5}],
    }
    product.update(overrides)
    return product


def test_about_public_defaults(client):
    resp = client.get("/api/public/about")
    assert resp.status_code == 200
    body = resp.json()
    assert body["members"] == []
    assert "Slayer" in body["influences"]
    assert resp.headers["cache-control"].startswith("no-store")


def test_about_member_actions(admin):
    added = admin.put(
        "/api/admin/about",
        json={"action": "addMember", "member": {"name": "Nutsy", "role": "Drums"}},
    ).json()
    assert added["id"]

    updated = {**added, "role": "Vocals"}
    assert admin.put("/api/admin/about", json={"action": "updateMember", "member": updated}).json()["role"] == "Vocals"

    missing = admin.put(
        "/api/admin/about",
        json={"action": "updateMember", "member": {"id": "nope", "name": "X", "role": "Y"}},
    )
    assert missing.status_code == 404

    admin.put("/api/admin/about", json={"action": "deleteMember", "memberId": added["id"]})
    assert admin.get("/api/admin/about").json()["members"] == []


def test_about_full_update_keeps_other_fields(admin):
    admin.put("/api/admin/about", json={"influences": ["Slayer"], "bio": ["one"]})
    doc = admin.put("/api/admin/about", json={"bio": ["two"], "members": [{"name": "A", "role": "Bass"}]}).json()
    assert doc["influences"] == ["Slayer"]
    assert doc["bio"] == ["two"]
    assert doc["members"][0]["id"]


def test_homepage_replaces_sent_sections_only(admin):
    default = admin.get("/api/public/homepage").json()
    assert default["hero"]["title"] == "UNHOLY RODENTS"

    admin.put("/api/admin/homepage", json={"featuredShow": {"enabled": False, "showId": "s1"}})
    doc = admin.get("/api/public/homepage").json()
    assert doc["featuredShow"] == {"enabled": False, "showId": "s1"}
    assert doc["hero"] == default["hero"]


def test_media_add_and_delete(admin):
    resp = admin.post("/api/admin/media", json={"item": {"url": "/uploads/media/1.jpg"}, "type": "photos"})
    assert resp.status_code == 201
    item = resp.json()
    assert item["id"] and item["createdAt"]
    assert admin.get("/api/public/media").json()["photos"] == [item]

    assert admin.delete("/api/admin/media", params={"id": item["id"]}).status_code == 400
    assert admin.delete("/api/admin/media", params={"id": item["id"], "type": "photos"}).json() == {"success": True}
    assert admin.get("/api/public/media").json()["photos"] == []


def test_media_rejects_unknown_type(admin):
    resp = admin.post("/api/admin/media", json={"item": {"url": "/x.jpg"}, "type": "posters"})
    assert resp.status_code == 400


def test_music_public_redaction(admin):
    admin.post("/api/admin/music", json=_release(slug="open"))
    admin.post("/api/admin/music", json=_release(slug="hidden", visibility="unlisted"))
    admin.post("/api/admin/music", json=_release(slug="secret", visibility="private", password="acorns"))

    listed = admin.get("/api/public/music").json()["releases"]
    assert [r["slug"] for r in listed] == ["open", "secret"]
    assert all("password" not in r for r in listed)
    assert listed[1]["requiresPassword"] is True
    assert listed[1]["tracks"] == [{"title": "Hail Squatan", "duration": "3:12"}]

    unlocked = admin.get("/api/public/music/releases", params={"slug": "secret", "password": "acorns"}).json()
    assert unlocked["release"]["tracks"][0]["audioUrl"] == "/uploads/a.mp3"
    assert "password" not in unlocked["release"]

    assert admin.get("/api/public/music/releases", params={"slug": "hidden"}).status_code == 200
    assert admin.get("/api/public/music/releases", params={"slug": "missing"}).status_code == 404
    assert admin.get("/api/public/music/releases").status_code == 400

    # 관리자 조회는 비밀번호를 포함한다
    admin_releases = admin.get("/api/admin/music").json()["releases"]
    assert admin_releases[2]["password"] == "acorns"


def test_music_update_and_platforms(admin):
    created = admin.post("/api/admin/music", json=_release()).json()
    resp = admin.put("/api/admin/music", json={**_release(title="Renamed"), "id": created["id"]})
    assert resp.status_code == 200
    assert admin.get("/api/admin/music").json()["releases"][0]["title"] == "Renamed"

    assert admin.put("/api/admin/music", json={**_release(), "id": "missing"}).status_code == 404
    assert admin.post("/api/admin/music", json=_release()).status_code == 400

    platforms = {"streamingPlatforms": [{"name": "Spotify", "url": "https://open.spotify.com/x"}]}
    admin.put("/api/admin/music", json=platforms)
    assert admin.get("/api/public/music").json()["streamingPlatforms"][0]["name"] == "Spotify"

    admin.delete("/api/admin/music", params={"id": created["id"]})
    assert admin.get("/api/admin/music").json()["releases"] == []


def test_music_validation(admin):
    resp = admin.post("/api/admin/music", json=_release(type="cassette"))
    assert resp.status_code == 400
    assert "type" in resp.json()["errors"]


def test_shows_crud(admin):
    created = admin.post("/api/admin/shows", json={"show": _show(), "type": "upcoming"})
    assert created.status_code == 201
    show = created.json()

    public = admin.get("/api/public/shows").json()
    assert public == {"upcoming": [show], "past": []}

    edited = {**show, "doorsTime": "7PM"}
    assert admin.put("/api/admin/shows", json={"show": edited, "type": "upcoming"}).json()["doorsTime"] == "7PM"
    assert admin.put("/api/admin/shows", json={"show": edited, "type": "past"}).status_code == 404

    admin.delete("/api/admin/shows", params={"id": show["id"], "type": "upcoming"})
    assert admin.get("/api/public/shows").json()["upcoming"] == []


def test_show_ticket_url_must_be_http(admin):
    resp = admin.post("/api/admin/shows", json={"show": _show(ticketUrl="javascript:alert(1)"), "type": "upcoming"})
    assert resp.status_code == 400
    assert "show.ticketUrl" in resp.json()["errors"]


def test_products_crud_and_shipping_rates(admin):
    public = admin.get("/api/public/products").json()
    assert public["products"] == []
    assert public["shippingRates"]["standard"]["price"] == 599

    product = admin.post("/api/admin/products", json=_product()).json()
    assert product["id"]
    assert product["variants"][0]["id"]

    updated = admin.put("/api/admin/products", json={**product, "name": "Squatan Tee v2"})
    assert updated.json()["name"] == "Squatan Tee v2"
    assert admin.put("/api/admin/products", json={**product, "id": "missing"}).status_code == 404

    rates = {
        "standard": {"name": "Ground", "price": 500, "estimatedDays": "5 days"},
        "express": {"name": "Air", "price": 1500, "estimatedDays": "2 days"},
        "freeShippingThreshold": 10000,
    }
    assert admin.put("/api/admin/products/shipping-rates", json=rates).json() == rates
    assert admin.get("/api/public/products").json()["shippingRates"] == rates

    admin.delete("/api/admin/products", params={"id": product["id"]})
    assert admin.get("/api/public/products").json()["products"] == []


def test_product_validation(admin):
    resp = admin.post("/api/admin/products", json=_product(variants=[]))
    assert resp.status_code == 400
    resp = admin.post("/api/admin/products", json=_product(variants=[{"name": "M", "price": 0, "stock": 1}]))
    assert resp.status_code == 400
    assert "variants.0.price" in resp.json()["errors"]


def test_socials_and_site_config(admin):
    socials = admin.get("/api/public/socials").json()
    assert socials["instagram"] == ""
    assert set(socials) == {"instagram", "facebook", "youtube", "spotify", "tiktok", "twitter", "bandcamp"}

    admin.put("/api/admin/socials", json={"instagram": "https://instagram.com/unholyrodents"})
    assert admin.get("/api/public/socials").json()["instagram"] == "https://instagram.com/unholyrodents"

    assert admin.get("/api/public/site-config").json() == {"ogImage": ""}
    admin.put("/api/admin/site-config", json={"ogImage": "/uploads/media/og.png", "theme": "dark"})
    assert admin.get("/api/public/site-config").json() == {"ogImage": "/uploads/media/og.png", "theme": "dark"}
