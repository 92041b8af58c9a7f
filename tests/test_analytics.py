from unittest.mock import AsyncMock, patch

from sqlalchemy.exc import OperationalError


def test_record_and_count_plays(client):
    for _ in range(2):
        resp = client.post(
            "/api/public/analytics/play",
            json={"trackId": "t1", "trackName": "Hail Squatan", "releaseId": "r1", "releaseName": "Vol. 1"},
        )
        assert resp.json() == {"success": True}
    client.post("/api/public/analytics/play", json={"trackId": "t2", "trackName": "Stay Nuts"})

    counts = client.get("/api/public/analytics/plays").json()["data"]
    assert counts["tracks"] == {"t1": 2, "t2": 1}
    assert counts["releases"] == {"r1": 2}


def test_pageview_requires_path(client):
    resp = client.post("/api/public/analytics/pageview", json={"referrer": "https://google.com"})
    assert resp.status_code == 400
    assert "path" in resp.json()["errors"]


def test_pageview_storage_failure_still_succeeds(client):
    failure = OperationalError("INSERT", {}, Exception("disk full"))
    with patch("bandsite.services.analytics_service.record_pageview", new=AsyncMock(side_effect=failure)):
        resp = client.post("/api/public/analytics/pageview", json={"path": "/shows"})
    assert resp.status_code == 200
    assert resp.json() == {"success": True}


def test_admin_reports(admin):
    admin.post("/api/public/analytics/pageview", json={"path": "/", "sessionId": "s1"})
    admin.post("/api/public/analytics/pageview", json={"path": "/shows", "sessionId": "s1", "referrer": "https://x.com"})
    admin.post("/api/public/analytics/pageview", json={"path": "/", "sessionId": "s2"})
    admin.post("/api/public/analytics/play", json={"trackId": "t1", "trackName": "Hail Squatan"})

    overview = admin.get("/api/admin/analytics/overview", params={"days": 7}).json()["data"]
    assert overview["totalPageViews"] == 3
    assert overview["totalPlays"] == 1
    assert overview["uniqueVisitors"] == 2
    assert overview["period"] == 7

    pageviews = admin.get("/api/admin/analytics/pageviews").json()["data"]
    assert pageviews["topPages"][0] == {"path": "/", "views": 2}
    assert pageviews["topReferrers"] == [{"referrer": "https://x.com", "views": 1}]
    assert sum(day["views"] for day in pageviews["daily"]) == 3

    plays = admin.get("/api/admin/analytics/plays").json()["data"]
    assert plays["topTracks"] == [{"trackId": "t1", "trackName": "Hail Squatan", "plays": 1}]

    realtime = admin.get("/api/admin/analytics/realtime").json()["data"]
    assert realtime["activeVisitors"] == 2
    assert realtime["lastHourViews"] == 3
    assert realtime["recentPlays"][0]["trackName"] == "Hail Squatan"


def test_admin_reports_reject_bad_days(admin):
    assert admin.get("/api/admin/analytics/overview", params={"days": 0}).status_code == 400
