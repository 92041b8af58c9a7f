import pytest

from bandsite.core.errors import NotFoundError
from bandsite.services.releases import find_release_by_slug, public_release_list, redact_release


PRIVATE = {
    "id": "r1",
    "title": "Demo Tape",
    "slug": "demo-tape",
    "visibility": "private",
    "password": "acorns",
    "tracks": [{"title": "Nut Grinder", "duration": "2:31", "audioUrl": "/a.mp3", "lyrics": "..."}],
}
PUBLIC = {"id": "r2", "title": "Hail", "slug": "hail", "visibility": "public", "tracks": []}
UNLISTED = {"id": "r3", "title": "B-Sides", "slug": "b-sides", "visibility": "unlisted", "password": "x"}


@pytest.mark.parametrize("password", [None, "", "wrong"])
def test_private_release_without_password_hides_tracks(password):
    redacted = redact_release(PRIVATE, password)
    assert "password" not in redacted
    assert redacted["requiresPassword"] is True
    assert redacted["tracks"] == [{"title": "Nut Grinder", "duration": "2:31"}]


def test_private_release_with_password_returns_full_tracks():
    redacted = redact_release(PRIVATE, "acorns")
    assert "password" not in redacted
    assert "requiresPassword" not in redacted
    assert redacted["tracks"][0]["audioUrl"] == "/a.mp3"
    assert redacted["tracks"][0]["lyrics"] == "..."


def test_redaction_does_not_touch_stored_release():
    redact_release(PRIVATE, None)
    assert PRIVATE["password"] == "acorns"
    assert "audioUrl" in PRIVATE["tracks"][0]


def test_public_list_skips_unlisted_and_strips_passwords():
    listed = public_release_list([PRIVATE, PUBLIC, UNLISTED])
    assert [r["id"] for r in listed] == ["r1", "r2"]
    assert all("password" not in r for r in listed)


def test_find_by_slug():
    assert find_release_by_slug([PUBLIC, UNLISTED], "b-sides")["id"] == "r3"
    with pytest.raises(NotFoundError):
        find_release_by_slug([PUBLIC], "missing")
