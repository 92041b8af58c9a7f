import pytest

from bandsite.core.errors import InvalidVisibilityPath, ValidationFailed
from bandsite.services.visibility import (
    coerce_visibility_config,
    default_config,
    get_config_value,
    get_disabled_pages,
    is_page_accessible,
    missing_groups,
    set_config_value,
)


def test_default_tree_is_all_visible():
    config = default_config()
    assert get_config_value(config, "pages.store") is True
    assert get_disabled_pages(config) == []


def test_get_falls_back_to_nearest_boolean_ancestor():
    config = default_config()
    config["pages"]["music"] = False
    assert get_config_value(config, "pages.music.anything.deeper") is False
    assert get_config_value(config, "pages.unknown") is True
    assert get_config_value(config, "nothing.here") is True


def test_set_returns_updated_copy():
    config = default_config()
    updated = set_config_value(config, "pages.store", False)
    assert updated["pages"]["store"] is False
    assert config["pages"]["store"] is True


def test_set_rejects_unknown_path():
    with pytest.raises(InvalidVisibilityPath):
        set_config_value(default_config(), "pages.nope", False)
    with pytest.raises(InvalidVisibilityPath):
        set_config_value(default_config(), "pages", False)


def test_set_rejects_non_boolean():
    with pytest.raises(ValidationFailed):
        set_config_value(default_config(), "pages.store", "no")


def test_coerce_drops_unknown_keys_and_bad_leaves():
    coerced = coerce_visibility_config({"pages": {"store": "yes", "music": False, "bogus": True}, "extra": {}})
    assert coerced["pages"]["store"] is True
    assert coerced["pages"]["music"] is False
    assert "bogus" not in coerced["pages"]
    assert "extra" not in coerced


def test_missing_groups():
    assert missing_groups({"pages": {}, "navigation": {}}) == ["sections", "elements"]
    assert missing_groups(None) == ["pages", "navigation", "sections", "elements"]


def test_page_hidden_by_header_link():
    config = default_config()
    config["navigation"]["header"]["links"]["shows"] = False
    assert is_page_accessible(config, "shows") is False
    # 헤더 링크만 꺼진 페이지는 404 대상이 아니다
    assert get_disabled_pages(config) == []
    config["pages"]["home"] = False
    config["pages"]["shows"] = False
    assert get_disabled_pages(config) == ["/", "/shows"]
