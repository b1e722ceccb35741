"""Tests for URL helpers."""

from vault_tasks.links import build_navigation_url, encode_uri_component, make_link_builder


def test_encode_keeps_unreserved_characters():
    assert encode_uri_component("AZaz09-_.!~*'()") == "AZaz09-_.!~*'()"


def test_encode_reserved_characters():
    assert encode_uri_component(":/?#[]@&=+$, ") == "%3A%2F%3F%23%5B%5D%40%26%3D%2B%24%2C%20"


def test_navigation_url():
    url = build_navigation_url("obsidian", "My Vault", "Daily/Today.md")
    assert url == "obsidian://open?vault=My%20Vault&file=Daily%2FToday.md"


def test_link_builder_adds_extension():
    build = make_link_builder("obsidian", "Work")
    assert build("Plan") == "obsidian://open?vault=Work&file=Plan.md"
    assert build("Plan.md") == "obsidian://open?vault=Work&file=Plan.md"
