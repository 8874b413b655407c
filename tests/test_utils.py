"""Tests for the helper functions."""

import pytest

from maasapi.utils import format_bytes, join_urls


@pytest.mark.parametrize("parts, expected", [
    (("http://maas/MAAS", "api", "2.0"), "http://maas/MAAS/api/2.0/"),
    (("http://maas/MAAS/", "/api/", "2.0/"), "http://maas/MAAS/api/2.0/"),
    (("http://maas/MAAS", ""), "http://maas/MAAS/"),
])
def test_join_urls(parts, expected):
    assert join_urls(*parts) == expected


@pytest.mark.parametrize("value, expected", [
    (None, "N/A"),
    (512, "512.00 B"),
    (8589934592, "8.00 GB"),
])
def test_format_bytes(value, expected):
    assert format_bytes(value) == expected
