"""Tests for version parsing and decoder dispatch."""

import pytest
from packaging.version import Version

from maasapi.errors import UnsupportedVersionError, is_unsupported_version_error
from maasapi.readers import read_zones
from maasapi.versions import VersionRegistry, format_version, parse_version


def make_registry():
    registry = VersionRegistry("widget")

    @registry.register("2.0")
    def widget_2_0(source, version):
        return "2.0"

    @registry.register("2.2")
    def widget_2_2(source, version):
        return "2.2"

    return registry


def test_parse_version():
    assert parse_version("2.0") == Version("2.0")
    assert parse_version("2.1.9") > parse_version("2.1")
    parsed = Version("2.0")
    assert parse_version(parsed) is parsed


@pytest.mark.parametrize("value", ["", "two.oh", "2.0-beta!"])
def test_parse_invalid_version(value):
    with pytest.raises(UnsupportedVersionError) as excinfo:
        parse_version(value)
    assert str(excinfo.value) == f"invalid API version {value!r}"
    assert excinfo.value.__cause__ is not None


def test_read_with_invalid_version():
    with pytest.raises(UnsupportedVersionError):
        read_zones("latest", [])


@pytest.mark.parametrize("value, expected", [
    ("1.9", "1.9.0"),
    ("2.0", "2.0.0"),
    ("2.1.9", "2.1.9"),
])
def test_format_version(value, expected):
    assert format_version(parse_version(value)) == expected


@pytest.mark.parametrize("target, expected", [
    ("2.0", "2.0"),
    ("2.0.0", "2.0"),
    ("2.1.9", "2.0"),
    ("2.2", "2.2"),
    ("3.5", "2.2"),
])
def test_resolve_picks_greatest_not_above_target(target, expected):
    decoder = make_registry().resolve(target)
    assert decoder(None, parse_version(target)) == expected


def test_resolve_below_every_version():
    with pytest.raises(UnsupportedVersionError) as excinfo:
        make_registry().resolve("1.9.0")
    assert str(excinfo.value) == "no widget read func for version 1.9.0"
    assert is_unsupported_version_error(excinfo.value)


def test_empty_registry_supports_nothing():
    with pytest.raises(UnsupportedVersionError):
        VersionRegistry("widget").resolve("2.0")


def test_registration_order_does_not_matter():
    registry = VersionRegistry("widget")
    registry.register("2.2")(lambda source, version: "2.2")
    registry.register("2.0")(lambda source, version: "2.0")
    assert registry.versions == [Version("2.0"), Version("2.2")]
    assert registry.resolve("2.1")(None, None) == "2.0"


def test_latest_registration_wins():
    registry = make_registry()
    registry.register("2.0")(lambda source, version: "replacement")
    assert len(registry) == 2
    assert "2.0" in registry
    assert registry.resolve("2.1")(None, None) == "replacement"
