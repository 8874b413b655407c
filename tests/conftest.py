"""Shared fixtures for the maasapi test suite."""

import pytest


@pytest.fixture(params=["2.0", "2.1.9"])
def supported_version(request):
    """API versions that resolve to the 2.0 decoders."""
    return request.param


@pytest.fixture
def low_version():
    """API version older than every declared decoder."""
    return "1.9.0"
