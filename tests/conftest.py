"""Shared fixtures for the geoipmap test suite."""

import logging
import os

import pytest
from PIL import Image

from geoipmap.config import reset_config
from geoipmap.container import reset_container
from geoipmap.domain.models import GeoLocation, StringSubject
from geoipmap.mapping import MapImage


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Isolate every test from GEOIPMAP_* variables and cached singletons."""
    for name in list(os.environ):
        if name.startswith("GEOIPMAP_"):
            monkeypatch.delenv(name, raising=False)
    reset_config()
    reset_container()
    yield
    reset_config()
    reset_container()
    package_logger = logging.getLogger("geoipmap")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def world_image():
    """A blank 1000x1000 stand-in for a world map raster."""
    return Image.new("RGB", (1000, 1000), (0, 0, 64))


@pytest.fixture
def miller_map(world_image):
    return MapImage.miller_world_map(world_image)


@pytest.fixture
def make_location():
    """Factory for valid locations of string subjects."""

    def _make(subject, latitude=0.0, longitude=0.0, **parameters):
        location = GeoLocation.of(StringSubject(subject), latitude, longitude)
        for key, value in parameters.items():
            location.set_parameter(key, value)
        return location

    return _make
