"""Tests for MapImage calibration and loading."""

import logging

import pytest

from geoipmap.domain.errors import ConfigurationError
from geoipmap.mapping import MILLER_CALIBRATION, ROBINSON_CALIBRATION, MapImage


def test_miller_preset(miller_map):
    assert miller_map.calibration() == MILLER_CALIBRATION
    assert miller_map.projection.name == "Miller Cylindrical"


def test_robinson_preset(world_image):
    map_image = MapImage.robinson_world_map(world_image)
    assert map_image.calibration() == ROBINSON_CALIBRATION


def test_calibration_sets_changed_flag(miller_map):
    miller_map.reset_changed()
    assert not miller_map.has_changed()

    miller_map.set_scale(100.0, 100.0)
    assert miller_map.has_changed()

    miller_map.reset_changed()
    miller_map.set_origin_percentages(0.25, 0.75)
    assert miller_map.has_changed()


@pytest.mark.parametrize("origin", [(-0.1, 0.5), (0.5, 1.1)])
def test_origin_outside_unit_range_rejected(miller_map, origin):
    with pytest.raises(ValueError):
        miller_map.set_origin_percentages(*origin)


def test_load_unknown_kind(tmp_path, world_image):
    path = tmp_path / "world.png"
    world_image.save(path)
    with pytest.raises(ConfigurationError):
        MapImage.load(path, "mercator")


def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigurationError) as exc_info:
        MapImage.load(tmp_path / "missing.png")
    assert exc_info.value.setting_name == "map.image_path"


def test_load_applies_calibration(tmp_path, world_image):
    path = tmp_path / "world.png"
    world_image.save(path)
    map_image = MapImage.load(path, "robinson")
    assert map_image.width == 1000
    assert map_image.calibration() == ROBINSON_CALIBRATION


def test_calibration_changes_are_logged(miller_map, caplog):
    caplog.set_level(logging.DEBUG, logger="geoipmap.mapping.map_image")

    miller_map.set_scale(100.0, 120.0)
    miller_map.set_origin_percentages(0.4, 0.6)

    assert "Map scale changed" in caplog.messages
    assert "Map origin changed" in caplog.messages
