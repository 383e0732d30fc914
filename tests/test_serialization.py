"""Tests for camera (de)serialization."""

from __future__ import annotations

import json

import numpy as np
import pytest

from viewmath.camera import Camera3D
from viewmath.serialization import camera_from_dict, camera_to_dict
from viewmath.settings import Fit, ProjectionMode


def test_to_dict_is_json_ready() -> None:
    camera = Camera3D(fit=Fit.HEIGHT, near=0.5, far=250.0, field_of_view=40.0)
    data = json.loads(json.dumps(camera_to_dict(camera)))

    assert data == {
        "type": "perspective",
        "fit": "height",
        "near": 0.5,
        "far": 250.0,
        "field_of_view": 40.0,
        "position": [0.0, 0.0, 1.0],
    }


def test_round_trip_rebuilds_projection() -> None:
    source = Camera3D(mode=ProjectionMode.ORTHOGRAPHIC, fit=Fit.WIDTH, far=300.0)
    source.position = np.array([0.0, 0.0, 2.5])
    source.update_projection_matrix()

    camera = camera_from_dict(camera_to_dict(source))
    assert camera.is_orthographic
    assert camera.fit is Fit.WIDTH
    np.testing.assert_allclose(camera.position, [0.0, 0.0, 2.5])
    np.testing.assert_allclose(camera.projection_matrix, source.projection_matrix)


def test_from_dict_applies_only_present_keys() -> None:
    camera = Camera3D(near=0.2, far=90.0)
    before_fov = camera.field_of_view

    result = camera_from_dict({"far": 45.0}, camera)
    assert result is camera
    assert (camera.near, camera.far) == (0.2, 45.0)
    assert camera.field_of_view == before_fov
    assert camera.frustum.far == 45.0


def test_from_dict_field_of_view_updates_effective_fov() -> None:
    camera = Camera3D(fit=Fit.WIDTH)
    camera_from_dict({"field_of_view": 75.0}, camera)

    assert camera.fov == pytest.approx(75.0)


def test_from_dict_unknown_type_disables_camera() -> None:
    camera = Camera3D()
    before = camera.projection_matrix.copy()

    camera_from_dict({"type": "panoramic"}, camera)
    assert camera.mode is None
    np.testing.assert_array_equal(camera.projection_matrix, before)
