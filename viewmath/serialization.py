"""Plain-data (de)serialization of camera parameters."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import numpy as np

from .camera import Camera3D
from .settings import Fit, ProjectionMode


def camera_to_dict(camera: Camera3D) -> Dict[str, Any]:
    return {
        "type": camera.mode.value if camera.mode is not None else None,
        "fit": camera.fit.value,
        "near": camera.near,
        "far": camera.far,
        "field_of_view": camera.field_of_view,
        "position": camera.position.tolist(),
    }


def camera_from_dict(data: Mapping[str, Any], camera: Optional[Camera3D] = None) -> Camera3D:
    """
    Apply serialized fields onto ``camera`` (a new one if omitted).

    Only keys present in ``data`` are applied. The projection matrix is
    rebuilt afterwards, so the camera is usable straight away.
    """
    if camera is None:
        camera = Camera3D(mode=data.get("type", ProjectionMode.PERSPECTIVE))
    elif "type" in data:
        camera.mode = ProjectionMode.parse(data["type"])

    if data.get("fit") is not None:
        camera.fit = Fit(data["fit"])
    if data.get("near") is not None:
        camera.near = float(data["near"])
    if data.get("far") is not None:
        camera.far = float(data["far"])
    if data.get("field_of_view") is not None:
        camera.field_of_view = float(data["field_of_view"])
    if data.get("position") is not None:
        camera.position = np.array(data["position"], dtype=np.float64).reshape(3)

    # fit and field_of_view feed the derived frustum bounds
    camera.set_size(camera.last_width, camera.last_height)
    return camera
