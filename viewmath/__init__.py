"""Camera projection and 2D affine transform math."""

from .camera import Camera3D
from .matrix2 import Matrix2, SingularMatrixError
from .projection import (
    Frustum,
    ProjectionError,
    ViewOffset,
    invert_projection,
    make_orthographic,
    make_perspective,
)
from .serialization import camera_from_dict, camera_to_dict
from .settings import (
    REFERENCE_SIZE,
    WORLD_UNIT_PIXELS,
    CameraSettings,
    CoordinateSystem,
    Fit,
    ProjectionMode,
)

__all__ = [
    "Camera3D",
    "CameraSettings",
    "CoordinateSystem",
    "Fit",
    "Frustum",
    "Matrix2",
    "ProjectionError",
    "ProjectionMode",
    "REFERENCE_SIZE",
    "SingularMatrixError",
    "ViewOffset",
    "WORLD_UNIT_PIXELS",
    "camera_from_dict",
    "camera_to_dict",
    "invert_projection",
    "make_orthographic",
    "make_perspective",
]
