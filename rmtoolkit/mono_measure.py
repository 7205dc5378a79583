"""Position measurement with a single calibrated camera."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np


class MonoMeasureTool:
    """Maps image points to camera-frame geometry using the pinhole intrinsics."""

    def __init__(self) -> None:
        self.camera_intrinsic: np.ndarray | None = None
        self.camera_distortion: np.ndarray | None = None

    def set_camera_info(
        self, camera_intrinsic: Sequence[float], camera_distortion: Sequence[float]
    ) -> None:
        """Set the 3x3 intrinsic matrix (flattened by rows) and distortion coefficients."""
        intrinsic = np.asarray(camera_intrinsic, dtype=float).reshape(-1)
        if intrinsic.size != 9:
            raise ValueError("camera intrinsic must have 9 values (3x3)")
        self.camera_intrinsic = intrinsic.reshape(3, 3)
        self.camera_distortion = np.asarray(camera_distortion, dtype=float).reshape(1, -1)

    def _principal(self) -> tuple[float, float, float, float]:
        if self.camera_intrinsic is None:
            raise RuntimeError("camera info is not set")
        k = self.camera_intrinsic
        return k[0, 0], k[0, 2], k[1, 1], k[1, 2]

    def unproject(self, point: Sequence[float], distance: float) -> tuple[float, float, float]:
        """Camera-frame point at depth ``distance`` seen at image point ``point``.

        The result has the unit of ``distance``.
        """
        fx, u0, fy, v0 = self._principal()
        u, v = point
        return (u - u0) * distance / fx, (v - v0) * distance / fy, float(distance)

    def calc_view_angle(self, point: Sequence[float]) -> tuple[float, float]:
        """Return ``(pitch, yaw)`` in radians of the ray through an image point."""
        fx, u0, fy, v0 = self._principal()
        u, v = point
        return math.atan2(v - v0, fy), math.atan2(u - u0, fx)