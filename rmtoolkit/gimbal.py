"""Convert a target position in the gimbal frame into gimbal pitch and yaw."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from rmtoolkit.projectile import ProjectileSolver


class GimbalTransformTool:
    """Aims the gimbal at a point, optionally compensating for the projectile's drop.

    Without a projectile solver a straight-line model is used.
    """

    def __init__(self, solver: ProjectileSolver | None = None) -> None:
        self.solver = solver

    def solve(self, x: float, y: float, z: float) -> tuple[float, float]:
        """Return ``(pitch, yaw)`` in radians for a target at ``(x, y, z)`` metres.

        Raises ProjectileError when the projectile solver finds no angle.
        """
        if self.solver is None:
            pitch = -math.atan2(z, x)
        else:
            pitch = -self.solver.solve(x, z)
        yaw = math.atan2(y, x)
        return pitch, yaw

    def solve_point(self, position: Any) -> tuple[float, float]:
        """Like :meth:`solve`, for an object with ``x``, ``y``, ``z`` or a 3-sequence."""
        if all(hasattr(position, name) for name in ("x", "y", "z")):
            return self.solve(position.x, position.y, position.z)
        if isinstance(position, Sequence) and len(position) == 3:
            x, y, z = position
            return self.solve(x, y, z)
        raise TypeError("position must have x, y, z attributes or be a sequence of 3 numbers")