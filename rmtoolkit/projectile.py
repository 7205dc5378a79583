"""Projectile motion solvers that find the launch angle to hit a target."""

from __future__ import annotations

import abc
import math
from typing import Callable

GRAVITY = 9.7913

_MAX_ANGLE = math.radians(80)
_MAX_FLIGHT_TIME = 10.0
_CONVERGED_HEIGHT = 0.001
_MAX_HEIGHT_ERROR = 0.01

# (angle in rad, horizontal distance in m) -> (height in m, flight time in s)
ForwardMotion = Callable[[float, float], "tuple[float, float]"]


class ProjectileError(Exception):
    """Raised when no launch angle can be found for a target."""


class ProjectileSolver(abc.ABC):
    """Finds the launch angle that reaches a target in the horizontal frame."""

    @abc.abstractmethod
    def solve(self, target_x: float, target_h: float) -> float:
        """Return the launch angle (rad); raise ProjectileError on failure."""


class IterativeProjectileTool:
    """Inverts a forward motion model numerically by correcting the aimed height."""

    def __init__(self, forward_motion: ForwardMotion, max_iter: int = 20) -> None:
        self.forward_motion = forward_motion
        self.max_iter = max_iter

    def solve(self, target_x: float, target_h: float) -> float:
        aimed_h = target_h
        dh = 0.0
        angle = 0.0
        for _ in range(self.max_iter):
            angle = math.atan2(aimed_h, target_x)
            if not -_MAX_ANGLE <= angle <= _MAX_ANGLE:
                raise ProjectileError("iterative angle is out of range(-80d,80d)")
            h, t = self.forward_motion(angle, target_x)
            if t > _MAX_FLIGHT_TIME:
                raise ProjectileError(f"motion time({t:.6f}) is too long")
            dh = target_h - h
            aimed_h += dh
            if abs(dh) < _CONVERGED_HEIGHT:
                break
        if abs(dh) > _MAX_HEIGHT_ERROR:
            raise ProjectileError(f"height error({dh:.6f}) is too large")
        return angle


def _exp(value: float) -> float:
    try:
        return math.exp(value)
    except OverflowError:
        return math.inf


class GravityProjectileSolver(ProjectileSolver):
    """Parabolic trajectory under gravity only."""

    def __init__(self, initial_vel: float) -> None:
        self.initial_vel = initial_vel
        self.iterative_tool = IterativeProjectileTool(self.forward_motion, max_iter=20)

    def forward_motion(self, angle: float, x: float) -> tuple[float, float]:
        t = x / (self.initial_vel * math.cos(angle))
        h = self.initial_vel * math.sin(angle) * t - GRAVITY * t * t / 2
        return h, t

    def solve(self, target_x: float, target_h: float) -> float:
        return self.iterative_tool.solve(target_x, target_h)


class GafProjectileSolver(ProjectileSolver):
    """Trajectory under gravity with horizontal air friction in the descending phase."""

    def __init__(self, initial_vel: float, friction_coeff: float) -> None:
        if friction_coeff == 0:
            raise ValueError("friction_coeff must be non-zero")
        self.initial_vel = initial_vel
        self.friction_coeff = friction_coeff
        self.iterative_tool = IterativeProjectileTool(self.forward_motion, max_iter=100)

    def forward_motion(self, angle: float, x: float) -> tuple[float, float]:
        v = self.initial_vel
        k = self.friction_coeff
        if angle > 0.01:
            # Rising phase up to the apex.
            t0 = v * math.sin(angle) / GRAVITY
            x0 = v * math.cos(angle) * t0
            y0 = GRAVITY * t0 * t0 / 2
            if x < x0:
                t = x / (v * math.cos(angle))
                h = v * math.sin(angle) * t - GRAVITY * t * t / 2
                return h, t
            t1 = (_exp(k * (x - x0)) - 1) / (k * v * math.cos(angle))
            return y0 - GRAVITY * t1 * t1 / 2, t0 + t1
        t = (_exp(k * x) - 1) / (k * v * math.cos(angle))
        h = v * math.sin(angle) * t - GRAVITY * t * t / 2
        return h, t

    def solve(self, target_x: float, target_h: float) -> float:
        return self.iterative_tool.solve(target_x, target_h)