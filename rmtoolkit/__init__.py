"""Robot toolkit: UDP and serial packet links, projectile aiming, Kalman filtering and geometry helpers."""

__version__ = "0.1.0"