"""Extended Kalman filter whose Jacobians come from forward-mode automatic differentiation."""

from __future__ import annotations

import math
import numbers
from typing import Any, Callable

import numpy as np


class _Jet:
    """A value together with its gradient with respect to the filter state."""

    __slots__ = ("a", "v")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, a: float, v: np.ndarray) -> None:
        self.a = float(a)
        self.v = np.asarray(v, dtype=float)

    def _lift(self, other: Any) -> _Jet | None:
        if isinstance(other, _Jet):
            return other
        if isinstance(other, numbers.Real):
            return _Jet(float(other), np.zeros_like(self.v))
        return None

    def __repr__(self) -> str:
        return f"_Jet({self.a!r}, {self.v!r})"

    # arithmetic

    def __add__(self, other: Any) -> _Jet:
        o = self._lift(other)
        if o is None:
            return NotImplemented
        return _Jet(self.a + o.a, self.v + o.v)

    __radd__ = __add__

    def __sub__(self, other: Any) -> _Jet:
        o = self._lift(other)
        if o is None:
            return NotImplemented
        return _Jet(self.a - o.a, self.v - o.v)

    def __rsub__(self, other: Any) -> _Jet:
        o = self._lift(other)
        if o is None:
            return NotImplemented
        return o - self

    def __mul__(self, other: Any) -> _Jet:
        o = self._lift(other)
        if o is None:
            return NotImplemented
        return _Jet(self.a * o.a, self.a * o.v + o.a * self.v)

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> _Jet:
        o = self._lift(other)
        if o is None:
            return NotImplemented
        return _Jet(self.a / o.a, (self.v * o.a - self.a * o.v) / (o.a * o.a))

    def __rtruediv__(self, other: Any) -> _Jet:
        o = self._lift(other)
        if o is None:
            return NotImplemented
        return o / self

    def __neg__(self) -> _Jet:
        return _Jet(-self.a, -self.v)

    def __pos__(self) -> _Jet:
        return self

    def __abs__(self) -> _Jet:
        return -self if self.a < 0 else self

    def __pow__(self, exponent: Any) -> _Jet:
        if isinstance(exponent, _Jet):
            return (exponent * self.log()).exp()
        if isinstance(exponent, numbers.Real):
            p = float(exponent)
            return _Jet(self.a**p, p * self.a ** (p - 1) * self.v)
        return NotImplemented

    def __rpow__(self, base: Any) -> _Jet:
        if not isinstance(base, numbers.Real):
            return NotImplemented
        value = float(base) ** self.a
        return _Jet(value, value * math.log(float(base)) * self.v)

    # comparisons act on the value, so models may branch

    @staticmethod
    def _value(other: Any) -> Any:
        return other.a if isinstance(other, _Jet) else other

    def __lt__(self, other: Any) -> bool:
        return self.a < self._value(other)

    def __le__(self, other: Any) -> bool:
        return self.a <= self._value(other)

    def __gt__(self, other: Any) -> bool:
        return self.a > self._value(other)

    def __ge__(self, other: Any) -> bool:
        return self.a >= self._value(other)

    def __eq__(self, other: object) -> bool:
        return self.a == self._value(other)

    # elementary functions, called by numpy ufuncs on object arrays

    def sin(self) -> _Jet:
        return _Jet(math.sin(self.a), math.cos(self.a) * self.v)

    def cos(self) -> _Jet:
        return _Jet(math.cos(self.a), -math.sin(self.a) * self.v)

    def tan(self) -> _Jet:
        t = math.tan(self.a)
        return _Jet(t, (1 + t * t) * self.v)

    def exp(self) -> _Jet:
        e = math.exp(self.a)
        return _Jet(e, e * self.v)

    def log(self) -> _Jet:
        return _Jet(math.log(self.a), self.v / self.a)

    def sqrt(self) -> _Jet:
        s = math.sqrt(self.a)
        return _Jet(s, self.v / (2 * s))

    def tanh(self) -> _Jet:
        t = math.tanh(self.a)
        return _Jet(t, (1 - t * t) * self.v)

    def arctan(self) -> _Jet:
        return _Jet(math.atan(self.a), self.v / (1 + self.a * self.a))

    def arcsin(self) -> _Jet:
        return _Jet(math.asin(self.a), self.v / math.sqrt(1 - self.a * self.a))

    def arccos(self) -> _Jet:
        return _Jet(math.acos(self.a), -self.v / math.sqrt(1 - self.a * self.a))

    def arctan2(self, other: Any) -> _Jet:
        x = self._lift(other)
        if x is None:
            return NotImplemented
        r2 = x.a * x.a + self.a * self.a
        return _Jet(math.atan2(self.a, x.a), (x.a * self.v - self.a * x.v) / r2)

    def __array_ufunc__(self, ufunc: np.ufunc, method: str, *inputs: Any, **kwargs: Any) -> Any:
        if method != "__call__" or kwargs.get("out") is not None:
            return NotImplemented
        wrapped = [np.asarray(i, dtype=object) if isinstance(i, _Jet) else i for i in inputs]
        result = ufunc(*wrapped, **kwargs)
        if isinstance(result, np.ndarray) and result.ndim == 0:
            return result[()]
        return result


def _linearize(outputs: Any, dims: int) -> tuple[np.ndarray, np.ndarray]:
    """Split model outputs into their values and the Jacobian with respect to the state."""
    elements = np.asarray(outputs, dtype=object).reshape(-1)
    values = []
    rows = []
    for element in elements:
        if isinstance(element, _Jet):
            values.append(element.a)
            rows.append(element.v)
        else:
            values.append(float(element))
            rows.append(np.zeros(dims))
    return np.array(values, dtype=float), np.array(rows, dtype=float).reshape(len(values), dims)


class ExtendedKalmanFilter:
    """Extended Kalman filter for a state of fixed dimension.

    Models are plain callables taking the state as a 1-d array and returning a
    sequence; they may use arithmetic and numpy functions such as ``np.sin``.
    """

    def __init__(self, x: Any, p: Any) -> None:
        self.reset(x, p)

    def reset(self, x: Any, p: Any) -> None:
        """Replace the state mean and covariance."""
        state = np.asarray(x, dtype=float).reshape(-1)
        covariance = np.asarray(p, dtype=float)
        if covariance.shape != (state.size, state.size):
            raise ValueError(
                f"covariance must be {state.size}x{state.size}, got shape {covariance.shape}"
            )
        self._x = state.copy()
        self._p = covariance.copy()

    def _seed(self) -> np.ndarray:
        dims = self._x.size
        return np.array(
            [_Jet(value, unit) for value, unit in zip(self._x, np.eye(dims))], dtype=object
        )

    def predict(self, transition_model: Callable[..., Any], q: Any, *args: Any) -> np.ndarray:
        """Propagate the state through ``transition_model(x, *args)`` and return it."""
        dims = self._x.size
        noise = np.asarray(q, dtype=float)
        if noise.shape != (dims, dims):
            raise ValueError(f"process noise must be {dims}x{dims}, got shape {noise.shape}")
        x_new, jacobian = _linearize(transition_model(self._seed(), *args), dims)
        if x_new.size != dims:
            raise ValueError(f"transition model returned {x_new.size} values, expected {dims}")
        self._x = x_new
        self._p = jacobian @ self._p @ jacobian.T + noise
        return self._x.copy()

    def update(self, measurement_model: Callable[[Any], Any], r: Any, z: Any) -> np.ndarray:
        """Correct the state with measurement ``z`` of noise covariance ``r`` and return it."""
        dims = self._x.size
        z_hat, h = _linearize(measurement_model(self._seed()), dims)
        measured = np.asarray(z, dtype=float).reshape(-1)
        noise = np.atleast_2d(np.asarray(r, dtype=float))
        size = z_hat.size
        if measured.size != size:
            raise ValueError(f"measurement has {measured.size} values, expected {size}")
        if noise.shape != (size, size):
            raise ValueError(f"measurement noise must be {size}x{size}, got shape {noise.shape}")
        innovation_cov = h @ self._p @ h.T + noise
        gain = self._p @ h.T @ np.linalg.inv(innovation_cov)
        self._x = self._x + gain @ (measured - z_hat)
        self._p = (np.eye(dims) - gain @ h) @ self._p
        return self._x.copy()

    def state(self) -> np.ndarray:
        return self._x.copy()

    def covariance(self) -> np.ndarray:
        return self._p.copy()