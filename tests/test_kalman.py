import math

import numpy as np
import pytest

from rmtoolkit.kalman import ExtendedKalmanFilter


class StateTransitionModel:
    def __init__(self, dt):
        self.dt = dt

    def __call__(self, x):
        return [x[0] + x[1] * self.dt, x[1]]


class MeasurementModel:
    def __call__(self, x):
        return [x[0]]


def test_multiple_iterations():
    rng = np.random.default_rng(7)
    x = np.array([0.0, 0.0])
    p = np.eye(2)
    q = np.diag([0.01, 0.01])
    kf = ExtendedKalmanFilter(x, p)
    for i in range(20):
        kf.predict(StateTransitionModel(1.0), q)
        z = np.array([i + 1 + rng.normal(0.0, 0.1)])
        r = np.array([[0.01]])
        x = kf.update(MeasurementModel(), r, z)
    assert x[0] == pytest.approx(20.0, abs=1.0)
    assert x[1] == pytest.approx(1.0, abs=0.1)


def test_predict_linear_model():
    kf = ExtendedKalmanFilter([1.0, 2.0], np.eye(2))
    x = kf.predict(StateTransitionModel(1.0), np.diag([0.01, 0.01]))
    assert np.allclose(x, [3.0, 2.0])
    assert np.allclose(kf.covariance(), [[2.01, 1.0], [1.0, 1.01]])


def test_predict_passes_controls():
    def model(x, dt):
        return [x[0] + x[1] * dt, x[1]]

    kf = ExtendedKalmanFilter([0.0, 4.0], np.eye(2))
    x = kf.predict(model, np.zeros((2, 2)), np.float64(0.5))
    assert np.allclose(x, [2.0, 4.0])
    assert np.allclose(kf.covariance(), [[1.25, 0.5], [0.5, 1.0]])


def test_nonlinear_jacobian():
    def model(x):
        return [np.sin(x[0]), x[1] * x[1]]

    kf = ExtendedKalmanFilter([0.5, 3.0], np.eye(2))
    x = kf.predict(model, np.zeros((2, 2)))
    assert np.allclose(x, [math.sin(0.5), 9.0])
    assert np.allclose(kf.covariance(), np.diag([math.cos(0.5) ** 2, 36.0]))


def test_division_and_power_jacobian():
    def model(x):
        return [x[0] / x[1], x[0] ** 2]

    kf = ExtendedKalmanFilter([2.0, 4.0], np.eye(2))
    x = kf.predict(model, np.zeros((2, 2)))
    assert np.allclose(x, [0.5, 4.0])
    cov = kf.covariance()
    assert cov[0, 0] == pytest.approx(0.078125)
    assert cov[1, 1] == pytest.approx(16.0)
    assert cov[0, 1] == pytest.approx(1.0)


def test_arctan2_jacobian():
    def model(x):
        return [np.arctan2(x[1], x[0]), x[1]]

    kf = ExtendedKalmanFilter([1.0, 1.0], np.eye(2))
    x = kf.predict(model, np.zeros((2, 2)))
    assert x[0] == pytest.approx(math.pi / 4)
    assert kf.covariance()[0, 0] == pytest.approx(0.5)


def test_update_scalar_measurement():
    kf = ExtendedKalmanFilter([0.0, 0.0], np.eye(2))
    x = kf.update(MeasurementModel(), [[1.0]], [2.0])
    assert np.allclose(x, [1.0, 0.0])
    assert np.allclose(kf.covariance(), [[0.5, 0.0], [0.0, 1.0]])


def test_update_reduces_uncertainty():
    kf = ExtendedKalmanFilter([0.0, 0.0], np.eye(2) * 4)
    before = kf.covariance()[0, 0]
    kf.update(MeasurementModel(), [[0.1]], [1.0])
    assert kf.covariance()[0, 0] < before


def test_reset():
    kf = ExtendedKalmanFilter([1.0, 1.0], np.eye(2))
    kf.predict(StateTransitionModel(1.0), np.eye(2))
    kf.reset([5.0, 6.0], np.eye(2) * 3)
    assert np.allclose(kf.state(), [5.0, 6.0])
    assert np.allclose(kf.covariance(), np.eye(2) * 3)


def test_state_is_a_copy():
    kf = ExtendedKalmanFilter([1.0, 2.0], np.eye(2))
    state = kf.state()
    state[0] = 100.0
    assert kf.state()[0] == 1.0


def test_bad_covariance_shape():
    with pytest.raises(ValueError):
        ExtendedKalmanFilter([1.0, 2.0], np.eye(3))


def test_bad_measurement_size():
    kf = ExtendedKalmanFilter([1.0, 2.0], np.eye(2))
    with pytest.raises(ValueError):
        kf.update(MeasurementModel(), [[1.0]], [1.0, 2.0])