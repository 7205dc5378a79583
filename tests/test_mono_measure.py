import math

import numpy as np
import pytest

from rmtoolkit.mono_measure import MonoMeasureTool

INTRINSIC = [100.0, 0.0, 50.0, 0.0, 100.0, 50.0, 0.0, 0.0, 1.0]
DISTORTION = [0.0, 0.0, 0.0, 0.0, 0.0]


@pytest.fixture
def tool():
    measure = MonoMeasureTool()
    measure.set_camera_info(INTRINSIC, DISTORTION)
    return measure


def test_set_camera_info_shapes(tool):
    assert tool.camera_intrinsic.shape == (3, 3)
    assert tool.camera_distortion.shape == (1, 5)
    assert np.array_equal(tool.camera_intrinsic.reshape(-1), INTRINSIC)


def test_set_camera_info_wrong_size():
    with pytest.raises(ValueError):
        MonoMeasureTool().set_camera_info(INTRINSIC[:8], DISTORTION)


def test_unproject_principal_point(tool):
    assert tool.unproject((50.0, 50.0), 3.0) == (0.0, 0.0, 3.0)


def test_unproject_value(tool):
    x, y, z = tool.unproject((150.0, 50.0), 2.0)
    assert x == pytest.approx(2.0)
    assert y == 0.0
    assert z == 2.0


def test_unproject_scales_with_distance(tool):
    near = tool.unproject((80.0, 20.0), 1.0)
    far = tool.unproject((80.0, 20.0), 4.0)
    assert far == pytest.approx(tuple(4 * c for c in near))


def test_view_angle_principal_point(tool):
    assert tool.calc_view_angle((50.0, 50.0)) == (0.0, 0.0)


def test_view_angle_value(tool):
    pitch, yaw = tool.calc_view_angle((150.0, 50.0))
    assert yaw == pytest.approx(math.pi / 4)
    assert pitch == 0.0


def test_view_angle_matches_unprojected_ray(tool):
    point = (73.0, 12.0)
    x, y, z = tool.unproject(point, 5.0)
    pitch, yaw = tool.calc_view_angle(point)
    assert pitch == pytest.approx(math.atan2(y, z))
    assert yaw == pytest.approx(math.atan2(x, z))


def test_requires_camera_info():
    with pytest.raises(RuntimeError):
        MonoMeasureTool().unproject((1.0, 2.0), 1.0)
    with pytest.raises(RuntimeError):
        MonoMeasureTool().calc_view_angle((1.0, 2.0))