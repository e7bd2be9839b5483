"""Concrete transform factory tests"""
import pytest

from datetime import datetime, timedelta

import numpy as np
import numpy.testing as npt

from frame_transforms.transformations.constant import ConstantTransformFactory
from frame_transforms.transformations.helmert import (
    HelmertTransformFactory, MILLIMETER, JULIAN_YEAR, MILLIARCSECOND)
from frame_transforms.transformations.rotating import (
    UniformRotationTransformFactory, EARTH_ROTATION_RATE)

from testing_utilities import random_uniform

__all__ = ['TestConstant', 'TestHelmert', 'TestUniformRotation']

AU = 149_597_870_700.0
T0 = datetime(2010, 1, 1, 12, 0, 0)

class TestConstant():
    def test_epoch_independent(self):
        f = ConstantTransformFactory(translation=[1.0, 2.0, 3.0], cost=7)
        assert f.transform(0.0).parameters.is_close(f.transform(1e6).parameters)
        assert f.cost(0.0) == 7

    def test_parameters_carry_requested_epoch(self):
        f = ConstantTransformFactory()
        assert f.transform(T0).parameters.epoch == T0

    def test_from_euler(self):
        f = ConstantTransformFactory.from_euler([1.0, 0.0, 0.0], [90.0, 0.0, 0.0])
        npt.assert_allclose(f.transform(0.0).transform_position([0.0, 0.0, 0.0]),
                            [0.0, 1.0, 0.0], atol=1e-12)

    def test_rates_are_nominal(self):
        f = ConstantTransformFactory(translation=[1.0, 0.0, 0.0], velocity=[2.0, 0.0, 0.0])

        npt.assert_allclose(f.calculate_parameters(10.0).translation, [1.0, 0.0, 0.0])
        npt.assert_allclose(f.transform(10.0).transform_velocity(np.zeros(3), np.zeros(3)),
                            [2.0, 0.0, 0.0])

class TestHelmert():
    def test_translation_only(self):
        f = HelmertTransformFactory(T0, [AU, 0.0, 0.0], 0.0, [0.0, 0.0, 0.0])
        t = f.transform(T0)

        npt.assert_allclose(t.transform_position([0.0, 0.0, 0.0]), [AU, 0.0, 0.0])
        npt.assert_allclose(t.inverse().transform_position([AU, 0.0, 0.0]), [0.0, 0.0, 0.0],
                            atol=1e-3)

    def test_linear_drift(self):
        f = HelmertTransformFactory(T0, [1.0, 0.0, 0.0], 0.0, [0.0, 0.0, 0.0],
                                    translation_rate=[0.5, 0.0, 0.0])
        p = f.calculate_parameters(T0 + timedelta(seconds=4))

        npt.assert_allclose(p.translation, [3.0, 0.0, 0.0])
        npt.assert_allclose(p.velocity, [0.5, 0.0, 0.0])

    def test_rotation_vector(self):
        f = HelmertTransformFactory(T0, [0.0, 0.0, 0.0], 0.0, [0.0, 0.0, np.pi/2])
        npt.assert_allclose(f.transform(T0).transform_position([1.0, 0.0, 0.0]),
                            [0.0, 1.0, 0.0], atol=1e-12)

    def test_rotation_rate_drift(self):
        f = HelmertTransformFactory(T0, [0.0, 0.0, 0.0], 0.0, [0.0, 0.0, 0.0],
                                    rotation_rate=[0.0, 0.0, 1e-3])
        p = f.calculate_parameters(T0 + timedelta(seconds=100))

        npt.assert_allclose(p.rotation.as_rotvec(), [0.0, 0.0, 0.1], atol=1e-12)
        npt.assert_allclose(p.rotation_rate, [0.0, 0.0, 1e-3])

    def test_parallel_drift_velocity_matches_finite_difference(self):
        """Exact rotation rate when the rotation vector drifts along itself"""
        f = HelmertTransformFactory(0.0, [1.0, 2.0, 3.0], 0.0, [0.0, 0.0, 0.3],
                                    translation_rate=[0.1, 0.0, 0.0],
                                    rotation_rate=[0.0, 0.0, 1e-3])
        r0, v = np.array([7e6, 1e5, 2e5]), np.array([10.0, 7.5e3, 100.0])
        h = 0.1

        def position(dt: float) -> np.ndarray:
            return f.transform(50.0 + dt).transform_position(r0 + v*(50.0 + dt))

        numeric = (position(h) - position(-h)) / (2*h)
        analytic = f.transform(50.0).transform_velocity(r0 + v*50.0, v)
        npt.assert_allclose(analytic, numeric, rtol=1e-7)

    def test_scale_is_reported_separately(self):
        f = HelmertTransformFactory(T0, [0.0, 0.0, 0.0], 1e-9, [0.0, 0.0, 0.0],
                                    scale_rate=1e-12)
        assert f.scale(T0 + timedelta(seconds=1000)) == pytest.approx(2e-9)
        npt.assert_allclose(f.transform(T0).transform_position([1.0, 0.0, 0.0]), [1.0, 0.0, 0.0])

    def test_iers_units(self):
        f = HelmertTransformFactory.from_iers_units(
            T0, [1.0, 2.0, 3.0], 1.0, [0.1, 0.2, 0.3],
            translation_rate=[0.1, 0.0, 0.0], scale_rate=0.1, rotation_rate=[0.0, 0.0, 0.01])

        npt.assert_allclose(f.translation, [1e-3, 2e-3, 3e-3])
        npt.assert_allclose(f.translation_rate, [0.1 * MILLIMETER / JULIAN_YEAR, 0.0, 0.0])
        npt.assert_allclose(f.rotation, np.array([0.1, 0.2, 0.3]) * MILLIARCSECOND)
        npt.assert_allclose(f.rotation_rate, [0.0, 0.0, 0.01 * MILLIARCSECOND / JULIAN_YEAR])
        assert f.scale0 == pytest.approx(1e-9)
        assert f.scale_rate == pytest.approx(1e-10 / JULIAN_YEAR)

    @pytest.mark.parametrize('seed', range(5))
    def test_round_trip(self, seed: int):
        np.random.seed(seed)
        f = HelmertTransformFactory(T0, random_uniform(1,3), 0.0, random_uniform(1e-6,3),
                                    random_uniform(1e-9,3), 0.0, random_uniform(1e-15,3))
        epoch = T0 + timedelta(days=3650)
        r, v = random_uniform(7e6,3), random_uniform(7e3,3)

        forward = f.transform(epoch)
        r0, v0 = f.inverse().transform(epoch).transform_pos_vel(*forward.transform_pos_vel(r, v))
        npt.assert_allclose(r0, r, atol=1e-6)
        npt.assert_allclose(v0, v, atol=1e-9)

    def test_vector_validation(self):
        with pytest.raises(ValueError):
            HelmertTransformFactory(T0, np.zeros((2, 3)), 0.0, [0.0, 0.0, 0.0])

class TestUniformRotation():
    def test_angle(self):
        f = UniformRotationTransformFactory(0.0, rate=0.1, angle=0.5)
        assert f.angle(10.0) == pytest.approx(1.5)

    def test_fixed_point_appears_to_rotate_backwards(self):
        f = UniformRotationTransformFactory(0.0, rate=np.pi/2)
        t = f.transform(1.0)

        npt.assert_allclose(t.transform_position([1.0, 0.0, 0.0]), [0.0, -1.0, 0.0], atol=1e-12)
        npt.assert_allclose(t.transform_velocity([1.0, 0.0, 0.0], [0.0, 0.0, 0.0]),
                            [-np.pi/2, 0.0, 0.0], atol=1e-12)

    def test_velocity_matches_finite_difference(self):
        """Transformed velocity equals the rate of change of transformed position"""
        f = UniformRotationTransformFactory(T0, angle=0.3)
        r0, v = np.array([7e6, 1e5, 2e5]), np.array([10.0, 7.5e3, 100.0])
        h, epoch = 1.0, T0 + timedelta(hours=2)

        def position(dt: float) -> np.ndarray:
            return f.transform(epoch + timedelta(seconds=dt)).transform_position(r0 + v*dt)

        numeric = (position(h) - position(-h)) / (2*h)
        npt.assert_allclose(f.transform(epoch).transform_velocity(r0, v), numeric, rtol=1e-7)

    def test_acceleration_matches_finite_difference(self):
        f = UniformRotationTransformFactory(0.0, rate=EARTH_ROTATION_RATE)
        r0, v = np.array([7e6, 0.0, 1e6]), np.array([0.0, 7.5e3, 0.0])
        h = 1.0

        def position(dt: float) -> np.ndarray:
            return f.transform(50.0 + dt).transform_position(r0 + v*(50.0 + dt))

        numeric = (position(h) - 2*position(0.0) + position(-h)) / h**2
        analytic = f.transform(50.0).transform_acceleration(r0 + v*50.0, v, np.zeros(3))
        npt.assert_allclose(analytic, numeric, atol=1e-5)

    def test_zero_axis_rejected(self):
        with pytest.raises(ValueError):
            UniformRotationTransformFactory(0.0, axis=(0, 0, 0))
