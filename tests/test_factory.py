"""Transform and factory tests"""
import pytest

import numpy as np
import numpy.testing as npt
import scipy.spatial.transform as sptl

from frame_transforms.config import DEFAULT_COSTS
from frame_transforms.errors import UnsupportedTransformOperation
from frame_transforms.factory import (
    InverseKinematicTransformFactory, CompositeTransformFactory, IdentityTransformFactory,
    compose_factories)
from frame_transforms.state import CartesianState
from frame_transforms.transform import KinematicTransform, CompositeTransform
from frame_transforms.transformations.constant import ConstantTransformFactory
from frame_transforms.transformations.function import FunctionTransformFactory

from testing_utilities import random_uniform, random_rotation, random_state

__all__ = ['TestInverseFactory', 'TestCompositeFactory', 'TestCompositeTransform']

EPOCH = 100.0

def random_constant_factory(cost: float = DEFAULT_COSTS.constant) -> ConstantTransformFactory:
    """Generates a constant factory with every term populated"""
    return ConstantTransformFactory(
        translation=random_uniform(1e3,3), rotation=random_rotation(),
        velocity=random_uniform(10,3), rotation_rate=random_uniform(1e-2,3),
        acceleration=random_uniform(1,3), rotation_acceleration=random_uniform(1e-3,3),
        cost=cost)

def scaling_factory(factor: float) -> FunctionTransformFactory:
    """Non-rigid factory scaling positions and velocities"""
    return FunctionTransformFactory(
        lambda epoch, r: factor * r, lambda epoch, r: r / factor,
        lambda epoch, r, v: factor * v, lambda epoch, r, v: v / factor)

class TestInverseFactory():
    def test_inverse_of_inverse_is_original(self):
        A = random_constant_factory()
        assert A.inverse().inverse() is A

    def test_inverse_is_cached(self):
        A = random_constant_factory()
        assert A.inverse() is A.inverse()
        assert isinstance(A.inverse(), InverseKinematicTransformFactory)

    def test_inverse_costs_more(self):
        A = random_constant_factory(cost=5)
        assert A.inverse().cost(EPOCH) == 5 + DEFAULT_COSTS.inverse_overhead
        assert A.inverse().cost(EPOCH) > A.cost(EPOCH)

    @pytest.mark.parametrize('seed', range(5))
    def test_round_trip(self, seed: int):
        """Inverse transform applied after the forward transform restores the state

        :param seed: Random seed
        :type seed: int
        """
        np.random.seed(seed)
        A = random_constant_factory()
        r, v, a = random_state()

        forward = A.transform(EPOCH)
        backward = A.inverse().transform(EPOCH)
        for expected, actual in zip((r, v, a), backward.transform(*forward.transform(r, v, a))):
            npt.assert_allclose(actual, expected, rtol=1e-9, atol=1e-6)

    def test_transform_inverse_matches_inverse_factory(self):
        np.random.seed(7)
        A = random_constant_factory()

        t = A.transform(EPOCH).inverse()
        assert t.factory is A.inverse()
        assert t.parameters.is_close(A.inverse().transform(EPOCH).parameters)

    def test_double_inverse_parameters(self):
        np.random.seed(8)
        A = random_constant_factory()
        twice = InverseKinematicTransformFactory(InverseKinematicTransformFactory(A))
        assert twice.transform(EPOCH).parameters.is_close(A.transform(EPOCH).parameters)

class TestCompositeFactory():
    def test_cost_is_sum(self):
        A, B = random_constant_factory(cost=3), random_constant_factory(cost=4)
        assert CompositeTransformFactory(A, B).cost(EPOCH) == 7
        assert (A + B).cost(EPOCH) == 7

    def test_transform_matches_transform_add(self):
        np.random.seed(11)
        A, B = random_constant_factory(), random_constant_factory()

        fused = CompositeTransformFactory(A, B).transform(EPOCH)
        added = A.transform(EPOCH).add(B.transform(EPOCH))

        assert isinstance(fused, KinematicTransform)
        assert fused.parameters.is_close(added.parameters)

    def test_associativity(self):
        np.random.seed(12)
        A, B, C = (random_constant_factory() for _ in range(3))

        left = ((A + B) + C).transform(EPOCH).parameters
        right = (A + (B + C)).transform(EPOCH).parameters
        assert left.is_close(right, atol=1e-6)

    def test_inverse_reverses_chain(self):
        np.random.seed(13)
        A, B = random_constant_factory(), random_constant_factory()
        C = CompositeTransformFactory(A, B)

        assert C.inverse().inverse() is C
        assert C.inverse().first is B.inverse()
        assert C.inverse().second is A.inverse()
        assert (C + C.inverse()).transform(EPOCH).parameters.is_identity(atol=1e-6)

    def test_empty_chain_is_identity(self):
        factory = compose_factories([])
        assert isinstance(factory, IdentityTransformFactory)
        assert factory.inverse() is factory
        assert factory.cost(EPOCH) == 0

        r, v, a = random_state()
        for expected, actual in zip((r, v, a), factory.transform(EPOCH).transform(r, v, a)):
            npt.assert_allclose(actual, expected)

    def test_single_factory_chain(self):
        A = random_constant_factory()
        assert compose_factories([A]) is A

    def test_transform_epoch(self):
        A, B = random_constant_factory(), random_constant_factory()
        t = (A + B).transform(EPOCH)
        assert t.epoch == EPOCH
        assert t.parameters.epoch == EPOCH

    def test_mismatched_epochs(self):
        A, B = random_constant_factory(), random_constant_factory()
        with pytest.raises(ValueError):
            A.transform(1.0).add(B.transform(2.0))

class TestCompositeTransform():
    def test_function_leg_produces_sequential_transform(self):
        np.random.seed(21)
        A = random_constant_factory()
        S = scaling_factory(2.0)
        r, v, _ = random_state()

        t = (A + S).transform(EPOCH)
        assert isinstance(t, CompositeTransform)

        npt.assert_allclose(t.transform_position(r), 2.0 * A.transform(EPOCH).transform_position(r))
        npt.assert_allclose(t.transform_velocity(r, v),
                            2.0 * A.transform(EPOCH).transform_velocity(r, v))

    def test_function_round_trip(self):
        np.random.seed(22)
        A = random_constant_factory()
        C = A + scaling_factory(3.0)
        r, v, _ = random_state()

        r1, v1 = C.transform(EPOCH).transform_pos_vel(r, v)
        r0, v0 = C.inverse().transform(EPOCH).transform_pos_vel(r1, v1)
        npt.assert_allclose(r0, r, rtol=1e-9, atol=1e-6)
        npt.assert_allclose(v0, v, rtol=1e-9, atol=1e-6)

        back = C.transform(EPOCH).inverse().transform_position(r1)
        npt.assert_allclose(back, r, rtol=1e-9, atol=1e-6)

    def test_function_inverse_identity_law(self):
        S = scaling_factory(2.0)
        assert S.inverse().inverse() is S

    def test_unsupported_operations(self):
        S = FunctionTransformFactory(lambda epoch, r: r, lambda epoch, r: r)
        t = S.transform(EPOCH)

        with pytest.raises(UnsupportedTransformOperation):
            t.transform_orientation(sptl.Rotation.identity())
        with pytest.raises(UnsupportedTransformOperation):
            t.transform_orientation_rate(np.zeros(3))
        with pytest.raises(UnsupportedTransformOperation):
            t.transform_orientation_acceleration(np.zeros(3), np.zeros(3))
        with pytest.raises(UnsupportedTransformOperation):
            t.transform_velocity(np.zeros(3), np.zeros(3))
        with pytest.raises(UnsupportedTransformOperation):
            t.transform_acceleration(np.zeros(3), np.zeros(3), np.zeros(3))

    def test_unsupported_propagates_through_chain(self):
        A = random_constant_factory()
        t = (A + scaling_factory(2.0)).transform(EPOCH)
        with pytest.raises(UnsupportedTransformOperation):
            t.transform_orientation(sptl.Rotation.identity())

    def test_unsupported_is_not_implemented_error(self):
        t = scaling_factory(2.0).transform(EPOCH)
        with pytest.raises(NotImplementedError):
            t.transform_orientation(sptl.Rotation.identity())

class TestStateTransform():
    def test_cartesian_state(self):
        np.random.seed(31)
        A = random_constant_factory()
        r, v, a = random_state()
        t = A.transform(EPOCH)

        out = t.transform_state(CartesianState(r, v, epoch=EPOCH))
        npt.assert_allclose(out.position, t.transform_position(r))
        npt.assert_allclose(out.velocity, t.transform_velocity(r, v))
        assert out.acceleration is None
        assert out.epoch == EPOCH

        out = t.transform_state(CartesianState(r, v, a))
        npt.assert_allclose(out.acceleration, t.transform_acceleration(r, v, a))

    def test_state_vector_layout(self):
        state = CartesianState.from_vector(np.arange(9.0))
        npt.assert_allclose(state.position, [0, 1, 2])
        npt.assert_allclose(state.acceleration, [6, 7, 8])
        npt.assert_allclose(state.to_vector(), np.arange(9.0))

        with pytest.raises(ValueError):
            CartesianState.from_vector(np.arange(5.0))
