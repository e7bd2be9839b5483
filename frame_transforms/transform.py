"""transform.py - Epoch Bound Frame Transforms"""
from __future__ import annotations

import typing as typ
import numpy.typing as npt
from abc import ABC, abstractmethod

import numpy as np

import scipy.spatial.transform as sptl

from frame_transforms.errors import UnsupportedTransformOperation
from frame_transforms.parameters import TransformationParameters
from frame_transforms.state import CartesianState, SupportsCartesian

if typ.TYPE_CHECKING:
    from frame_transforms.factory import TransformFactory

__all__ = ['ReferenceFrameTransform', 'KinematicTransform', 'CompositeTransform']

F0 = typ.TypeVar('F0')
F1 = typ.TypeVar('F1')
F2 = typ.TypeVar('F2')


class ReferenceFrameTransform(ABC, typ.Generic[F0, F1]):
    """Stateless mapping of kinematic values from frame :math:`F_0` to :math:`F_1`,
    valid at a single epoch.

    Operations a concrete transform cannot perform raise
    :class:`~frame_transforms.errors.UnsupportedTransformOperation`.

    :param factory: Factory that produced this transform
    :type factory: TransformFactory

    :param epoch: Epoch at which the transform is valid
    :type epoch: typing.Any
    """
    def __init__(self, factory: TransformFactory[F0, F1], epoch: typ.Any):
        self._factory = factory
        self._epoch = epoch

    @property
    def factory(self) -> TransformFactory[F0, F1]:
        """Factory able to produce this transform at other epochs"""
        return self._factory

    @property
    def epoch(self) -> typ.Any:
        """Epoch at which this transform is valid"""
        return self._epoch

    # Algebra
    @abstractmethod
    def inverse(self) -> ReferenceFrameTransform[F1, F0]:
        """Transform undoing this one at the same epoch"""

    def add(self, other: ReferenceFrameTransform[F1, F2]) -> ReferenceFrameTransform[F0, F2]:
        """Chains `other` after this transform

        :param other: Transform :math:`F_1 \\to F_2` valid at the same epoch
        :type other: ReferenceFrameTransform

        :raises ValueError: If the epochs differ

        :return: Transform :math:`F_0 \\to F_2`
        :rtype: ReferenceFrameTransform
        """
        from frame_transforms.factory import CompositeTransformFactory

        if self.epoch is not None and other.epoch is not None and bool(self.epoch != other.epoch):
            raise ValueError(f"Cannot chain transforms valid at {self.epoch} and {other.epoch}")

        return CompositeTransformFactory(self.factory, other.factory).combine(self, other)

    def __add__(self, other: ReferenceFrameTransform[F1, F2]) -> ReferenceFrameTransform[F0, F2]:
        return self.add(other)

    # Kinematics
    @abstractmethod
    def transform_position(self, position: npt.ArrayLike) -> np.ndarray:
        """Position [m] in :math:`F_1`"""

    @abstractmethod
    def transform_velocity(self, position: npt.ArrayLike, velocity: npt.ArrayLike) -> np.ndarray:
        """Velocity [m/s] in :math:`F_1`"""

    def transform_acceleration(self, position: npt.ArrayLike, velocity: npt.ArrayLike,
                               acceleration: npt.ArrayLike) -> np.ndarray:
        """Acceleration [m/s^2] in :math:`F_1`"""
        raise UnsupportedTransformOperation(self, 'transform_acceleration')

    def transform_pos_vel(self, position: npt.ArrayLike,
                          velocity: npt.ArrayLike) -> tuple[np.ndarray, np.ndarray]:
        """Position and velocity in :math:`F_1`"""
        return self.transform_position(position), self.transform_velocity(position, velocity)

    def transform(self, position: npt.ArrayLike, velocity: npt.ArrayLike,
                  acceleration: npt.ArrayLike) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Position, velocity and acceleration in :math:`F_1`"""
        return (self.transform_position(position),
                self.transform_velocity(position, velocity),
                self.transform_acceleration(position, velocity, acceleration))

    def transform_orientation(self, orientation: sptl.Rotation) -> sptl.Rotation:
        """Body attitude relative to :math:`F_1`"""
        raise UnsupportedTransformOperation(self, 'transform_orientation')

    def transform_orientation_rate(self, orientation_rate: npt.ArrayLike) -> np.ndarray:
        """Body angular velocity [rad/s] in :math:`F_1`"""
        raise UnsupportedTransformOperation(self, 'transform_orientation_rate')

    def transform_orientation_acceleration(self, orientation_rate: npt.ArrayLike,
                                           orientation_acceleration: npt.ArrayLike) -> np.ndarray:
        """Body angular acceleration [rad/s^2] in :math:`F_1`"""
        raise UnsupportedTransformOperation(self, 'transform_orientation_acceleration')

    def transform_state(self, state: SupportsCartesian) -> CartesianState:
        """Transforms any state exposing a Cartesian view

        Acceleration is carried over only when the state has one.

        :param state: State in :math:`F_0`
        :type state: SupportsCartesian

        :return: State in :math:`F_1`
        :rtype: CartesianState
        """
        cartesian = state.to_cartesian()
        if cartesian.acceleration is None:
            position, velocity = self.transform_pos_vel(cartesian.position, cartesian.velocity)
            return CartesianState(position, velocity, None, cartesian.epoch)

        return CartesianState(*self.transform(cartesian.position, cartesian.velocity,
                                              cartesian.acceleration), cartesian.epoch)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(epoch={self.epoch!r})"


class KinematicTransform(ReferenceFrameTransform[F0, F1]):
    """Rigid time-varying transform described by one
    :class:`~frame_transforms.parameters.TransformationParameters` set

    :param factory: Factory that produced this transform
    :type factory: TransformFactory

    :param epoch: Epoch at which the transform is valid
    :type epoch: typing.Any

    :param parameters: Transformation parameters
    :type parameters: TransformationParameters
    """
    def __init__(self, factory: TransformFactory[F0, F1], epoch: typ.Any,
                 parameters: TransformationParameters):
        super().__init__(factory, epoch)
        self._parameters = parameters

    @property
    def parameters(self) -> TransformationParameters:
        return self._parameters

    def inverse(self) -> KinematicTransform[F1, F0]:
        return KinematicTransform(self.factory.inverse(), self.epoch, self.parameters.inverse())

    def transform_position(self, position: npt.ArrayLike) -> np.ndarray:
        return self.parameters.transform_position(position)

    def transform_velocity(self, position: npt.ArrayLike, velocity: npt.ArrayLike) -> np.ndarray:
        return self.parameters.transform_velocity(position, velocity)

    def transform_acceleration(self, position: npt.ArrayLike, velocity: npt.ArrayLike,
                               acceleration: npt.ArrayLike) -> np.ndarray:
        return self.parameters.transform_acceleration(position, velocity, acceleration)

    def transform_pos_vel(self, position: npt.ArrayLike,
                          velocity: npt.ArrayLike) -> tuple[np.ndarray, np.ndarray]:
        return (self.parameters.transform_position(position),
                self.parameters.transform_velocity(position, velocity))

    def transform(self, position: npt.ArrayLike, velocity: npt.ArrayLike,
                  acceleration: npt.ArrayLike) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        return self.parameters.transform(position, velocity, acceleration)

    def transform_orientation(self, orientation: sptl.Rotation) -> sptl.Rotation:
        return self.parameters.transform_orientation(orientation)

    def transform_orientation_rate(self, orientation_rate: npt.ArrayLike) -> np.ndarray:
        return self.parameters.transform_orientation_rate(orientation_rate)

    def transform_orientation_acceleration(self, orientation_rate: npt.ArrayLike,
                                           orientation_acceleration: npt.ArrayLike) -> np.ndarray:
        return self.parameters.transform_orientation_acceleration(orientation_rate,
                                                                  orientation_acceleration)

    def transform_covariance(self, covariance: npt.ArrayLike) -> np.ndarray:
        """See :meth:`TransformationParameters.transform_covariance`"""
        return self.parameters.transform_covariance(covariance)


class CompositeTransform(ReferenceFrameTransform[F0, F2]):
    """Sequential application of two transforms, used when either leg has no
    parametric form

    :param factory: Composite factory that produced this transform
    :type factory: TransformFactory

    :param epoch: Epoch at which the transform is valid
    :type epoch: typing.Any

    :param first: Transform :math:`F_0 \\to F_1`
    :type first: ReferenceFrameTransform

    :param second: Transform :math:`F_1 \\to F_2`
    :type second: ReferenceFrameTransform
    """
    def __init__(self, factory: TransformFactory[F0, F2], epoch: typ.Any,
                 first: ReferenceFrameTransform[F0, F1],
                 second: ReferenceFrameTransform[F1, F2]):
        super().__init__(factory, epoch)
        self.first = first
        self.second = second

    def inverse(self) -> CompositeTransform[F2, F0]:
        return CompositeTransform(self.factory.inverse(), self.epoch,
                                  self.second.inverse(), self.first.inverse())

    def transform_position(self, position: npt.ArrayLike) -> np.ndarray:
        return self.second.transform_position(self.first.transform_position(position))

    def transform_velocity(self, position: npt.ArrayLike, velocity: npt.ArrayLike) -> np.ndarray:
        return self.transform_pos_vel(position, velocity)[1]

    def transform_acceleration(self, position: npt.ArrayLike, velocity: npt.ArrayLike,
                               acceleration: npt.ArrayLike) -> np.ndarray:
        return self.transform(position, velocity, acceleration)[2]

    def transform_pos_vel(self, position: npt.ArrayLike,
                          velocity: npt.ArrayLike) -> tuple[np.ndarray, np.ndarray]:
        return self.second.transform_pos_vel(*self.first.transform_pos_vel(position, velocity))

    def transform(self, position: npt.ArrayLike, velocity: npt.ArrayLike,
                  acceleration: npt.ArrayLike) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        return self.second.transform(*self.first.transform(position, velocity, acceleration))

    def transform_orientation(self, orientation: sptl.Rotation) -> sptl.Rotation:
        return self.second.transform_orientation(self.first.transform_orientation(orientation))

    def transform_orientation_rate(self, orientation_rate: npt.ArrayLike) -> np.ndarray:
        return self.second.transform_orientation_rate(
            self.first.transform_orientation_rate(orientation_rate))

    def transform_orientation_acceleration(self, orientation_rate: npt.ArrayLike,
                                           orientation_acceleration: npt.ArrayLike) -> np.ndarray:
        return self.second.transform_orientation_acceleration(
            self.first.transform_orientation_rate(orientation_rate),
            self.first.transform_orientation_acceleration(orientation_rate,
                                                          orientation_acceleration))
