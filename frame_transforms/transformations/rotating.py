"""rotating.py - Uniformly Rotating Frames"""
from __future__ import annotations

import typing as typ
import numpy.typing as npt

import numpy as np

import scipy.spatial.transform as sptl

from frame_transforms.config import DEFAULT_COSTS
from frame_transforms.factory import KinematicTransformFactory
from frame_transforms.parameters import TransformationParameters
from frame_transforms.utilities import as_vector, seconds_between

__all__ = ['UniformRotationTransformFactory', 'EARTH_ROTATION_RATE']

EARTH_ROTATION_RATE = 7.2921150e-5      # [rad/s]


class UniformRotationTransformFactory(KinematicTransformFactory):
    """Transform from a frame to one spinning about a fixed axis at constant rate

    The destination frame is rotated by :math:`\\theta(t) = \\theta_0 + \\Omega (t - t_0)`
    about `axis` with respect to the source frame, e.g. inertial to Earth fixed
    with :math:`\\theta_0` the sidereal angle at :math:`t_0`.

    :param epoch: Reference epoch :math:`t_0`
    :type epoch: typing.Any

    :param rate: Spin rate :math:`\\Omega` [rad/s], defaults to EARTH_ROTATION_RATE
    :type rate: float, optional

    :param angle: Rotation angle :math:`\\theta_0` at the reference epoch [rad], defaults to 0
    :type angle: float, optional

    :param axis: Spin axis in the source frame, defaults to :math:`(0,0,1)`
    :type axis: numpy.typing.ArrayLike, optional

    :param translation: Fixed translation applied before the rotation [m], defaults to zero
    :type translation: numpy.typing.ArrayLike | None, optional

    :param cost: Ranking cost, defaults to :code:`DEFAULT_COSTS.uniform_rotation`
    :type cost: float, optional
    """
    def __init__(self, epoch: typ.Any, rate: float = EARTH_ROTATION_RATE, angle: float = 0.0,
                 axis: npt.ArrayLike = (0, 0, 1), translation: npt.ArrayLike | None = None,
                 cost: float = DEFAULT_COSTS.uniform_rotation):
        """Initialize UniformRotationTransformFactory"""
        axis = np.asarray(axis, dtype=np.double)
        if axis.shape != (3,) or np.linalg.norm(axis) == 0:
            raise ValueError('Spin axis must be a non-zero vector')

        self.epoch = epoch
        self.rate = float(rate)
        self.angle0 = float(angle)
        self.axis = as_vector(axis / np.linalg.norm(axis), 'axis')
        self.translation = translation
        self._cost = cost

    def cost(self, epoch: typ.Any) -> float:
        return self._cost

    def angle(self, epoch: typ.Any) -> float:
        """Rotation angle :math:`\\theta` at `epoch` [rad]"""
        return self.angle0 + self.rate * seconds_between(epoch, self.epoch)

    def calculate_parameters(self, epoch: typ.Any) -> TransformationParameters:
        # Coordinates in the spinning frame rotate opposite to the frame itself
        R = sptl.Rotation.from_rotvec(-self.angle(epoch) * self.axis)
        return TransformationParameters(epoch, translation=self.translation, rotation=R,
                                        rotation_rate=-self.rate * self.axis)

    def __repr__(self) -> str:
        return f"UniformRotation(rate={self.rate})"
