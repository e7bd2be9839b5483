"""constant.py - Epoch Independent Transforms"""
from __future__ import annotations

import typing as typ
import numpy.typing as npt

import scipy.spatial.transform as sptl

from frame_transforms.config import DEFAULT_COSTS
from frame_transforms.factory import KinematicTransformFactory
from frame_transforms.geometry import euler_rotation
from frame_transforms.parameters import TransformationParameters

__all__ = ['ConstantTransformFactory']


class ConstantTransformFactory(KinematicTransformFactory):
    """Factory returning the same rigid parameters at every epoch

    Rates are nominal: translation and rotation are not integrated over time,
    so a nonzero `velocity` or `rotation_rate` describes the relative motion
    at the instant only and is not the derivative of the transformed position
    across epochs.

    :param translation: Translation [m], defaults to zero
    :type translation: numpy.typing.ArrayLike | None, optional

    :param rotation: Rotation, defaults to identity
    :type rotation: scipy.spatial.transform.Rotation | numpy.typing.ArrayLike | None, optional

    :param velocity: Translation rate [m/s], defaults to zero
    :type velocity: numpy.typing.ArrayLike | None, optional

    :param rotation_rate: Rotation rate [rad/s], defaults to zero
    :type rotation_rate: numpy.typing.ArrayLike | None, optional

    :param acceleration: Translation acceleration [m/s^2], defaults to zero
    :type acceleration: numpy.typing.ArrayLike | None, optional

    :param rotation_acceleration: Rotation acceleration [rad/s^2], defaults to zero
    :type rotation_acceleration: numpy.typing.ArrayLike | None, optional

    :param cost: Ranking cost, defaults to :code:`DEFAULT_COSTS.constant`
    :type cost: float, optional
    """
    def __init__(self,
                 translation  : npt.ArrayLike | None = None,
                 rotation     : sptl.Rotation | npt.ArrayLike | None = None,
                 velocity     : npt.ArrayLike | None = None,
                 rotation_rate: npt.ArrayLike | None = None,
                 acceleration : npt.ArrayLike | None = None,
                 rotation_acceleration: npt.ArrayLike | None = None,
                 cost: float = DEFAULT_COSTS.constant):
        """Initialize ConstantTransformFactory"""
        self.parameters = TransformationParameters(
            None, translation, velocity, acceleration,
            rotation, rotation_rate, rotation_acceleration)
        self._cost = cost

    @classmethod
    def from_euler(cls, translation: npt.ArrayLike, angle: npt.ArrayLike,
                   sequence: str = 'ZYX', degrees: bool = True,
                   cost: float = DEFAULT_COSTS.constant) -> ConstantTransformFactory:
        """Static frame offset given by a position and Euler angles

        :param translation: Translation [m]
        :type translation: numpy.typing.ArrayLike

        :param angle: Euler angles in sequence order
        :type angle: numpy.typing.ArrayLike

        :param sequence: Euler angle sequence, defaults to 'ZYX'
        :type sequence: str, optional

        :param degrees: Flag to denote if angles are supplied in degrees, defaults to True
        :type degrees: bool, optional

        :param cost: Ranking cost, defaults to :code:`DEFAULT_COSTS.constant`
        :type cost: float, optional

        :return: Factory
        :rtype: ConstantTransformFactory
        """
        return cls(translation, euler_rotation(angle, sequence, degrees), cost=cost)

    def cost(self, epoch: typ.Any) -> float:
        return self._cost

    def calculate_parameters(self, epoch: typ.Any) -> TransformationParameters:
        p = self.parameters
        return TransformationParameters(epoch, p.translation, p.velocity, p.acceleration,
                                        p.rotation, p.rotation_rate, p.rotation_acceleration)

    def __repr__(self) -> str:
        return f"Constant(T={self.parameters.translation.tolist()}, cost={self._cost})"
