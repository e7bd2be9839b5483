"""helmert.py - Helmert (7 + 7 Parameter) Frame Transforms

Translation, rotation and scale of a terrestrial frame realization, each with
a linear drift about a reference epoch, as published by the IERS between
ITRF realizations.
"""
from __future__ import annotations

import logging
import typing as typ
import numpy.typing as npt

import numpy as np

import scipy.spatial.transform as sptl

from frame_transforms.config import DEFAULT_COSTS
from frame_transforms.factory import KinematicTransformFactory
from frame_transforms.parameters import TransformationParameters
from frame_transforms.utilities import as_vector, seconds_between

__all__ = ['HelmertTransformFactory',
           'MILLIMETER', 'JULIAN_YEAR', 'PARTS_PER_BILLION', 'MILLIARCSECOND']

logger = logging.getLogger(__name__)

MILLIMETER        = 1e-3                            # [m]
JULIAN_YEAR       = 365.25 * 86400.0                # [s]
PARTS_PER_BILLION = 1e-9
MILLIARCSECOND    = np.pi / (180 * 3600) * 1e-3     # [rad]


class HelmertTransformFactory(KinematicTransformFactory):
    """Helmert transform with linearly drifting parameters

    At epoch :math:`t` with :math:`\\Delta t = t - t_0` seconds:
    :math:`T = T_0 + \\dot{T} \\Delta t`, :math:`R = \\exp(R_0 + \\dot{R} \\Delta t)`
    (rotation vector), :math:`s = s_0 + \\dot{s} \\Delta t`. The scale factor is
    reported by :meth:`scale` and kept out of the rigid parameters.

    The rotation rate is taken as :math:`\\omega = \\dot{R}`, the drift of the
    rotation vector. This is exact when the drift is parallel to
    :math:`R_0 + \\dot{R} \\Delta t` and a small angle approximation otherwise,
    adequate for the milliarcsecond rotations of the IERS tables.

    :param epoch: Reference epoch :math:`t_0` of the parameters
    :type epoch: typing.Any

    :param translation: Translation :math:`T_0` [m]
    :type translation: numpy.typing.ArrayLike

    :param scale: Scale offset :math:`s_0` [-]
    :type scale: float

    :param rotation: Rotation vector :math:`R_0` [rad]
    :type rotation: numpy.typing.ArrayLike

    :param translation_rate: Translation drift [m/s], defaults to zero
    :type translation_rate: numpy.typing.ArrayLike | None, optional

    :param scale_rate: Scale drift [1/s], defaults to 0
    :type scale_rate: float, optional

    :param rotation_rate: Rotation vector drift [rad/s], defaults to zero
    :type rotation_rate: numpy.typing.ArrayLike | None, optional

    :param cost: Ranking cost, defaults to :code:`DEFAULT_COSTS.helmert`
    :type cost: float, optional
    """
    def __init__(self, epoch: typ.Any,
                 translation: npt.ArrayLike, scale: float, rotation: npt.ArrayLike,
                 translation_rate: npt.ArrayLike | None = None, scale_rate: float = 0.0,
                 rotation_rate: npt.ArrayLike | None = None,
                 cost: float = DEFAULT_COSTS.helmert):
        """Initialize HelmertTransformFactory"""
        self.epoch = epoch

        self.translation = as_vector(translation, 'translation')
        self.rotation = as_vector(rotation, 'rotation')
        self.scale0 = float(scale)

        self.translation_rate = as_vector(
            np.zeros(3) if translation_rate is None else translation_rate, 'translation_rate')
        self.rotation_rate = as_vector(
            np.zeros(3) if rotation_rate is None else rotation_rate, 'rotation_rate')
        self.scale_rate = float(scale_rate)

        for name in ('translation', 'rotation', 'translation_rate', 'rotation_rate'):
            if getattr(self, name).shape != (3,):
                raise ValueError(f"{name} must be a single vector")

        self._cost = cost

    @classmethod
    def from_iers_units(cls, epoch: typ.Any,
                        translation: npt.ArrayLike, scale: float, rotation: npt.ArrayLike,
                        translation_rate: npt.ArrayLike = (0, 0, 0), scale_rate: float = 0.0,
                        rotation_rate: npt.ArrayLike = (0, 0, 0),
                        cost: float = DEFAULT_COSTS.helmert) -> HelmertTransformFactory:
        """Builds a factory from parameters in the units of the IERS tables

        :param epoch: Reference epoch of the parameters
        :type epoch: typing.Any

        :param translation: Translation [mm]
        :type translation: numpy.typing.ArrayLike

        :param scale: Scale [ppb]
        :type scale: float

        :param rotation: Rotation [mas]
        :type rotation: numpy.typing.ArrayLike

        :param translation_rate: Translation rate [mm/yr], defaults to zero
        :type translation_rate: numpy.typing.ArrayLike, optional

        :param scale_rate: Scale rate [ppb/yr], defaults to 0
        :type scale_rate: float, optional

        :param rotation_rate: Rotation rate [mas/yr], defaults to zero
        :type rotation_rate: numpy.typing.ArrayLike, optional

        :param cost: Ranking cost, defaults to :code:`DEFAULT_COSTS.helmert`
        :type cost: float, optional

        :return: Factory in SI units
        :rtype: HelmertTransformFactory
        """
        return cls(epoch,
                   np.asarray(translation, dtype=np.double) * MILLIMETER,
                   scale * PARTS_PER_BILLION,
                   np.asarray(rotation, dtype=np.double) * MILLIARCSECOND,
                   np.asarray(translation_rate, dtype=np.double) * MILLIMETER / JULIAN_YEAR,
                   scale_rate * PARTS_PER_BILLION / JULIAN_YEAR,
                   np.asarray(rotation_rate, dtype=np.double) * MILLIARCSECOND / JULIAN_YEAR,
                   cost)

    def cost(self, epoch: typ.Any) -> float:
        # 4 vector updates, 3 scalar updates and the rotation construction
        return self._cost

    def scale(self, epoch: typ.Any) -> float:
        """Scale offset :math:`s` at `epoch` [-]"""
        return self.scale0 + self.scale_rate * seconds_between(epoch, self.epoch)

    def calculate_parameters(self, epoch: typ.Any) -> TransformationParameters:
        dt = seconds_between(epoch, self.epoch)

        T = self.translation + self.translation_rate * dt
        R = sptl.Rotation.from_rotvec(self.rotation + self.rotation_rate * dt)

        logger.debug("Helmert parameters at dt=%.3f s: |T|=%.6g m, scale=%.3g",
                     dt, np.linalg.norm(T), self.scale0 + self.scale_rate * dt)

        return TransformationParameters(epoch,
                                        translation=T, velocity=self.translation_rate,
                                        rotation=R, rotation_rate=self.rotation_rate)

    def __repr__(self) -> str:
        return f"Helmert(epoch={self.epoch!r})"
