"""parameters.py - Rigid Time-Varying Transformation Parameters

A :class:`TransformationParameters` set :math:`\\{T, \\dot{T}, \\ddot{T}, R, \\omega, \\alpha\\}`
maps kinematic state from frame :math:`F_0` to frame :math:`F_1`:

.. math::

    r^* &= R (r + T) \\\\
    v^* &= R (v + \\dot{T} + \\omega \\times (r + T)) \\\\
    a^* &= R (a + \\ddot{T} + 2 \\omega \\times (v + \\dot{T}) + \\alpha \\times (r + T)
              + \\omega \\times (\\omega \\times (r + T)))

:math:`T, \\dot{T}, \\ddot{T}, \\omega, \\alpha` are expressed in :math:`F_0`.
The set is closed under composition and inversion, both computed in closed form.
"""
from __future__ import annotations

import typing as typ
import numpy.typing as npt
from dataclasses import dataclass

import numpy as np

import scipy.spatial.transform as sptl

from frame_transforms.geometry import as_rotation, identity_rotation, skew_symmetric_matrix
from frame_transforms.utilities import as_vector, zero_vector

__all__ = ['TransformationParameters']

def _rotate(rotation: sptl.Rotation, vector: np.ndarray, inverse: bool = False) -> np.ndarray:
    # Rotation.apply only accepts writable buffers; stored vectors are read-only
    return rotation.apply(np.array(vector, dtype=np.double), inverse=inverse)


@dataclass(frozen=True, eq=False)
class TransformationParameters:
    """Minimal description of a rigid, time-varying frame relationship at one epoch

    :param epoch: Epoch at which the parameters hold
    :type epoch: typing.Any

    :param translation: Translation :math:`T` [m], defaults to zero
    :type translation: numpy.ndarray, optional

    :param velocity: Translation rate :math:`\\dot{T}` [m/s], defaults to zero
    :type velocity: numpy.ndarray, optional

    :param acceleration: Translation acceleration :math:`\\ddot{T}` [m/s^2], defaults to zero
    :type acceleration: numpy.ndarray, optional

    :param rotation: Proper rotation :math:`R`, defaults to identity
    :type rotation: scipy.spatial.transform.Rotation, optional

    :param rotation_rate: Rotation rate :math:`\\omega` [rad/s], defaults to zero
    :type rotation_rate: numpy.ndarray, optional

    :param rotation_acceleration: Rotation acceleration :math:`\\alpha` [rad/s^2],
        defaults to zero
    :type rotation_acceleration: numpy.ndarray, optional
    """
    epoch: typ.Any = None
    translation: np.ndarray = None
    velocity: np.ndarray = None
    acceleration: np.ndarray = None
    rotation: sptl.Rotation = None
    rotation_rate: np.ndarray = None
    rotation_acceleration: np.ndarray = None

    def __post_init__(self):
        for name in ('translation', 'velocity', 'acceleration',
                     'rotation_rate', 'rotation_acceleration'):
            value = getattr(self, name)
            value = zero_vector() if value is None else as_vector(value, name)
            if value.shape != (3,):
                raise ValueError(f"{name} must be a single vector, got {value.shape}")
            object.__setattr__(self, name, value)

        object.__setattr__(self, 'rotation', as_rotation(self.rotation))

    @classmethod
    def identity(cls, epoch: typ.Any = None) -> TransformationParameters:
        """Parameters that leave every state unchanged

        :param epoch: Epoch of the parameters, defaults to None
        :type epoch: typing.Any, optional

        :return: Identity parameters
        :rtype: TransformationParameters
        """
        return cls(epoch, rotation=identity_rotation())

    # Algebra
    def inverse(self) -> TransformationParameters:
        """Closed form parameters of the inverse relationship :math:`F_1 \\to F_0`

        .. math::

            T' &= -R T, \\quad R' = R^{-1} \\\\
            \\dot{T}' &= -R (\\dot{T} + \\omega \\times T), \\quad \\omega' = -R \\omega \\\\
            \\ddot{T}' &= -R (\\ddot{T} + 2 \\omega \\times \\dot{T} + \\alpha \\times T
                         + \\omega \\times (\\omega \\times T)), \\quad \\alpha' = -R \\alpha

        :return: Inverse parameters
        :rtype: TransformationParameters
        """
        R = self.rotation
        T, dT, ddT = self.translation, self.velocity, self.acceleration
        w, alpha = self.rotation_rate, self.rotation_acceleration

        wxT = np.cross(w, T)
        return TransformationParameters(
            self.epoch,
            translation=-_rotate(R, T),
            velocity=-_rotate(R, dT + wxT),
            acceleration=-_rotate(R, ddT + 2*np.cross(w, dT) + np.cross(alpha, T) + np.cross(w, wxT)),
            rotation=R.inv(),
            rotation_rate=-_rotate(R, w),
            rotation_acceleration=-_rotate(R, alpha))

    def compose(self, other: TransformationParameters) -> TransformationParameters:
        """Parameters equivalent to applying `self` then `other`

        :param other: Parameters of the second leg :math:`F_1 \\to F_2`
        :type other: TransformationParameters

        :return: Parameters of :math:`F_0 \\to F_2`
        :rtype: TransformationParameters
        """
        R1 = self.rotation
        w1, alpha1 = self.rotation_rate, self.rotation_acceleration

        # Second leg expressed in F0
        t2   = _rotate(R1, other.translation, inverse=True)
        dt2  = _rotate(R1, other.velocity, inverse=True)
        ddt2 = _rotate(R1, other.acceleration, inverse=True)
        w2   = _rotate(R1, other.rotation_rate, inverse=True)
        b2   = _rotate(R1, other.rotation_acceleration, inverse=True)

        w1xt2 = np.cross(w1, t2)
        return TransformationParameters(
            self.epoch if self.epoch is not None else other.epoch,
            translation=self.translation + t2,
            velocity=self.velocity + dt2 - w1xt2,
            acceleration=self.acceleration + ddt2 - 2*np.cross(w1, dt2)
                - np.cross(alpha1, t2) + np.cross(w1, w1xt2),
            rotation=other.rotation * R1,
            rotation_rate=w1 + w2,
            rotation_acceleration=alpha1 + b2 - np.cross(w1, w2))

    def __add__(self, other: TransformationParameters) -> TransformationParameters:
        return self.compose(other)

    def is_close(self, other: TransformationParameters,
                 rtol: float = 1e-9, atol: float = 1e-9) -> bool:
        """Compares two parameter sets within tolerance

        :param other: Parameters to compare against
        :type other: TransformationParameters

        :param rtol: Relative tolerance, defaults to 1e-9
        :type rtol: float, optional

        :param atol: Absolute tolerance, defaults to 1e-9
        :type atol: float, optional

        :return: True when every term agrees
        :rtype: bool
        """
        vectors = all(np.allclose(getattr(self, name), getattr(other, name), rtol, atol)
                      for name in ('translation', 'velocity', 'acceleration',
                                   'rotation_rate', 'rotation_acceleration'))
        return vectors and bool(np.allclose(self.rotation.as_matrix(),
                                            other.rotation.as_matrix(), rtol, atol))

    def is_identity(self, rtol: float = 1e-9, atol: float = 1e-9) -> bool:
        """Checks whether the parameters leave states unchanged within tolerance"""
        return self.is_close(TransformationParameters.identity(self.epoch), rtol, atol)

    # Application
    def _offset(self, position: np.ndarray) -> np.ndarray:
        return position + self.translation

    def _relative_velocity(self, offset: np.ndarray, velocity: np.ndarray) -> np.ndarray:
        return velocity + self.velocity + np.cross(self.rotation_rate, offset)

    def _relative_acceleration(self, offset: np.ndarray, velocity: np.ndarray,
                               acceleration: np.ndarray) -> np.ndarray:
        w = self.rotation_rate
        observed    = acceleration + self.acceleration
        coriolis    = 2*np.cross(w, velocity + self.velocity)
        euler       = np.cross(self.rotation_acceleration, offset)
        centripetal = np.cross(w, np.cross(w, offset))
        return observed + coriolis + euler + centripetal

    def transform_position(self, position: npt.ArrayLike) -> np.ndarray:
        """:math:`r^* = R (r + T)`"""
        position = np.asarray(position, dtype=np.double)
        return self.rotation.apply(self._offset(position))

    def transform_velocity(self, position: npt.ArrayLike, velocity: npt.ArrayLike) -> np.ndarray:
        """:math:`v^* = R (v + \\dot{T} + \\omega \\times (r + T))`"""
        position = np.asarray(position, dtype=np.double)
        velocity = np.asarray(velocity, dtype=np.double)
        return self.rotation.apply(self._relative_velocity(self._offset(position), velocity))

    def transform_acceleration(self, position: npt.ArrayLike, velocity: npt.ArrayLike,
                               acceleration: npt.ArrayLike) -> np.ndarray:
        """Acceleration with Coriolis, Euler and centripetal terms"""
        position = np.asarray(position, dtype=np.double)
        velocity = np.asarray(velocity, dtype=np.double)
        acceleration = np.asarray(acceleration, dtype=np.double)
        return self.rotation.apply(
            self._relative_acceleration(self._offset(position), velocity, acceleration))

    def transform(self, position: npt.ArrayLike, velocity: npt.ArrayLike,
                  acceleration: npt.ArrayLike) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Transforms position, velocity and acceleration together

        :return: Position, velocity and acceleration in :math:`F_1`
        :rtype: tuple[numpy.ndarray, numpy.ndarray, numpy.ndarray]
        """
        position = np.asarray(position, dtype=np.double)
        velocity = np.asarray(velocity, dtype=np.double)
        acceleration = np.asarray(acceleration, dtype=np.double)

        offset = self._offset(position)
        return (self.rotation.apply(offset),
                self.rotation.apply(self._relative_velocity(offset, velocity)),
                self.rotation.apply(self._relative_acceleration(offset, velocity, acceleration)))

    def transform_orientation(self, orientation: sptl.Rotation) -> sptl.Rotation:
        """Body to :math:`F_1` attitude from body to :math:`F_0` attitude: :math:`R q`"""
        return self.rotation * orientation

    def transform_orientation_rate(self, orientation_rate: npt.ArrayLike) -> np.ndarray:
        """Body angular velocity in :math:`F_1`: :math:`R (\\omega_b + \\omega)`"""
        orientation_rate = np.asarray(orientation_rate, dtype=np.double)
        return self.rotation.apply(orientation_rate + self.rotation_rate)

    def transform_orientation_acceleration(self, orientation_rate: npt.ArrayLike,
                                           orientation_acceleration: npt.ArrayLike) -> np.ndarray:
        """Body angular acceleration in :math:`F_1`:
        :math:`R (\\alpha_b + \\alpha + \\omega \\times \\omega_b)`"""
        orientation_rate = np.asarray(orientation_rate, dtype=np.double)
        orientation_acceleration = np.asarray(orientation_acceleration, dtype=np.double)
        return self.rotation.apply(orientation_acceleration + self.rotation_acceleration
                                   + np.cross(self.rotation_rate, orientation_rate))

    # Linearization
    def state_jacobian(self) -> np.ndarray:
        """Jacobian of :math:`(r^*, v^*)` with respect to :math:`(r, v)`

        .. math::

            J = \\begin{bmatrix} R & 0 \\\\ R [\\omega]_\\times & R \\end{bmatrix}

        :return: :math:`6 \\times 6` matrix
        :rtype: numpy.ndarray
        """
        R = self.rotation.as_matrix()

        J = np.zeros((6, 6))
        J[:3, :3] = R
        J[3:, :3] = R @ skew_symmetric_matrix(self.rotation_rate)
        J[3:, 3:] = R
        return J

    def transform_covariance(self, covariance: npt.ArrayLike) -> np.ndarray:
        """Propagates a position (:math:`3 \\times 3`) or position-velocity
        (:math:`6 \\times 6`) covariance: :math:`P' = J P J^T`

        :param covariance: Covariance in :math:`F_0`
        :type covariance: numpy.typing.ArrayLike

        :raises ValueError: If the covariance is neither :math:`3 \\times 3` nor :math:`6 \\times 6`

        :return: Covariance in :math:`F_1`
        :rtype: numpy.ndarray
        """
        P = np.asarray(covariance, dtype=np.double)
        if P.shape == (3, 3):
            R = self.rotation.as_matrix()
            return R @ P @ R.T
        elif P.shape == (6, 6):
            J = self.state_jacobian()
            return J @ P @ J.T

        raise ValueError(f"Covariance must be (3,3) or (6,6), got {P.shape}")
