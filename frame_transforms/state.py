"""state.py - Cartesian Kinematic State"""
from __future__ import annotations

import typing as typ
import numpy.typing as npt
from dataclasses import dataclass

import numpy as np

from frame_transforms.utilities import as_vector

__all__ = ['SupportsCartesian', 'CartesianState']


@typ.runtime_checkable
class SupportsCartesian(typ.Protocol):
    """Any state container exposing a canonical Cartesian view"""
    def to_cartesian(self) -> CartesianState: ...


@dataclass(frozen=True, eq=False)
class CartesianState:
    """Position, velocity and optionally acceleration of a body

    :param position: Position [m]
    :type position: numpy.ndarray

    :param velocity: Velocity [m/s]
    :type velocity: numpy.ndarray

    :param acceleration: Acceleration [m/s^2], defaults to None
    :type acceleration: numpy.ndarray | None, optional

    :param epoch: Epoch of the state, defaults to None
    :type epoch: typing.Any, optional
    """
    position: np.ndarray
    velocity: np.ndarray
    acceleration: np.ndarray | None = None
    epoch: typ.Any = None

    def __post_init__(self):
        object.__setattr__(self, 'position', as_vector(self.position, 'position'))
        object.__setattr__(self, 'velocity', as_vector(self.velocity, 'velocity'))
        if self.acceleration is not None:
            object.__setattr__(self, 'acceleration',
                               as_vector(self.acceleration, 'acceleration'))

        if self.position.shape != self.velocity.shape:
            raise ValueError('Position and velocity shapes differ')

    @classmethod
    def from_vector(cls, vector: npt.ArrayLike, epoch: typ.Any = None) -> CartesianState:
        """Builds a state from a stacked :math:`[r, v]` or :math:`[r, v, a]` vector

        :param vector: Stacked state of length 6 or 9
        :type vector: numpy.typing.ArrayLike

        :param epoch: Epoch of the state, defaults to None
        :type epoch: typing.Any, optional

        :return: State
        :rtype: CartesianState
        """
        vector = np.asarray(vector, dtype=np.double)
        if vector.shape == (6,):
            return cls(vector[:3], vector[3:], None, epoch)
        if vector.shape == (9,):
            return cls(vector[:3], vector[3:6], vector[6:], epoch)
        raise ValueError(f"State vector must have length 6 or 9, got {vector.shape}")

    def to_cartesian(self) -> CartesianState:
        return self

    def to_vector(self) -> np.ndarray:
        """Stacked :math:`[r, v]` (or :math:`[r, v, a]` when acceleration is known)"""
        parts = [self.position, self.velocity]
        if self.acceleration is not None:
            parts.append(self.acceleration)
        return np.concatenate(parts, axis=-1)
