"""function.py - Transforms Wrapping Arbitrary Position Mappings"""
from __future__ import annotations

import typing as typ
import numpy.typing as npt

import numpy as np

from frame_transforms.config import DEFAULT_COSTS
from frame_transforms.errors import UnsupportedTransformOperation
from frame_transforms.factory import TransformFactory
from frame_transforms.transform import ReferenceFrameTransform

__all__ = ['FunctionTransform', 'FunctionTransformFactory']

PositionMap = typ.Callable[[typ.Any, np.ndarray], np.ndarray]
VelocityMap = typ.Callable[[typ.Any, np.ndarray, np.ndarray], np.ndarray]


class FunctionTransform(ReferenceFrameTransform):
    """Transform evaluating user supplied mappings at a fixed epoch

    Only position, and velocity when a velocity mapping is given, are
    supported.
    """
    def __init__(self, factory: FunctionTransformFactory, epoch: typ.Any,
                 position_map: PositionMap, velocity_map: VelocityMap | None):
        super().__init__(factory, epoch)
        self._position_map = position_map
        self._velocity_map = velocity_map

    def inverse(self) -> FunctionTransform:
        return self.factory.inverse().transform(self.epoch)

    def transform_position(self, position: npt.ArrayLike) -> np.ndarray:
        return np.asarray(self._position_map(self.epoch, np.asarray(position, dtype=np.double)))

    def transform_velocity(self, position: npt.ArrayLike, velocity: npt.ArrayLike) -> np.ndarray:
        if self._velocity_map is None:
            raise UnsupportedTransformOperation(self, 'transform_velocity')
        return np.asarray(self._velocity_map(self.epoch,
                                             np.asarray(position, dtype=np.double),
                                             np.asarray(velocity, dtype=np.double)))


class FunctionTransformFactory(TransformFactory):
    """Factory for frames related by a non-rigid or otherwise non-parametric mapping

    Each mapping receives the epoch first. The inverse factory swaps the
    forward and inverse mappings.

    :param position_map: Position mapping :math:`F_0 \\to F_1`
    :type position_map: PositionMap

    :param inverse_position_map: Position mapping :math:`F_1 \\to F_0`
    :type inverse_position_map: PositionMap

    :param velocity_map: Velocity mapping :math:`F_0 \\to F_1`, defaults to None
    :type velocity_map: VelocityMap | None, optional

    :param inverse_velocity_map: Velocity mapping :math:`F_1 \\to F_0`, defaults to None
    :type inverse_velocity_map: VelocityMap | None, optional

    :param cost: Ranking cost, defaults to :code:`DEFAULT_COSTS.function`
    :type cost: float, optional
    """
    def __init__(self, position_map: PositionMap, inverse_position_map: PositionMap,
                 velocity_map: VelocityMap | None = None,
                 inverse_velocity_map: VelocityMap | None = None,
                 cost: float = DEFAULT_COSTS.function):
        """Initialize FunctionTransformFactory"""
        self.position_map = position_map
        self.inverse_position_map = inverse_position_map
        self.velocity_map = velocity_map
        self.inverse_velocity_map = inverse_velocity_map
        self._cost = cost
        self._inverse: FunctionTransformFactory | None = None

    def cost(self, epoch: typ.Any) -> float:
        return self._cost

    def transform(self, epoch: typ.Any) -> FunctionTransform:
        return FunctionTransform(self, epoch, self.position_map, self.velocity_map)

    def inverse(self) -> FunctionTransformFactory:
        if self._inverse is None:
            self._inverse = FunctionTransformFactory(
                self.inverse_position_map, self.position_map,
                self.inverse_velocity_map, self.velocity_map, self._cost)
            self._inverse._inverse = self
        return self._inverse
