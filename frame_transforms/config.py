"""config.py - Path Ranking Costs and Frame Graph Settings"""
from __future__ import annotations

import typing as typ
from dataclasses import dataclass
from datetime import datetime

__all__ = ['J2000', 'TransformCosts', 'DEFAULT_COSTS', 'FrameGraphConfig']

J2000 = datetime(2000, 1, 1, 12, 0, 0)


@dataclass(frozen=True)
class TransformCosts:
    """Relative expense of crossing a graph edge with each factory family.

    The values approximate the number of scalar operations needed to evaluate
    the transform. They only rank competing paths.

    :param constant: Epoch independent parametric transform, defaults to 12
    :type constant: float, optional

    :param helmert: Helmert transform with linear drift, defaults to 45
    :type helmert: float, optional

    :param uniform_rotation: Spin about a fixed axis, defaults to 30
    :type uniform_rotation: float, optional

    :param function: Wrapped position mapping, defaults to 60
    :type function: float, optional

    :param inverse_overhead: Added to a factory's cost by its generic inverse,
        defaults to 198
    :type inverse_overhead: float, optional

    :param identity: Zero length path, defaults to 0
    :type identity: float, optional
    """
    constant: float = 12
    helmert: float = 45
    uniform_rotation: float = 30
    function: float = 60
    inverse_overhead: float = 198
    identity: float = 0

    def __post_init__(self):
        for name, value in vars(self).items():
            if value < 0:
                raise ValueError(f"Cost '{name}' must be non-negative, got {value}")


DEFAULT_COSTS = TransformCosts()


@dataclass(frozen=True)
class FrameGraphConfig:
    """FrameGraph settings

    Family costs (constant, Helmert, ...) belong to the factories themselves;
    the graph only owns the costs of the factories it creates.

    :param reference_epoch: Epoch at which factory costs are evaluated for
        path ranking, defaults to J2000
    :type reference_epoch: typing.Any, optional

    :param identity_cost: Cost of the zero length path, defaults to
        :code:`DEFAULT_COSTS.identity`
    :type identity_cost: float, optional

    :param inverse_overhead: Overhead of the generic inverses created by
        :meth:`FrameGraph.attach_child_frame`, defaults to
        :code:`DEFAULT_COSTS.inverse_overhead`
    :type inverse_overhead: float, optional
    """
    reference_epoch: typ.Any = J2000
    identity_cost: float = DEFAULT_COSTS.identity
    inverse_overhead: float = DEFAULT_COSTS.inverse_overhead

    def __post_init__(self):
        for name in ('identity_cost', 'inverse_overhead'):
            if getattr(self, name) < 0:
                raise ValueError(f"'{name}' must be non-negative, got {getattr(self, name)}")
