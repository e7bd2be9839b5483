"""factory.py - Transform Factories, Composition and Inversion"""
from __future__ import annotations

import typing as typ
from abc import ABC, abstractmethod
from functools import reduce

from frame_transforms.config import DEFAULT_COSTS
from frame_transforms.parameters import TransformationParameters
from frame_transforms.transform import (
    ReferenceFrameTransform, KinematicTransform, CompositeTransform)

__all__ = ['TransformFactory', 'KinematicTransformFactory',
           'InverseKinematicTransformFactory', 'CompositeTransformFactory',
           'IdentityTransformFactory', 'compose_factories']

F0 = typ.TypeVar('F0')
F1 = typ.TypeVar('F1')
F2 = typ.TypeVar('F2')


class TransformFactory(ABC, typ.Generic[F0, F1]):
    """Produces transforms between an ordered pair of frames for any epoch"""

    @abstractmethod
    def cost(self, epoch: typ.Any) -> float:
        """Relative expense of crossing this edge, used only to rank paths

        :param epoch: Epoch of evaluation
        :type epoch: typing.Any

        :return: Non-negative cost
        :rtype: float
        """

    @abstractmethod
    def transform(self, epoch: typ.Any) -> ReferenceFrameTransform[F0, F1]:
        """Transform valid at `epoch`

        :param epoch: Epoch of evaluation
        :type epoch: typing.Any

        :return: Transform :math:`F_0 \\to F_1`
        :rtype: ReferenceFrameTransform
        """

    @abstractmethod
    def inverse(self) -> TransformFactory[F1, F0]:
        """Factory producing the inverse transforms. Calling :meth:`inverse`
        on the result returns this factory."""

    def __add__(self, other: TransformFactory[F1, F2]) -> CompositeTransformFactory[F0, F1, F2]:
        return CompositeTransformFactory(self, other)


class KinematicTransformFactory(TransformFactory[F0, F1]):
    """Factory of rigid transforms, defined by its parameters at each epoch.

    Concrete families only implement :meth:`calculate_parameters` and
    :meth:`cost`; transforms and the inverse factory follow from the
    parameters.
    """
    _inverse: InverseKinematicTransformFactory[F1, F0] | None = None

    @abstractmethod
    def calculate_parameters(self, epoch: typ.Any) -> TransformationParameters:
        """Transformation parameters valid at `epoch`"""

    def transform(self, epoch: typ.Any) -> KinematicTransform[F0, F1]:
        return KinematicTransform(self, epoch, self.calculate_parameters(epoch))

    def inverse(self) -> TransformFactory[F1, F0]:
        if self._inverse is None:
            self._inverse = InverseKinematicTransformFactory(self)
        return self._inverse


class InverseKinematicTransformFactory(KinematicTransformFactory[F1, F0]):
    """Inverse of any kinematic factory, derived from its parameters in closed form

    :param factory: Factory to invert
    :type factory: KinematicTransformFactory

    :param overhead: Cost added to the inverted factory's cost, defaults to
        :code:`DEFAULT_COSTS.inverse_overhead`
    :type overhead: float, optional
    """
    def __init__(self, factory: KinematicTransformFactory[F0, F1],
                 overhead: float = DEFAULT_COSTS.inverse_overhead):
        self.factory = factory
        self.overhead = overhead

    def cost(self, epoch: typ.Any) -> float:
        return self.factory.cost(epoch) + self.overhead

    def calculate_parameters(self, epoch: typ.Any) -> TransformationParameters:
        return self.factory.calculate_parameters(epoch).inverse()

    def inverse(self) -> KinematicTransformFactory[F0, F1]:
        return self.factory

    def __repr__(self) -> str:
        return f"Inverse({self.factory!r})"


class CompositeTransformFactory(TransformFactory[F0, F2], typ.Generic[F0, F1, F2]):
    """Chain of two factories :math:`F_0 \\to F_1 \\to F_2`

    Parametric legs fuse into a single
    :class:`~frame_transforms.transform.KinematicTransform`; otherwise the legs
    are applied in sequence.

    :param first: Factory :math:`F_0 \\to F_1`
    :type first: TransformFactory

    :param second: Factory :math:`F_1 \\to F_2`
    :type second: TransformFactory
    """
    def __init__(self, first: TransformFactory[F0, F1], second: TransformFactory[F1, F2]):
        self.first = first
        self.second = second
        self._inverse: CompositeTransformFactory[F2, F1, F0] | None = None

    def cost(self, epoch: typ.Any) -> float:
        return self.first.cost(epoch) + self.second.cost(epoch)

    def transform(self, epoch: typ.Any) -> ReferenceFrameTransform[F0, F2]:
        return self.combine(self.first.transform(epoch), self.second.transform(epoch))

    def combine(self, first: ReferenceFrameTransform[F0, F1],
                second: ReferenceFrameTransform[F1, F2]) -> ReferenceFrameTransform[F0, F2]:
        """Fuses two transforms produced by this factory's legs

        :param first: Transform of the first leg
        :type first: ReferenceFrameTransform

        :param second: Transform of the second leg
        :type second: ReferenceFrameTransform

        :return: Transform :math:`F_0 \\to F_2` with this factory as provenance
        :rtype: ReferenceFrameTransform
        """
        if isinstance(first, KinematicTransform) and isinstance(second, KinematicTransform):
            return KinematicTransform(self, first.epoch,
                                      first.parameters.compose(second.parameters))
        return CompositeTransform(self, first.epoch, first, second)

    def inverse(self) -> CompositeTransformFactory[F2, F1, F0]:
        if self._inverse is None:
            self._inverse = CompositeTransformFactory(self.second.inverse(), self.first.inverse())
            self._inverse._inverse = self
        return self._inverse

    def __repr__(self) -> str:
        return f"({self.first!r} + {self.second!r})"


class IdentityTransformFactory(KinematicTransformFactory[F0, F0]):
    """Factory of the zero length path, leaving every state unchanged

    :param cost: Ranking cost, defaults to :code:`DEFAULT_COSTS.identity`
    :type cost: float, optional
    """
    def __init__(self, cost: float = DEFAULT_COSTS.identity):
        self._cost = cost

    def cost(self, epoch: typ.Any) -> float:
        return self._cost

    def calculate_parameters(self, epoch: typ.Any) -> TransformationParameters:
        return TransformationParameters.identity(epoch)

    def inverse(self) -> IdentityTransformFactory[F0]:
        return self

    def __repr__(self) -> str:
        return 'Identity()'


def compose_factories(factories: typ.Iterable[TransformFactory],
                      identity: TransformFactory | None = None) -> TransformFactory:
    """Folds an ordered chain of factories left to right into one factory

    :param factories: Factories :math:`F_0 \\to F_1, F_1 \\to F_2, \\ldots`
    :type factories: typing.Iterable[TransformFactory]

    :param identity: Result for an empty chain, defaults to a new
        :class:`IdentityTransformFactory`
    :type identity: TransformFactory | None, optional

    :return: Single factory spanning the chain
    :rtype: TransformFactory
    """
    factories = list(factories)
    if not factories:
        return identity if identity is not None else IdentityTransformFactory()

    return reduce(CompositeTransformFactory, factories)
