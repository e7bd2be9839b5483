"""path.py - Lowest Cost Transform Path Resolution"""
from __future__ import annotations

import logging
import typing as typ

import networkx as nx

from frame_transforms.errors import NoTransformPath
from frame_transforms.factory import (
    TransformFactory, IdentityTransformFactory, compose_factories)

if typ.TYPE_CHECKING:
    from frame_transforms.graph import FrameGraph

__all__ = ['PathResolver']

logger = logging.getLogger(__name__)


class PathResolver():
    """Dijkstra search over a frame graph weighted by factory cost

    The resolver keeps no state between calls; each search allocates its own
    bookkeeping and may run concurrently on a graph that is not being mutated.
    Among paths of equal total cost the first one reached by the search is
    returned.

    :param graph: Graph to search
    :type graph: FrameGraph
    """
    def __init__(self, graph: FrameGraph):
        """Initialize PathResolver"""
        self.graph = graph

    def _weight(self, epoch: typ.Any) -> typ.Callable[[int, int, dict], float]:
        def weight(u: int, v: int, data: dict) -> float:
            return data['factory'].cost(epoch)
        return weight

    def resolve(self, source: int, target: int,
                epoch: typ.Any = None) -> list[TransformFactory]:
        """Finds the lowest total cost chain of factories between two frame handles

        :param source: Handle of the origin frame
        :type source: int

        :param target: Handle of the destination frame
        :type target: int

        :param epoch: Epoch at which costs are evaluated, defaults to the
            graph's reference epoch
        :type epoch: typing.Any, optional

        :raises NoTransformPath: If the destination is unreachable

        :return: Ordered factories, empty when source and target coincide
        :rtype: list[TransformFactory]
        """
        epoch = self.graph.reference_epoch if epoch is None else epoch
        if source == target:
            return []

        try:
            nodes = nx.dijkstra_path(self.graph, source, target, weight=self._weight(epoch))
        except nx.NetworkXNoPath as exc:
            raise NoTransformPath(self.graph.frame(source), self.graph.frame(target)) from exc

        path = [self.graph.edges[u, v]['factory'] for u, v in zip(nodes[:-1], nodes[1:])]

        logger.debug("Resolved %s -> %s through %d transform(s), cost %g",
                     self.graph.frame(source), self.graph.frame(target), len(path),
                     sum(f.cost(epoch) for f in path))
        return path

    def reduce(self, path: typ.Sequence[TransformFactory]) -> TransformFactory:
        """Folds a factory chain into one factory; the empty chain is the identity

        :param path: Ordered factories
        :type path: typing.Sequence[TransformFactory]

        :return: Composite factory
        :rtype: TransformFactory
        """
        return compose_factories(path, IdentityTransformFactory(self.graph.config.identity_cost))
