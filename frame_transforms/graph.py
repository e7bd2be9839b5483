"""graph.py - Reference Frame Graph

Frames are vertices and transform factories are directed edges of a
:code:`networkx.DiGraph`. Vertices are stable integer handles assigned on
attachment; the frame object is stored on its vertex and looked up by
identity.

The graph is built once and then queried. Attaching and querying must not
interleave without external synchronization; :meth:`FrameGraph.freeze` ends
the build phase, after which the graph may be shared between threads.
"""
from __future__ import annotations

import logging
import typing as typ

import networkx as nx
import matplotlib.pyplot as plt

from frame_transforms.config import FrameGraphConfig
from frame_transforms.errors import (
    FrameNotFound, FrozenFrameGraphError, UnsupportedTransformOperation)
from frame_transforms.errors import ORIGIN, DESTINATION
from frame_transforms.factory import (
    TransformFactory, InverseKinematicTransformFactory, compose_factories)
from frame_transforms.frame import FrameSelector
from frame_transforms.parameters import TransformationParameters
from frame_transforms.path import PathResolver
from frame_transforms.transform import ReferenceFrameTransform, KinematicTransform
from frame_transforms.utilities import ordered_unique

__all__ = ['FrameGraph', 'FactoryView']

logger = logging.getLogger(__name__)

FrameQuery = typ.Union[typ.Any, FrameSelector]


class FactoryView(typ.Iterable[TransformFactory]):
    """Lazy, restartable view of the factories entering or leaving one frame

    :param graph: Graph to view
    :type graph: FrameGraph

    :param handle: Frame handle, None for an empty view
    :type handle: int | None
    """
    def __init__(self, graph: FrameGraph, handle: int | None):
        self._graph = graph
        self._handle = handle

    def __iter__(self) -> typ.Iterator[TransformFactory]:
        if self._handle is None:
            return
        for _, _, factory in self._graph.out_edges(self._handle, data='factory'):
            yield factory
        for u, v, factory in self._graph.in_edges(self._handle, data='factory'):
            if u != v:
                yield factory

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return next(iter(self), None) is not None


class FrameGraph(nx.DiGraph):
    """Reference frame graph network system

    :param incoming_graph_data: Passed to :code:`networkx.DiGraph`, defaults to None
    :type incoming_graph_data: typing.Any, optional

    :param config: Graph settings, defaults to :code:`FrameGraphConfig()`
    :type config: FrameGraphConfig | None, optional
    """
    def __init__(self, incoming_graph_data=None, config: FrameGraphConfig | None = None, **attr):
        """Initialize FrameGraph"""
        super().__init__(incoming_graph_data, **attr)
        self.config = config if config is not None else FrameGraphConfig()
        self._handles: dict[int, int] = {}
        self._resolver = PathResolver(self)

    @property
    def reference_epoch(self) -> typ.Any:
        """Epoch at which factory costs are evaluated"""
        return self.config.reference_epoch

    # Construction
    def _check_mutable(self):
        if self.is_frozen():
            raise FrozenFrameGraphError('Frame graph is frozen; no frames or transforms '
                                        'may be attached')

    def attach_frame(self, frame: typ.Any) -> int:
        """Adds a frame as a vertex; attaching the same instance again is a no-op

        :param frame: Frame instance
        :type frame: typing.Any

        :raises FrozenFrameGraphError: If the graph is frozen

        :return: Handle of the frame
        :rtype: int
        """
        handle = self.handle(frame)
        if handle is not None:
            return handle

        self._check_mutable()
        handle = len(self._handles)
        self._handles[id(frame)] = handle
        self.add_node(handle, frame=frame)

        logger.debug("Attached frame %s as handle %d", frame, handle)
        return handle

    def attach_transform(self, frame_A: typ.Any, frame_B: typ.Any,
                         factory: TransformFactory) -> None:
        """Adds a factory as the edge from `frame_A` to `frame_B`

        A factory already connecting the same two frames is replaced. Ignored,
        with a warning, if either frame is not attached.

        :param frame_A: Origin frame
        :type frame_A: typing.Any

        :param frame_B: Destination frame
        :type frame_B: typing.Any

        :param factory: Factory producing :math:`A \\to B` transforms
        :type factory: TransformFactory

        :raises FrozenFrameGraphError: If the graph is frozen
        """
        self._check_mutable()

        u, v = self.handle(frame_A), self.handle(frame_B)
        if u is None or v is None:
            logger.warning("Ignoring transform %r between %s and %s: frame %s is not attached",
                           factory, frame_A, frame_B, frame_A if u is None else frame_B)
            return

        if self.has_edge(u, v):
            logger.debug("Replacing transform %s -> %s", frame_A, frame_B)
        self.add_edge(u, v, factory=factory)

        logger.debug("Attached transform %s -> %s: %r", frame_A, frame_B, factory)

    def attach_child_frame(self, frame: typ.Any, parent: typ.Any,
                           factory: TransformFactory) -> int:
        """Attaches a frame together with the transforms to and from its parent

        A generic kinematic inverse is created with the graph's
        :code:`inverse_overhead`; any other factory supplies its own inverse.

        :param frame: New frame
        :type frame: typing.Any

        :param parent: Attached parent frame
        :type parent: typing.Any

        :param factory: Factory producing parent to frame transforms
        :type factory: TransformFactory

        :return: Handle of the frame
        :rtype: int
        """
        handle = self.attach_frame(frame)

        inverse = factory.inverse()
        if isinstance(inverse, InverseKinematicTransformFactory) \
                and inverse.overhead != self.config.inverse_overhead:
            inverse = InverseKinematicTransformFactory(factory, self.config.inverse_overhead)

        self.attach_transform(parent, frame, factory)
        self.attach_transform(frame, parent, inverse)
        return handle

    def freeze(self) -> FrameGraph:
        """Ends the build phase; later attachments raise :class:`FrozenFrameGraphError`"""
        nx.freeze(self)
        logger.debug("Froze frame graph with %d frames and %d transforms",
                     self.number_of_nodes(), self.number_of_edges())
        return self

    def is_frozen(self) -> bool:
        return nx.is_frozen(self)

    # Lookup
    def handle(self, frame: typ.Any) -> int | None:
        """Handle of an attached frame instance, None if not attached"""
        handle = self._handles.get(id(frame))
        if handle is None or self.nodes[handle]['frame'] is not frame:
            return None
        return handle

    def frame(self, handle: int) -> typ.Any:
        """Frame instance of a handle"""
        return self.nodes[handle]['frame']

    def has_frame(self, frame: typ.Any) -> bool:
        return self.handle(frame) is not None

    def all_frames(self) -> list[typ.Any]:
        """Attached frames in attachment order"""
        return [frame for _, frame in self.nodes(data='frame')]

    def find_frame(self, selector: FrameSelector) -> typ.Any | None:
        """First attached frame, in attachment order, satisfying `selector`

        :param selector: Predicate over frames
        :type selector: FrameSelector

        :return: Matching frame or None
        :rtype: typing.Any | None
        """
        for _, frame in self.nodes(data='frame'):
            if selector(frame):
                return frame
        return None

    def _lookup(self, query: FrameQuery) -> int | None:
        handle = self.handle(query)
        if handle is None and callable(query):
            frame = self.find_frame(query)
            handle = None if frame is None else self.handle(frame)
        return handle

    def _resolve(self, query: FrameQuery, side: str,
                 origin: FrameQuery, destination: FrameQuery) -> int:
        handle = self._lookup(query)
        if handle is None:
            raise FrameNotFound(query, side, origin, destination)
        return handle

    def find_factories_touching(self, query: FrameQuery) -> FactoryView:
        """Factories entering or leaving a frame, empty if the frame does not resolve

        :param query: Frame instance or selector
        :type query: FrameQuery

        :return: Lazy, restartable view
        :rtype: FactoryView
        """
        return FactoryView(self, self._lookup(query))

    def get_factory(self, frame_A: typ.Any, frame_B: typ.Any) -> TransformFactory | None:
        """Factory directly attached from `frame_A` to `frame_B`, None if absent"""
        u, v = self.handle(frame_A), self.handle(frame_B)
        if u is None or v is None or not self.has_edge(u, v):
            return None
        return self.edges[u, v]['factory']

    # Resolution
    def resolve_path(self, origin: FrameQuery, destination: FrameQuery) -> list[TransformFactory]:
        """Lowest cost chain of factories from `origin` to `destination`

        :param origin: Origin frame instance or selector
        :type origin: FrameQuery

        :param destination: Destination frame instance or selector
        :type destination: FrameQuery

        :raises FrameNotFound: If either side does not resolve
        :raises NoTransformPath: If no chain connects the frames

        :return: Ordered factories
        :rtype: list[TransformFactory]
        """
        source = self._resolve(origin, ORIGIN, origin, destination)
        target = self._resolve(destination, DESTINATION, origin, destination)
        return self._resolver.resolve(source, target)

    def get_transform_factory(self, origin: FrameQuery,
                              destination: FrameQuery) -> TransformFactory:
        """Single factory spanning the lowest cost path; the identity when both
        sides resolve to the same frame

        :param origin: Origin frame instance or selector
        :type origin: FrameQuery

        :param destination: Destination frame instance or selector
        :type destination: FrameQuery

        :raises FrameNotFound: If either side does not resolve
        :raises NoTransformPath: If no chain connects the frames

        :return: Factory
        :rtype: TransformFactory
        """
        return self._resolver.reduce(self.resolve_path(origin, destination))

    def get_transform(self, origin: FrameQuery, destination: FrameQuery,
                      epoch: typ.Any) -> ReferenceFrameTransform:
        """Transform between two frames valid at `epoch`

        :param origin: Origin frame instance or selector
        :type origin: FrameQuery

        :param destination: Destination frame instance or selector
        :type destination: FrameQuery

        :param epoch: Epoch of evaluation
        :type epoch: typing.Any

        :raises FrameNotFound: If either side does not resolve
        :raises NoTransformPath: If no chain connects the frames

        :return: Transform
        :rtype: ReferenceFrameTransform
        """
        return self.get_transform_factory(origin, destination).transform(epoch)

    # Diagnostics
    def loops(self) -> list[list[typ.Any]]:
        """Minimum loop basis of the frame graph, ignoring edge direction

        :return: Frames of each loop in traversal order
        :rtype: list[list[typing.Any]]
        """
        undirected = self.to_undirected(as_view=True)

        loop = []
        for c in nx.minimum_cycle_basis(undirected):
            edges = nx.find_cycle(undirected.subgraph(c))
            loop.append([self.frame(u) for u in ordered_unique(u for u, _ in edges)])

        return loop

    def loop_closure(self, loop: typ.Sequence[typ.Any],
                     epoch: typ.Any) -> TransformationParameters:
        """Parameters of the transform around a closed loop of frames

        Edges missing in the traversal direction are crossed with the inverse
        of the opposite edge. A consistent graph yields the identity.

        :param loop: Frames in traversal order; the last connects back to the first
        :type loop: typing.Sequence[typing.Any]

        :param epoch: Epoch of evaluation
        :type epoch: typing.Any

        :raises FrameNotFound: If consecutive frames are not directly connected
        :raises UnsupportedTransformOperation: If a leg is not parametric

        :return: Loop residual
        :rtype: TransformationParameters
        """
        chain = []
        for frame_A, frame_B in zip(loop, list(loop[1:]) + list(loop[:1])):
            factory = self.get_factory(frame_A, frame_B)
            if factory is None:
                reverse = self.get_factory(frame_B, frame_A)
                if reverse is None:
                    raise FrameNotFound(frame_B, DESTINATION, frame_A, frame_B)
                factory = reverse.inverse()
            chain.append(factory)

        transform = compose_factories(chain).transform(epoch)
        if not isinstance(transform, KinematicTransform):
            raise UnsupportedTransformOperation(transform, 'loop_closure')
        return transform.parameters

    def plot(self, ax: plt.Axes | None = None, epoch: typ.Any = None):
        """Draws frames and transforms, labelling each edge with its ranking cost

        :param ax: Plotting axes, defaults to current axes
        :type ax: matplotlib.pyplot.Axes | None, optional

        :param epoch: Epoch of cost evaluation, defaults to the reference epoch
        :type epoch: typing.Any, optional
        """
        # Default parameters
        ax = plt.gca() if ax is None else ax
        epoch = self.reference_epoch if epoch is None else epoch

        pos = nx.circular_layout(self)
        labels = {h: str(frame) for h, frame in self.nodes(data='frame')}
        costs = {(u, v): f"{factory.cost(epoch):g}"
                 for u, v, factory in self.edges(data='factory')}

        nx.draw_networkx(self, pos, ax=ax, labels=labels, node_color='w', edgecolors='k')
        nx.draw_networkx_edge_labels(self, pos, edge_labels=costs, ax=ax)

        ax.set_title('Reference Frames')
        ax.set_axis_off()
