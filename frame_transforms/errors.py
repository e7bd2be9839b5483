"""errors.py - Frame Resolution and Transformation Errors"""
from __future__ import annotations

import typing as typ

__all__ = ['FrameTransformError',
           'ReferenceFrameTransformationException', 'FrameNotFound', 'NoTransformPath',
           'UnsupportedTransformOperation',
           'FrozenFrameGraphError']

ORIGIN, DESTINATION, PATH = 'origin', 'destination', 'path'


class FrameTransformError(Exception):
    """Base class of all errors raised by :code:`frame_transforms`"""


class ReferenceFrameTransformationException(FrameTransformError):
    """Resolving a transformation between two frames failed

    :param message: Human readable description
    :type message: str

    :param side: Which part of the request failed, one of 'origin',
        'destination' or 'path'
    :type side: str

    :param origin: Requested origin frame or selector, defaults to None
    :type origin: typing.Any, optional

    :param destination: Requested destination frame or selector, defaults to None
    :type destination: typing.Any, optional
    """
    def __init__(self, message: str, side: str,
                 origin: typ.Any = None, destination: typ.Any = None):
        super().__init__(message)
        if side not in (ORIGIN, DESTINATION, PATH):
            raise ValueError(f"Unknown failure side '{side}'")

        self.side = side
        self.origin = origin
        self.destination = destination


class FrameNotFound(ReferenceFrameTransformationException):
    """A frame or selector did not resolve to an attached frame"""
    def __init__(self, query: typ.Any, side: str,
                 origin: typ.Any = None, destination: typ.Any = None):
        super().__init__(f"No attached reference frame matches {side} '{query}'",
                         side, origin, destination)
        self.query = query


class NoTransformPath(ReferenceFrameTransformationException):
    """Both frames resolved but no chain of factories connects them"""
    def __init__(self, origin: typ.Any, destination: typ.Any):
        super().__init__(
            f"No reference frame transformation path exists between '{origin}' and '{destination}'",
            PATH, origin, destination)


class UnsupportedTransformOperation(FrameTransformError, NotImplementedError):
    """A transform does not implement the requested operation

    :param transform: Transform that was asked
    :type transform: typing.Any

    :param operation: Name of the unsupported operation
    :type operation: str
    """
    def __init__(self, transform: typ.Any, operation: str):
        super().__init__(f"{type(transform).__name__} does not support '{operation}'")
        self.transform = transform
        self.operation = operation


class FrozenFrameGraphError(FrameTransformError):
    """Mutation attempted on a frame graph that has been frozen"""
