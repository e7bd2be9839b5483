"""utilities.py - Assorted Helper Functions"""
from __future__ import annotations

import typing as typ
import numpy.typing as npt
from datetime import datetime, timedelta
from numbers import Real

import numpy as np

__all__ = ['ordered_unique', 'seconds_between', 'as_vector', 'zero_vector']

def ordered_unique(col: typ.Iterable) -> tuple:
    """Returns order preserved unique set"""
    seen = set()
    return tuple(ele for ele in col if not (ele in seen or seen.add(ele)))

def seconds_between(epoch: typ.Any, reference: typ.Any) -> float:
    """Elapsed seconds from `reference` to `epoch`

    :param epoch: Epoch of interest, a :code:`datetime.datetime`,
        :code:`numpy.datetime64` or a number of seconds
    :type epoch: typing.Any

    :param reference: Reference epoch of the same kind
    :type reference: typing.Any

    :raises TypeError: If the epochs are of different or unsupported kinds

    :return: :math:`epoch - reference` in seconds
    :rtype: float
    """
    if isinstance(epoch, datetime) and isinstance(reference, datetime):
        return (epoch - reference) / timedelta(seconds=1)
    if isinstance(epoch, np.datetime64) and isinstance(reference, np.datetime64):
        return float((epoch - reference) / np.timedelta64(1, 'ns')) * 1e-9
    if isinstance(epoch, Real) and isinstance(reference, Real) \
            and not isinstance(epoch, bool) and not isinstance(reference, bool):
        return float(epoch) - float(reference)

    raise TypeError(f"Cannot compare epochs of type {type(epoch).__name__} "
                    f"and {type(reference).__name__}")

def as_vector(value: npt.ArrayLike, name: str = 'vector') -> np.ndarray:
    """Converts input to a read-only double array of shape :math:`(3,)` or :math:`(n,3)`

    :param value: Vector(s) to convert
    :type value: numpy.typing.ArrayLike

    :param name: Name used in error messages, defaults to 'vector'
    :type name: str, optional

    :raises ValueError: If the trailing dimension is not 3

    :return: Read-only copy
    :rtype: numpy.ndarray
    """
    out = np.array(value, dtype=np.double)
    if out.ndim not in (1, 2) or out.shape[-1] != 3:
        raise ValueError(f"{name} must have shape (3,) or (n,3), got {out.shape}")

    out.flags.writeable = False
    return out

def zero_vector() -> np.ndarray:
    """Read-only zero vector in :math:`\\mathbb{R}^3`"""
    return as_vector(np.zeros(3))
