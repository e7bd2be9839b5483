"""frame.py - Reference Frames and Frame Selectors"""
from __future__ import annotations

import typing as typ
from datetime import datetime

__all__ = ['ReferenceFrame', 'ITRF', 'FrameSelector',
           'named', 'of_type', 'itrf_selector']


class ReferenceFrame():
    """Named coordinate system in which states are expressed.

    Frames compare by identity only: two instances are distinct vertices of a
    frame graph even when their names match. Physical meaning (inertial,
    rotating, body centered) comes from the factories that connect a frame.

    :param name: Frame name, defaults to ''
    :type name: str, optional
    """
    def __init__(self, name: str = ''):
        """Initialize ReferenceFrame"""
        self.name = name

    __hash__ = object.__hash__

    def __eq__(self, other: object) -> bool:
        return self is other

    def __str__(self) -> str:
        return self.name or f"{type(self).__name__}@{id(self):x}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class ITRF(ReferenceFrame):
    """International Terrestrial Reference Frame realization of a given year

    :param year: Year of the realization, e.g. 2008
    :type year: int
    """
    def __init__(self, year: int):
        """Initialize ITRF"""
        super().__init__(f"ITRF{year}")
        self.year = year

    @property
    def epoch(self) -> datetime:
        """Reference epoch of the realization, January 1st 12:00 of its year"""
        return datetime(self.year, 1, 1, 12, 0, 0)


FrameSelector = typ.Callable[[typ.Any], bool]

# %% Selectors
def named(name: str) -> FrameSelector:
    """Selector matching frames by name

    :param name: Frame name
    :type name: str

    :return: Predicate over frames
    :rtype: FrameSelector
    """
    def selector(frame: typ.Any) -> bool:
        return getattr(frame, 'name', None) == name
    selector.__name__ = f"named({name!r})"
    return selector

def of_type(cls: type) -> FrameSelector:
    """Selector matching frames that are instances of a class

    :param cls: Frame class
    :type cls: type

    :return: Predicate over frames
    :rtype: FrameSelector
    """
    def selector(frame: typ.Any) -> bool:
        return isinstance(frame, cls)
    selector.__name__ = f"of_type({cls.__name__})"
    return selector

def itrf_selector(year: int) -> FrameSelector:
    """Selector identifying the ITRF realization of a specific year

    :param year: Year of the realization
    :type year: int

    :return: Predicate over frames
    :rtype: FrameSelector
    """
    def selector(frame: typ.Any) -> bool:
        return isinstance(frame, ITRF) and frame.year == year
    selector.__name__ = f"itrf_selector({year})"
    return selector
