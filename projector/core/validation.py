"""
Caller precondition checks.

A bad index written into a flat buffer corrupts a neighbor's slot
silently, so every index is checked before any array is touched.
"""

from numbers import Integral
from typing import Iterable, List, Optional

from .models import DataSet, NearestEntry


def check_point_index(data_set: DataSet, index, role: str = 'point') -> int:
    """Return `index` as int, or raise if it is not a valid point index."""
    if isinstance(index, bool) or not isinstance(index, Integral):
        raise TypeError(f"{role} index must be an integer, got {type(index).__name__}")
    n = len(data_set.points)
    if not 0 <= index < n:
        raise IndexError(f"{role} index {index} out of range for data set with {n} points")
    return int(index)


def check_hover(data_set: DataSet, hover) -> Optional[int]:
    if hover is None:
        return None
    return check_point_index(data_set, hover, role='hover')


def check_selection(data_set: DataSet, selection: Optional[Iterable[int]]) -> List[int]:
    """Selection must be distinct, in-range point indices. Order is preserved."""
    if selection is None:
        return []
    checked = [check_point_index(data_set, i, role='selected') for i in selection]
    if len(set(checked)) != len(checked):
        seen, dupes = set(), []
        for i in checked:
            if i in seen:
                dupes.append(i)
            seen.add(i)
        raise ValueError(f"Selection contains duplicate point indices: {sorted(set(dupes))}")
    return checked


def check_neighbors(data_set: DataSet, neighbors: Optional[Iterable[NearestEntry]]) -> List[NearestEntry]:
    if neighbors is None:
        return []
    neighbors = list(neighbors)
    for entry in neighbors:
        check_point_index(data_set, entry.index, role='neighbor')
    return neighbors
