"""
Structural pruning of empty members.

Runs over the fully assembled output and removes object members whose
value is an empty array or an empty object.
"""

from typing import Any, Iterable

# Members GeoJSON requires even when empty
DEFAULT_KEEP = ("features",)


def is_empty_container(value: Any) -> bool:
    return isinstance(value, (list, dict)) and len(value) == 0


def prune_empty(value: Any, keep: Iterable[str] = DEFAULT_KEEP) -> Any:
    """
    Return a copy of `value` with empty members removed, bottom up.

    An object that becomes empty once its own members are pruned is removed
    from its parent as well. List elements are pruned inside but never
    dropped, since their position is meaningful. Members named in `keep`
    are never dropped.

    Geometry members are not protected: an empty geometry such as
    ``{"type": "LineString", "coordinates": []}`` comes out as
    ``{"type": "LineString"}``, which no longer passes validation.
    """
    keep = frozenset(keep)
    return _prune(value, keep)


def _prune(value: Any, keep: frozenset) -> Any:
    if isinstance(value, list):
        return [_prune(item, keep) for item in value]
    if isinstance(value, dict):
        pruned = {}
        for key, member in value.items():
            member = _prune(member, keep)
            if is_empty_container(member) and key not in keep:
                continue
            pruned[key] = member
        return pruned
    return value
