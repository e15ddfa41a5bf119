"""Selecting shapes out of sequences of ``These`` values.

Every function here raises ``TypeError`` on an item that isn't a ``These``.
"""

from collections.abc import Iterable, Iterator

from .these import Both, That, These, This, is_these


def _checked[_LT, _RT](values: Iterable[These[_LT, _RT]]) -> Iterator[These[_LT, _RT]]:
    for value in values:
        if not is_these(value):
            raise TypeError(f"Expected a These value, got {value!r}")
        yield value


def cat_this[_LT](values: Iterable[These[_LT, object]]) -> list[_LT]:
    """Left payloads of every ``This``, in order."""
    return [v.left for v in _checked(values) if isinstance(v, This)]


def cat_that[_RT](values: Iterable[These[object, _RT]]) -> list[_RT]:
    """Right payloads of every ``That``, in order."""
    return [v.right for v in _checked(values) if isinstance(v, That)]


def cat_both[_LT, _RT](values: Iterable[These[_LT, _RT]]) -> list[tuple[_LT, _RT]]:
    """Payload pairs of every ``Both``, in order."""
    return [(v.left, v.right) for v in _checked(values) if isinstance(v, Both)]


def partition_these[_LT, _RT](
    values: Iterable[These[_LT, _RT]],
) -> tuple[list[tuple[_LT, _RT]], tuple[list[_LT], list[_RT]]]:
    """
    Split values by shape in a single pass. Returns
    ``(both_pairs, (this_values, that_values))``, each list keeping the
    relative order of the input.
    """
    pairs: list[tuple[_LT, _RT]] = []
    lefts: list[_LT] = []
    rights: list[_RT] = []
    for value in _checked(values):
        match value:
            case Both(left=a, right=b):
                pairs.append((a, b))
            case This(left=a):
                lefts.append(a)
            case That(right=b):
                rights.append(b)
    return pairs, (lefts, rights)


__all__ = [
    "cat_this",
    "cat_that",
    "cat_both",
    "partition_these",
]
