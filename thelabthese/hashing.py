"""Structural hashing and (trivial) deep evaluation of ``These`` values."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .these import These

# One salt per shape, so that ``This(x)`` and ``That(x)`` don't collide.
_SHAPE_SALTS = (
    0x5F3759DF,
    0x2545F491,
    0x6C8E9CF5,
)


def hash_with(
    value: "These[Any, Any]",
    hash_left: Callable[[Any], int] = hash,
    hash_right: Callable[[Any], int] = hash,
) -> int:
    """
    Combine a shape-discriminating salt with the hashes of the present
    payloads. Values that compare equal hash equally as long as the payload
    hashers respect payload equality.
    """
    return value.case_of(
        lambda a: hash((_SHAPE_SALTS[0], hash_left(a))),
        lambda b: hash((_SHAPE_SALTS[1], hash_right(b))),
        lambda a, b: hash((_SHAPE_SALTS[2], hash_left(a), hash_right(b))),
    )


def force[T: "These[Any, Any]"](value: T) -> T:
    """
    Fully evaluate ``value``. Python is eager, so payloads are already
    evaluated and this just hands the value back.
    """
    return value


__all__ = [
    "hash_with",
    "force",
]
