"""
Witnesses that ``These`` is commutative and associative.

    swap(swap(x)) == x
    assoc(reassoc(x)) == x
    reassoc(assoc(x)) == x
"""

from typing import Any

from .either import Left, Nested, Right
from .these import Both, That, These, This


def swap[_LT, _RT](value: These[_LT, _RT]) -> These[_RT, _LT]:
    return value.swap()


def assoc[_A, _B, _C](
    value: These[_A, These[_B, _C]],
) -> These[These[_A, _B], _C]:
    """``These[A, These[B, C]]`` -> ``These[These[A, B], C]``"""
    match value:
        case This(left=a):
            return This(This(a))
        case That(right=This(left=b)):
            return This(That(b))
        case That(right=That(right=c)):
            return That(c)
        case That(right=Both(left=b, right=c)):
            return Both(That(b), c)
        case Both(left=a, right=This(left=b)):
            return This(Both(a, b))
        case Both(left=a, right=That(right=c)):
            return Both(This(a), c)
        case Both(left=a, right=Both(left=b, right=c)):
            return Both(Both(a, b), c)
    raise TypeError(f"Expected These[A, These[B, C]], got {value!r}")


def reassoc[_A, _B, _C](
    value: These[These[_A, _B], _C],
) -> These[_A, These[_B, _C]]:
    """``These[These[A, B], C]`` -> ``These[A, These[B, C]]``"""
    match value:
        case This(left=This(left=a)):
            return This(a)
        case This(left=That(right=b)):
            return That(This(b))
        case That(right=c):
            return That(That(c))
        case Both(left=That(right=b), right=c):
            return That(Both(b, c))
        case This(left=Both(left=a, right=b)):
            return Both(a, This(b))
        case Both(left=This(left=a), right=c):
            return Both(a, That(c))
        case Both(left=Both(left=a, right=b), right=c):
            return Both(a, Both(b, c))
    raise TypeError(f"Expected These[These[A, B], C], got {value!r}")


def to_nested[_LT, _RT](value: These[_LT, _RT]) -> Nested[_LT, _RT]:
    """Rewrite a ``These`` using only ``Either`` and tuples."""
    return value.case_of(
        lambda a: Left(a),
        lambda b: Right(Left(b)),
        lambda a, b: Right(Right((a, b))),
    )


def from_nested(value: Nested[Any, Any]) -> These[Any, Any]:
    """Inverse of :func:`to_nested`."""
    match value:
        case Left(left=a):
            return This(a)
        case Right(right=Left(left=b)):
            return That(b)
        case Right(right=Right(right=(a, b))):
            return Both(a, b)
    raise TypeError(f"Expected a nested Either, got {value!r}")


__all__ = [
    "swap",
    "assoc",
    "reassoc",
    "to_nested",
    "from_nested",
]
