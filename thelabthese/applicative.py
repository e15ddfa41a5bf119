"""
Effect contexts for the traversals in :mod:`thelabthese.these`.

Python has no type classes, so an effect is described by an explicit
:class:`Applicative` instance that gets passed alongside the functions being
traversed. ``map2`` must evaluate its first argument's effect before its
second's; ``bitraverse`` relies on that to run the left effect first.
"""

from collections.abc import Callable, Sequence
from itertools import product
from typing import Any, Protocol

from thelabtyping.result import Err, Ok, Result


class Applicative(Protocol):
    def pure(self, value: Any) -> Any: ...

    def map(self, fn: Callable[[Any], Any], fa: Any) -> Any: ...

    def map2(self, fn: Callable[[Any, Any], Any], fa: Any, fb: Any) -> Any: ...


class Identity:
    """No effect at all: ``F[T]`` is just ``T``."""

    def pure(self, value: Any) -> Any:
        return value

    def map(self, fn: Callable[[Any], Any], fa: Any) -> Any:
        return fn(fa)

    def map2(self, fn: Callable[[Any, Any], Any], fa: Any, fb: Any) -> Any:
        return fn(fa, fb)


class ResultApplicative:
    """
    Short circuiting ``Ok``/``Err`` results. When both arguments of ``map2``
    failed, the first (left) error wins.
    """

    def pure(self, value: Any) -> Result[Any, Any]:
        return Ok(value)

    def map(self, fn: Callable[[Any], Any], fa: Result[Any, Any]) -> Result[Any, Any]:
        if isinstance(fa, Err):
            return fa
        return Ok(fn(fa.ok_value))

    def map2(
        self,
        fn: Callable[[Any, Any], Any],
        fa: Result[Any, Any],
        fb: Result[Any, Any],
    ) -> Result[Any, Any]:
        if isinstance(fa, Err):
            return fa
        if isinstance(fb, Err):
            return fb
        return Ok(fn(fa.ok_value, fb.ok_value))


class ListApplicative:
    """Non-determinism: every combination, left-major."""

    def pure(self, value: Any) -> list[Any]:
        return [value]

    def map(self, fn: Callable[[Any], Any], fa: Sequence[Any]) -> list[Any]:
        return [fn(a) for a in fa]

    def map2(
        self,
        fn: Callable[[Any, Any], Any],
        fa: Sequence[Any],
        fb: Sequence[Any],
    ) -> list[Any]:
        return [fn(a, b) for a, b in product(fa, fb)]


class Const:
    """
    Accumulate a monoid, ignoring the structure. Traversing with ``Const``
    is a fold: the result is the combination of every visited payload.
    """

    def __init__(self, empty: Any, combine: Callable[[Any, Any], Any]) -> None:
        self.empty = empty
        self.combine = combine

    def pure(self, value: Any) -> Any:
        return self.empty

    def map(self, fn: Callable[[Any], Any], fa: Any) -> Any:
        return fa

    def map2(self, fn: Callable[[Any, Any], Any], fa: Any, fb: Any) -> Any:
        return self.combine(fa, fb)


class Compose:
    """The composition ``F[G[T]]`` of two applicatives."""

    def __init__(self, outer: Applicative, inner: Applicative) -> None:
        self.outer = outer
        self.inner = inner

    def pure(self, value: Any) -> Any:
        return self.outer.pure(self.inner.pure(value))

    def map(self, fn: Callable[[Any], Any], fa: Any) -> Any:
        return self.outer.map(lambda ga: self.inner.map(fn, ga), fa)

    def map2(self, fn: Callable[[Any, Any], Any], fa: Any, fb: Any) -> Any:
        return self.outer.map2(
            lambda ga, gb: self.inner.map2(fn, ga, gb),
            fa,
            fb,
        )


IDENTITY = Identity()
RESULT = ResultApplicative()
LIST = ListApplicative()


__all__ = [
    "Applicative",
    "Identity",
    "ResultApplicative",
    "ListApplicative",
    "Const",
    "Compose",
    "IDENTITY",
    "RESULT",
    "LIST",
]
