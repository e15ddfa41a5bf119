"""The ``These`` type: this value, that value, or both.

``These[L, R]`` represents values with two non-exclusive possibilities. It
can be used to combine two partially overlapping pieces of information
without forcing a choice between "exactly one" (an ``Either``) and "always
both" (a tuple). Algebraically it is ``L + R + L*R``.

Three shapes exist, ordered ``This < That < Both``:

    >>> This(1)
    This(1)
    >>> Both(1, "a").swap()
    Both('a', 1)
    >>> This(5).with_defaults(0, "")
    (5, '')
"""

from collections.abc import Awaitable, Callable, Iterator
from typing import TYPE_CHECKING, Any, ClassVar, Literal, NoReturn
import operator

from .hashing import hash_with

if TYPE_CHECKING:
    from .applicative import Applicative

_TAG_THIS = 0
_TAG_THAT = 1
_TAG_BOTH = 2


class _These[_LT, _RT]:
    __slots__ = ("left", "right")

    _tag: ClassVar[int]

    left: _LT | None
    right: _RT | None

    def _init(self, left: _LT | None, right: _RT | None) -> None:
        object.__setattr__(self, "left", left)
        object.__setattr__(self, "right", right)

    def __setattr__(self, name: str, value: Any) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # Classification

    @property
    def is_this(self) -> bool:
        return False

    @property
    def is_that(self) -> bool:
        return False

    @property
    def is_both(self) -> bool:
        return False

    @property
    def just_this(self) -> _LT | None:
        """The left payload, only when the shape is exactly ``This``."""
        return None

    @property
    def just_that(self) -> _RT | None:
        """The right payload, only when the shape is exactly ``That``."""
        return None

    @property
    def just_both(self) -> tuple[_LT, _RT] | None:
        """Both payloads, only when the shape is exactly ``Both``."""
        return None

    # Elimination

    def case_of[_T](
        self,
        on_this: Callable[[_LT], _T],
        on_that: Callable[[_RT], _T],
        on_both: Callable[[_LT, _RT], _T],
    ) -> _T:
        raise NotImplementedError

    def with_defaults[_A, _B](
        self,
        default_left: _A,
        default_right: _B,
    ) -> tuple[_LT | _A, _RT | _B]:
        """
        Produce a ``(left, right)`` tuple, substituting the given default for
        whichever side is absent.
        """
        return self.case_of(
            lambda a: (a, default_right),
            lambda b: (default_left, b),
            lambda a, b: (a, b),
        )

    def merge(self, combine: Callable[[Any, Any], Any]) -> Any:
        """
        Coalesce a ``These[T, T]`` into a single ``T``, using ``combine`` when
        both sides are present.
        """
        return self.case_of(lambda a: a, lambda b: b, combine)

    def merge_with[_T](
        self,
        map_left: Callable[[_LT], _T],
        map_right: Callable[[_RT], _T],
        combine: Callable[[_T, _T], _T],
    ) -> _T:
        return self.bimap(map_left, map_right).merge(combine)  # type:ignore[no-any-return]

    # Bifunctor

    def bimap[_LU, _RU](
        self,
        map_left: Callable[[_LT], _LU],
        map_right: Callable[[_RT], _RU],
    ) -> "These[_LU, _RU]":
        return self.case_of(
            lambda a: This(map_left(a)),
            lambda b: That(map_right(b)),
            lambda a, b: Both(map_left(a), map_right(b)),
        )

    def map_left[_LU](self, fn: Callable[[_LT], _LU]) -> "These[_LU, _RT]":
        return self.bimap(fn, _identity)

    def map_right[_RU](self, fn: Callable[[_RT], _RU]) -> "These[_LT, _RU]":
        return self.bimap(_identity, fn)

    fmap = map_right

    def bitraverse(
        self,
        map_left: Callable[[_LT], Any],
        map_right: Callable[[_RT], Any],
        app: "Applicative",
    ) -> Any:
        """
        Effectful ``bimap``. For ``Both`` the left effect runs before the
        right one, combined with ``app.map2``.
        """
        return self.case_of(
            lambda a: app.map(This, map_left(a)),
            lambda b: app.map(That, map_right(b)),
            lambda a, b: app.map2(Both, map_left(a), map_right(b)),
        )

    async def abitraverse[_LU, _RU](
        self,
        map_left: Callable[[_LT], Awaitable[_LU]],
        map_right: Callable[[_RT], Awaitable[_RU]],
    ) -> "These[_LU, _RU]":
        """Coroutine flavoured ``bitraverse``: awaits left, then right."""
        match self:
            case This(left=a):
                return This(await map_left(a))
            case That(right=b):
                return That(await map_right(b))
            case Both(left=a, right=b):
                new_left = await map_left(a)
                new_right = await map_right(b)
                return Both(new_left, new_right)
        raise TypeError(self)

    # Single sided structure over the right slot

    def traverse(self, fn: Callable[[_RT], Any], app: "Applicative") -> Any:
        return self.case_of(
            lambda a: app.pure(This(a)),
            lambda b: app.map(That, fn(b)),
            lambda a, b: app.map(lambda c: Both(a, c), fn(b)),
        )

    def __iter__(self) -> Iterator[_RT]:
        if not self.is_this:
            yield self.right  # type:ignore[misc]

    def foldr[_T](self, fn: Callable[[_RT, _T], _T], initial: _T) -> _T:
        return self.case_of(
            lambda a: initial,
            lambda b: fn(b, initial),
            lambda a, b: fn(b, initial),
        )

    # Bifoldable

    def bifoldr[_T](
        self,
        fold_left: Callable[[_LT, _T], _T],
        fold_right: Callable[[_RT, _T], _T],
        initial: _T,
    ) -> _T:
        return self.case_of(
            lambda a: fold_left(a, initial),
            lambda b: fold_right(b, initial),
            lambda a, b: fold_left(a, fold_right(b, initial)),
        )

    def bifoldl[_T](
        self,
        fold_left: Callable[[_T, _LT], _T],
        fold_right: Callable[[_T, _RT], _T],
        initial: _T,
    ) -> _T:
        return self.case_of(
            lambda a: fold_left(initial, a),
            lambda b: fold_right(initial, b),
            lambda a, b: fold_right(fold_left(initial, a), b),
        )

    bifold = merge

    # Commutativity

    def swap(self) -> "These[_RT, _LT]":
        return self.case_of(
            lambda a: That(a),
            lambda b: This(b),
            lambda a, b: Both(b, a),
        )

    # Semigroup

    def combine(
        self,
        other: "These[_LT, _RT]",
        combine_left: Callable[[_LT, _LT], _LT] = operator.add,
        combine_right: Callable[[_RT, _RT], _RT] = operator.add,
    ) -> "These[_LT, _RT]":
        """
        Combine two values, merging payloads present on the same side and
        taking the union of shapes otherwise.
        """
        match (self, other):
            case (This(left=a), This(left=b)):
                return This(combine_left(a, b))
            case (This(left=a), That(right=y)):
                return Both(a, y)
            case (This(left=a), Both(left=b, right=y)):
                return Both(combine_left(a, b), y)
            case (That(right=x), This(left=b)):
                return Both(b, x)
            case (That(right=x), That(right=y)):
                return That(combine_right(x, y))
            case (That(right=x), Both(left=b, right=y)):
                return Both(b, combine_right(x, y))
            case (Both(left=a, right=x), This(left=b)):
                return Both(combine_left(a, b), x)
            case (Both(left=a, right=x), That(right=y)):
                return Both(a, combine_right(x, y))
            case (Both(left=a, right=x), Both(left=b, right=y)):
                return Both(combine_left(a, b), combine_right(x, y))
        raise TypeError(f"Cannot combine {self!r} with {other!r}")

    def __add__(self, other: object) -> "These[_LT, _RT]":
        if not isinstance(other, _These):
            return NotImplemented
        return self.combine(other)  # type:ignore[arg-type]

    # Monad (right biased; left payloads accumulate)

    def bind[_RU](
        self,
        fn: "Callable[[_RT], These[_LT, _RU]]",
        combine_left: Callable[[_LT, _LT], _LT] = operator.add,
    ) -> "These[_LT, _RU]":
        match self:
            case This(left=a):
                return This(a)
            case That(right=x):
                return fn(x)
            case Both(left=a, right=x):
                match fn(x):
                    case This(left=b):
                        return This(combine_left(a, b))
                    case That(right=y):
                        return Both(a, y)
                    case Both(left=b, right=y):
                        return Both(combine_left(a, b), y)
        raise TypeError(self)

    # Comparison and hashing

    def _payload(self) -> tuple[Any, ...]:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _These):
            return NotImplemented
        return self._tag == other._tag and self._payload() == other._payload()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, _These):
            return NotImplemented
        if self._tag != other._tag:
            return self._tag < other._tag
        return self._payload() < other._payload()  # type:ignore[no-any-return]

    def __le__(self, other: object) -> bool:
        if not isinstance(other, _These):
            return NotImplemented
        return self == other or self < other

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, _These):
            return NotImplemented
        return other < self

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, _These):
            return NotImplemented
        return self == other or other < self

    def __hash__(self) -> int:
        return hash_with(self)  # type:ignore[arg-type]

    def __repr__(self) -> str:
        args = ", ".join(repr(p) for p in self._payload())
        return f"{type(self).__name__}({args})"

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), self._payload())


class This[_LT](_These[_LT, Any]):
    """Only a left value."""

    __slots__ = ()
    __match_args__ = ("left",)
    _tag = _TAG_THIS

    left: _LT

    def __init__(self, left: _LT) -> None:
        self._init(left, None)

    @property
    def is_this(self) -> Literal[True]:
        return True

    @property
    def is_that(self) -> Literal[False]:
        return False

    @property
    def is_both(self) -> Literal[False]:
        return False

    @property
    def just_this(self) -> _LT:
        return self.left

    def case_of[_T](
        self,
        on_this: Callable[[_LT], _T],
        on_that: Callable[[Any], _T],
        on_both: Callable[[_LT, Any], _T],
    ) -> _T:
        return on_this(self.left)

    def _payload(self) -> tuple[Any, ...]:
        return (self.left,)


class That[_RT](_These[Any, _RT]):
    """Only a right value."""

    __slots__ = ()
    __match_args__ = ("right",)
    _tag = _TAG_THAT

    right: _RT

    def __init__(self, right: _RT) -> None:
        self._init(None, right)

    @property
    def is_this(self) -> Literal[False]:
        return False

    @property
    def is_that(self) -> Literal[True]:
        return True

    @property
    def is_both(self) -> Literal[False]:
        return False

    @property
    def just_that(self) -> _RT:
        return self.right

    def case_of[_T](
        self,
        on_this: Callable[[Any], _T],
        on_that: Callable[[_RT], _T],
        on_both: Callable[[Any, _RT], _T],
    ) -> _T:
        return on_that(self.right)

    def _payload(self) -> tuple[Any, ...]:
        return (self.right,)


class Both[_LT, _RT](_These[_LT, _RT]):
    """A left value and a right value together."""

    __slots__ = ()
    __match_args__ = ("left", "right")
    _tag = _TAG_BOTH

    left: _LT
    right: _RT

    def __init__(self, left: _LT, right: _RT) -> None:
        self._init(left, right)

    @property
    def is_this(self) -> Literal[False]:
        return False

    @property
    def is_that(self) -> Literal[False]:
        return False

    @property
    def is_both(self) -> Literal[True]:
        return True

    @property
    def just_both(self) -> tuple[_LT, _RT]:
        return (self.left, self.right)

    def case_of[_T](
        self,
        on_this: Callable[[_LT], _T],
        on_that: Callable[[_RT], _T],
        on_both: Callable[[_LT, _RT], _T],
    ) -> _T:
        return on_both(self.left, self.right)

    def _payload(self) -> tuple[Any, ...]:
        return (self.left, self.right)


type These[_LT, _RT] = This[_LT] | That[_RT] | Both[_LT, _RT]


def _identity[_T](value: _T) -> _T:
    return value


def is_these(value: object) -> bool:
    """``True`` for any of ``This``, ``That`` and ``Both``."""
    return isinstance(value, _These)


def these[_LT, _RT, _T](
    on_this: Callable[[_LT], _T],
    on_that: Callable[[_RT], _T],
    on_both: Callable[[_LT, _RT], _T],
    value: These[_LT, _RT],
) -> _T:
    """Case analysis for the ``These`` type."""
    return value.case_of(on_this, on_that, on_both)


def here(fn: Callable[[Any], Any], value: These[Any, Any], app: "Applicative") -> Any:
    """
    Traversal of the left half of a ``These``. ``That`` values pass through
    ``app.pure`` untouched.
    """
    return value.case_of(
        lambda a: app.map(This, fn(a)),
        lambda b: app.pure(That(b)),
        lambda a, b: app.map(lambda c: Both(c, b), fn(a)),
    )


def there(fn: Callable[[Any], Any], value: These[Any, Any], app: "Applicative") -> Any:
    """
    Traversal of the right half of a ``These``. ``This`` values pass through
    ``app.pure`` untouched.
    """
    return value.traverse(fn, app)


def pure[_RT](value: _RT) -> That[_RT]:
    return That(value)


def apply[_LT, _RT, _RU](
    fns: These[_LT, Callable[[_RT], _RU]],
    value: These[_LT, _RT],
    combine_left: Callable[[_LT, _LT], _LT] = operator.add,
) -> These[_LT, _RU]:
    """Apply a right-side function to a right-side value, accumulating lefts."""
    return fns.bind(lambda fn: value.map_right(fn), combine_left)


__all__ = [
    "These",
    "This",
    "That",
    "Both",
    "is_these",
    "these",
    "here",
    "there",
    "pure",
    "apply",
]
