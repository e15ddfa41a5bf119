"""
Random generation and shrinking of ``These`` values, for property tests.

A generator is a function of a :class:`random.Random`; a shrinker maps a
value to an iterable of "smaller" candidate values. :func:`for_all` ties
them together:

.. code-block:: python

    gen = arbitrary(integers(), text())
    counterexample = for_all(
        gen,
        lambda x: x.swap().swap() == x,
        shrinker=shrink(shrink_int, shrink_text),
    )
    assert counterexample is None
"""

from collections.abc import Callable, Iterable, Iterator
from typing import Any
import logging
import random
import string

from .these import Both, That, These, This

logger = logging.getLogger(__name__)

type Gen[T] = Callable[[random.Random], T]
type Shrink[T] = Callable[[T], Iterable[T]]


def arbitrary[_LT, _RT](
    gen_left: Gen[_LT],
    gen_right: Gen[_RT],
) -> Gen[These[_LT, _RT]]:
    """Pick one of the three shapes uniformly, then fill in its payloads."""

    def gen(rng: random.Random) -> These[_LT, _RT]:
        shape = rng.randrange(3)
        if shape == 0:
            return This(gen_left(rng))
        if shape == 1:
            return That(gen_right(rng))
        return Both(gen_left(rng), gen_right(rng))

    return gen


def shrink_pair[_A, _B](
    shrink_left: Shrink[_A],
    shrink_right: Shrink[_B],
) -> Shrink[tuple[_A, _B]]:
    """Shrink the first component, then the second."""

    def shrinker(pair: tuple[_A, _B]) -> Iterator[tuple[_A, _B]]:
        a, b = pair
        for a2 in shrink_left(a):
            yield (a2, b)
        for b2 in shrink_right(b):
            yield (a, b2)

    return shrinker


def shrink[_LT, _RT](
    shrink_left: Shrink[_LT],
    shrink_right: Shrink[_RT],
) -> Shrink[These[_LT, _RT]]:
    """
    ``Both(a, b)`` first shrinks to ``This(a)`` and ``That(b)``, then to
    ``Both`` values built from the shrunk pair. ``This``/``That`` delegate to
    the payload's shrinker.
    """
    pairs = shrink_pair(shrink_left, shrink_right)

    def shrinker(value: These[_LT, _RT]) -> Iterator[These[_LT, _RT]]:
        match value:
            case This(left=a):
                yield from (This(a2) for a2 in shrink_left(a))
            case That(right=b):
                yield from (That(b2) for b2 in shrink_right(b))
            case Both(left=a, right=b):
                yield This(a)
                yield That(b)
                yield from (Both(a2, b2) for a2, b2 in pairs((a, b)))

    return shrinker


def integers(lo: int = -1000, hi: int = 1000) -> Gen[int]:
    return lambda rng: rng.randint(lo, hi)


def text(max_size: int = 10, alphabet: str = string.ascii_letters) -> Gen[str]:
    def gen(rng: random.Random) -> str:
        size = rng.randint(0, max_size)
        return "".join(rng.choice(alphabet) for _ in range(size))

    return gen


def lists[T](elements: Gen[T], max_size: int = 5) -> Gen[list[T]]:
    def gen(rng: random.Random) -> list[T]:
        return [elements(rng) for _ in range(rng.randint(0, max_size))]

    return gen


def shrink_int(n: int) -> Iterator[int]:
    """Towards zero: ``0``, the negation of negatives, then halving steps."""
    if n == 0:
        return
    yield 0
    if n < 0:
        yield -n
    i = n // 2 if n > 0 else -(-n // 2)
    while i != 0:
        candidate = n - i
        if candidate not in (0, -n):
            yield candidate
        i = i // 2 if i > 0 else -(-i // 2)


def shrink_text(s: str) -> Iterator[str]:
    """Drop characters: the empty string, halves, then one at a time."""
    if not s:
        return
    candidates = [""]
    half = len(s) // 2
    if half:
        candidates += [s[:half], s[half:]]
    if len(s) > 1:
        candidates += [s[:i] + s[i + 1 :] for i in range(len(s))]
    yield from dict.fromkeys(candidates)


def no_shrink(value: Any) -> Iterator[Any]:
    return iter(())


def for_all[T](
    gen: Gen[T],
    prop: Callable[[T], bool],
    shrinker: Shrink[T] = no_shrink,
    runs: int = 200,
    seed: int | None = 0,
) -> T | None:
    """
    Check ``prop`` against ``runs`` generated values. Returns ``None`` if it
    held every time, otherwise the smallest failing value found by greedily
    following ``shrinker``.
    """
    rng = random.Random(seed)
    for _ in range(runs):
        value = gen(rng)
        if not prop(value):
            logger.info("Property failed for %r, shrinking", value)
            return _minimize(value, prop, shrinker)
    return None


def _minimize[T](value: T, prop: Callable[[T], bool], shrinker: Shrink[T]) -> T:
    current = value
    progress = True
    while progress:
        progress = False
        for candidate in shrinker(current):
            if not prop(candidate):
                current = candidate
                progress = True
                break
    return current


__all__ = [
    "Gen",
    "Shrink",
    "arbitrary",
    "shrink",
    "shrink_pair",
    "integers",
    "text",
    "lists",
    "shrink_int",
    "shrink_text",
    "no_shrink",
    "for_all",
]
