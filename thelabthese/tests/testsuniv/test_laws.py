from collections.abc import Callable
from typing import Any

from django.test import SimpleTestCase

from thelabthese.either import Left, Right
from thelabthese.laws import assoc, from_nested, reassoc, swap, to_nested
from thelabthese.these import Both, That, These, This

# Builders for every outer shape, given its (possibly unused) inner value
_OUTER: dict[str, Callable[[Any, Any], These[Any, Any]]] = {
    "This": lambda payload, inner: This(payload),
    "That": lambda payload, inner: That(inner),
    "Both": lambda payload, inner: Both(payload, inner),
}
_INNER: dict[str, These[Any, Any]] = {
    "This": This("inner-this"),
    "That": That("inner-that"),
    "Both": Both("inner-this", "inner-that"),
}


class SwapTest(SimpleTestCase):
    def test_swap(self) -> None:
        self.assertEqual(swap(This(1)), That(1))
        self.assertEqual(swap(That("a")), This("a"))
        self.assertEqual(swap(Both(1, "a")), Both("a", 1))

    def test_involution(self) -> None:
        for value in (This(1), That("a"), Both(1, "a")):
            with self.subTest(value=value):
                self.assertEqual(swap(swap(value)), value)


class AssocTest(SimpleTestCase):
    """
    ``These[A, These[B, C]]`` and ``These[These[A, B], C]`` each have seven
    inhabiting shapes; every one of them is spelled out here.
    """

    cases: list[tuple[These[Any, Any], These[Any, Any]]] = [
        (This("a"), This(This("a"))),
        (That(This("b")), This(That("b"))),
        (That(That("c")), That("c")),
        (That(Both("b", "c")), Both(That("b"), "c")),
        (Both("a", This("b")), This(Both("a", "b"))),
        (Both("a", That("c")), Both(This("a"), "c")),
        (Both("a", Both("b", "c")), Both(Both("a", "b"), "c")),
    ]

    def test_assoc(self) -> None:
        for right_nested, left_nested in self.cases:
            with self.subTest(value=right_nested):
                self.assertEqual(assoc(right_nested), left_nested)

    def test_reassoc(self) -> None:
        for right_nested, left_nested in self.cases:
            with self.subTest(value=left_nested):
                self.assertEqual(reassoc(left_nested), right_nested)

    def test_round_trip_every_shape_combination(self) -> None:
        """All nine (outer, inner) shape pairs, for both nestings"""
        for outer_name, outer in _OUTER.items():
            for inner_name, inner in _INNER.items():
                with self.subTest(outer=outer_name, inner=inner_name):
                    right_nested = outer("a", inner)
                    self.assertEqual(reassoc(assoc(right_nested)), right_nested)

                    left_nested = outer(inner, "c")
                    self.assertEqual(assoc(reassoc(left_nested)), left_nested)

    def test_rejects_flat_values(self) -> None:
        with self.assertRaises(TypeError):
            assoc(That(1))
        with self.assertRaises(TypeError):
            reassoc(This(1))
        with self.assertRaises(TypeError):
            assoc(Both(1, 2))


class NestedTest(SimpleTestCase):
    def test_to_nested(self) -> None:
        self.assertEqual(to_nested(This(1)), Left(1))
        self.assertEqual(to_nested(That("b")), Right(Left("b")))
        self.assertEqual(to_nested(Both(1, "b")), Right(Right((1, "b"))))

    def test_round_trip(self) -> None:
        for value in (This(1), That("b"), Both(1, "b")):
            with self.subTest(value=value):
                self.assertEqual(from_nested(to_nested(value)), value)

    def test_from_nested_rejects_other_values(self) -> None:
        with self.assertRaises(TypeError):
            from_nested(Right(1))  # type:ignore[arg-type]
