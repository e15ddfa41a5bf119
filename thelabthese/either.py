from typing import Literal


class _Either[_LT, _RT]:
    __slots__ = ("left", "right")

    left: _LT
    right: _RT

    @property
    def is_left(self) -> bool:
        return False

    @property
    def is_right(self) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _Either):
            return NotImplemented
        return (self.is_left, self.left, self.right) == (
            other.is_left,
            other.left,
            other.right,
        )

    def __hash__(self) -> int:
        return hash((self.is_left, self.left, self.right))


class Left[_LT](_Either[_LT, None]):
    __slots__ = ()
    __match_args__ = ("left",)

    def __init__(self, value: _LT) -> None:
        self.left = value
        self.right = None

    @property
    def is_left(self) -> Literal[True]:
        return True

    @property
    def is_right(self) -> Literal[False]:
        return False

    def __repr__(self) -> str:
        return f"Left({self.left!r})"


class Right[_RT](_Either[None, _RT]):
    __slots__ = ()
    __match_args__ = ("right",)

    def __init__(self, value: _RT) -> None:
        self.left = None
        self.right = value

    @property
    def is_left(self) -> Literal[False]:
        return False

    @property
    def is_right(self) -> Literal[True]:
        return True

    def __repr__(self) -> str:
        return f"Right({self.right!r})"


type Either[_LT, _RT] = Left[_LT] | Right[_RT]

# ``These[A, B]`` spelled with only sums and products: ``A + (B + A*B)``.
type Nested[_LT, _RT] = Either[_LT, Either[_RT, tuple[_LT, _RT]]]

