from .these import TheseField

__all__ = [
    "TheseField",
]
