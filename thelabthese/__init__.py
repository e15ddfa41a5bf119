from .laws import assoc, from_nested, reassoc, swap, to_nested
from .selection import cat_both, cat_that, cat_this, partition_these
from .these import Both, That, These, This, apply, here, is_these, pure, there

__all__ = [
    "These",
    "This",
    "That",
    "Both",
    "here",
    "there",
    "is_these",
    "pure",
    "apply",
    "cat_this",
    "cat_that",
    "cat_both",
    "partition_these",
    "swap",
    "assoc",
    "reassoc",
    "to_nested",
    "from_nested",
]
