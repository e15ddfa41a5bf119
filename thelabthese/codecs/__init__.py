from . import binary
from .json import JSONCodec, TheseJSON

__all__ = [
    "binary",
    "JSONCodec",
    "TheseJSON",
]
