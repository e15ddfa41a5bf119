class DecodeError(ValueError):
    """A ``These`` value could not be decoded from its wire format."""


class BinaryDecodeError(DecodeError):
    """
    Malformed binary input. ``offset`` is the position in the buffer at which
    decoding gave up.
    """

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(f"{message} (at byte {offset})")
        self.offset = offset


__all__ = [
    "DecodeError",
    "BinaryDecodeError",
]
