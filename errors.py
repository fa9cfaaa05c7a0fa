class HuffmanError(Exception): # base class for everything the codec raises
    pass


class OutOfRangeError(HuffmanError, IndexError):
    """Raised when a read asks for more bits than the stream still holds."""


class CorruptStreamError(HuffmanError, ValueError):
    """Raised when compressed input cannot be a stream produced by the encoder."""
