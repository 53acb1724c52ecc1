"""Error kinds raised by the message codecs.

All errors derive from :class:`MessageError`, itself a ``ValueError``, so
callers can either catch the specific kind or treat any malformed input
as a plain value error.
"""


class MessageError(ValueError):
    """Base class for every message encoding/decoding failure."""


class DecodeError(MessageError):
    """Malformed hex, decimal or length in the text-transport form."""


class InvalidNameEncoding(MessageError):
    """Subaccount name is not valid ASCII/UTF-8 or does not fit in 12 bytes."""


class FieldOutOfRange(MessageError):
    """A value does not fit the bit budget of the field it is packed into."""


class InvalidAddress(MessageError):
    """Account address is neither 20 raw bytes nor a valid hex address."""
