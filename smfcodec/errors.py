"""Exception taxonomy for the SMF codec.

Everything derives from ``ValueError`` so callers that already guard
``from_bytes`` with ``except ValueError`` keep working.
"""

from __future__ import annotations


class SMFError(ValueError):
    """Base class for every codec error."""


class InvalidFileHeader(SMFError):
    """The buffer does not start with a valid ``MThd`` chunk."""


class InvalidTicksPerBeat(SMFError):
    """Ticks per beat outside 1-32767 or not integral."""


class UnspecifiedEventType(SMFError):
    """A meta event was serialized before its type was set."""


class MalformedVLQ(SMFError):
    """A variable-length quantity ran past ``MAX_VLQ_BYTES``."""


class OutOfBounds(SMFError, IndexError):
    """A cursor read went past the end of its buffer."""
