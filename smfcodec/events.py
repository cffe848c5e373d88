"""SMF track events and their byte layout.

Two event kinds share the same time prefix (a VLQ tick delta, see
``smfcodec.vlq``) and a ``to_bytes()`` method:

  ChannelEvent : [delta] [type|channel] [param1] ([param2])
  MetaEvent    : [delta] FF [type] [length VLQ] [payload]

``Event`` is the union of the two; code that needs to tell them apart
checks ``event.kind`` ("channel" or "meta").

Program change and channel aftertouch take a single data byte, every
other channel-voice type takes two.  The ``IGNORE`` type marks data the
reader chose to drop: it serializes to nothing and never reaches a track
built by ``Track.from_bytes``.

Running status is not supported: every channel event carries its own
status byte on the wire.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Dict, Optional, Sequence, Union

from .errors import UnspecifiedEventType
from .vlq import encode_tick_delta

# Channel-voice type codes (high nibble of the status byte)
NOTE_OFF = 0x80
NOTE_ON = 0x90
AFTER_TOUCH = 0xA0
CONTROLLER = 0xB0
PROGRAM_CHANGE = 0xC0
CHANNEL_AFTERTOUCH = 0xD0
PITCH_BEND = 0xE0
IGNORE = 0x00

PARAM_COUNTS: Dict[int, int] = {
    NOTE_OFF: 2,
    NOTE_ON: 2,
    AFTER_TOUCH: 2,
    CONTROLLER: 2,
    PROGRAM_CHANGE: 1,
    CHANNEL_AFTERTOUCH: 1,
    PITCH_BEND: 2,
}

META_STATUS = 0xFF
SYSEX_START = 0xF0
SYSEX_ESCAPE = 0xF7

# Meta event types
SEQUENCE = 0x00
TEXT = 0x01
COPYRIGHT = 0x02
TRACK_NAME = 0x03
INSTRUMENT = 0x04
LYRIC = 0x05
MARKER = 0x06
CUE_POINT = 0x07
CHANNEL_PREFIX = 0x20
END_OF_TRACK = 0x2F
TEMPO = 0x51
SMPTE = 0x54
TIME_SIG = 0x58
KEY_SIG = 0x59
SEQ_EVENT = 0x7F

MetaData = Union[bytes, bytearray, Sequence[int], int, str, None]


def _check_ticks(ticks: int) -> None:
    if isinstance(ticks, bool) or not isinstance(ticks, int) or ticks < 0:
        raise ValueError(f"ticks must be a non-negative integer, got {ticks!r}")


@dataclass
class ChannelEvent:
    """A performance message addressed to one of 16 channels."""

    kind: ClassVar[str] = "channel"

    type: int
    ticks: int = 0  # delta since the previous event in the track
    channel: int = 0  # 0-15
    param1: int = 0
    param2: int = 0  # not written for one-parameter types

    def __post_init__(self) -> None:
        if self.type != IGNORE and self.type not in PARAM_COUNTS:
            shown = f"0x{self.type:02X}" if isinstance(self.type, int) else repr(self.type)
            raise ValueError(f"unknown channel event type {shown}")
        if not 0 <= self.channel <= 15:
            raise ValueError(f"channel {self.channel} out of range 0-15")
        _check_ticks(self.ticks)
        for name in ("param1", "param2"):
            value = getattr(self, name)
            if not 0 <= value <= 0xFF:
                raise ValueError(f"{name} {value} does not fit in a byte")

    @property
    def param_count(self) -> int:
        return PARAM_COUNTS.get(self.type, 0)

    @property
    def status(self) -> int:
        return self.type | (self.channel & 0x0F)

    def is_ignored(self) -> bool:
        return self.type == IGNORE

    def to_bytes(self) -> bytes:
        if self.is_ignored():
            return b""
        buf = bytearray(encode_tick_delta(self.ticks))
        buf.append(self.status)
        buf.append(self.param1)
        if self.param_count == 2:
            buf.append(self.param2)
        return bytes(buf)


@dataclass
class MetaEvent:
    """A non-performance annotation (tempo, names, end of track, ...).

    ``data`` may be raw bytes, a sequence of byte values, a single int
    (written as a one-byte payload), a str (one byte per character) or
    None (empty payload).  Events read from a file always carry ``bytes``.
    """

    kind: ClassVar[str] = "meta"

    type: Optional[int] = None
    ticks: int = 0
    data: MetaData = None

    def __post_init__(self) -> None:
        _check_ticks(self.ticks)

    def payload(self) -> bytes:
        data = self.data
        if data is None:
            return b""
        if isinstance(data, (bytes, bytearray)):
            return bytes(data)
        if isinstance(data, int):
            if not 0 <= data <= 0xFF:
                raise ValueError(f"integer meta payload {data} does not fit in a byte")
            return bytes([data])
        if isinstance(data, str):
            return data.encode("latin-1")
        return bytes(data)

    @property
    def text(self) -> str:
        return self.payload().decode("latin-1")

    def to_bytes(self) -> bytes:
        if not self.type:
            raise UnspecifiedEventType("type for meta event not specified")
        if not 0 <= self.type <= 0x7F:
            raise ValueError(f"meta event type 0x{self.type:02X} out of range 0x00-0x7F")
        payload = self.payload()
        return b"".join(
            (
                encode_tick_delta(self.ticks),
                bytes([META_STATUS, self.type]),
                encode_tick_delta(len(payload)),
                payload,
            )
        )


Event = Union[ChannelEvent, MetaEvent]


def ignored_event(ticks: int = 0) -> ChannelEvent:
    return ChannelEvent(IGNORE, ticks=ticks)
