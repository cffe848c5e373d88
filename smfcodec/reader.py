"""Decode single events from a track payload.

One call to ``extract_event`` reads one event and leaves the cursor on the
first byte of the next one.  The only state carried between calls is the
cursor offset.

Decoding order:

  1. tick delta (VLQ)
  2. status byte
       FF        -> meta: type, length (VLQ), payload
                    (type 00 dropped as IGNORE, type above 7F ends the track)
       F0 / F7   -> SysEx: length (VLQ), payload skipped, IGNORE event
       otherwise -> channel voice: type = status & F0, channel = status & 0F

A channel event whose first data byte is 0 is treated as noise: the cursor
steps back over that byte and an IGNORE event is returned, so the byte is
re-read as the next event's tick delta.

Truncated or corrupt input never raises out of ``extract_event``; it
returns None and the caller stops reading the track.
"""

from __future__ import annotations

import logging
from typing import Optional

from .cursor import ByteCursor
from .errors import MalformedVLQ, OutOfBounds
from .events import (
    META_STATUS,
    PARAM_COUNTS,
    SEQUENCE,
    SYSEX_ESCAPE,
    SYSEX_START,
    ChannelEvent,
    Event,
    MetaEvent,
    ignored_event,
)
from .vlq import decode_tick_delta

logger = logging.getLogger(__name__)


def extract_event(cursor: ByteCursor) -> Optional[Event]:
    """Read the next event from ``cursor``, or None if none can be decoded."""

    start = cursor.offset
    try:
        ticks = decode_tick_delta(cursor)
        status = cursor.read_u8()
        if status == META_STATUS:
            return extract_meta_event(cursor, ticks)
        if status in (SYSEX_START, SYSEX_ESCAPE):
            length = decode_tick_delta(cursor)
            cursor.read_bytes(length)
            logger.debug("skipped %d-byte sysex event at offset %d", length, start)
            return ignored_event(ticks)
        return extract_channel_event(cursor, status, ticks)
    except (OutOfBounds, MalformedVLQ) as exc:
        logger.debug("no event at offset %d: %s", start, exc)
        return None


def extract_meta_event(cursor: ByteCursor, ticks: int) -> Optional[Event]:
    """Decode a meta event body; the FF status byte is already consumed.

    Type bytes above 0x7F are not meta events: nothing is produced.  A
    sequence-number event (type 0x00) is consumed and dropped as IGNORE,
    since a meta event needs a non-zero type to be written back.
    """

    start = cursor.offset
    meta_type = cursor.read_u8()
    if meta_type > 0x7F:
        logger.debug("meta type 0x%02X at offset %d out of range", meta_type, start)
        return None
    length = decode_tick_delta(cursor)
    data = cursor.read_bytes(length)
    if meta_type == SEQUENCE:
        logger.debug("dropped sequence-number meta event at offset %d", start)
        return ignored_event(ticks)
    return MetaEvent(type=meta_type, ticks=ticks, data=data)


def extract_channel_event(
    cursor: ByteCursor, status: int, ticks: int
) -> Optional[ChannelEvent]:
    """Decode the data bytes of a channel-voice event.

    Returns None for status bytes that are not a known channel-voice type.
    """

    event_type = status & 0xF0
    channel = status & 0x0F
    count = PARAM_COUNTS.get(event_type, 0)
    if count == 0:
        logger.debug(
            "unsupported status 0x%02X at offset %d", status, cursor.offset - 1
        )
        return None

    params = [cursor.read_u8()]
    if params[0] == 0:
        cursor.step_back(1)
        return ignored_event(ticks)
    while len(params) < count:
        params.append(cursor.read_u8())
    while len(params) < 2:
        params.append(0)

    return ChannelEvent(
        event_type,
        ticks=ticks,
        channel=channel,
        param1=params[0],
        param2=params[1],
    )
