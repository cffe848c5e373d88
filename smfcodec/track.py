"""MTrk chunk framing.

Chunk layout::

  "MTrk" [length u32 BE] [event bytes] 00 FF 2F 00

``length`` counts the event bytes plus the 4-byte end marker.  A track
whose events serialize to nothing (no events, or only IGNORE events)
produces no chunk at all.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from .cursor import ByteCursor
from .events import END_OF_TRACK, Event
from .reader import extract_event

START_BYTES = b"MTrk"
END_BYTES = b"\x00\xFF\x2F\x00"


class Track:
    """An ordered list of events; list order is playback order."""

    START_BYTES = START_BYTES
    END_BYTES = END_BYTES

    def __init__(self, events: Optional[Iterable[Event]] = None) -> None:
        self.events: List[Event] = list(events) if events is not None else []

    def add_event(self, event: Event) -> "Track":
        self.events.append(event)
        return self

    def is_empty(self) -> bool:
        return not self.events

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Track):
            return NotImplemented
        return self.events == other.events

    def __repr__(self) -> str:
        return f"Track({len(self.events)} events)"

    def payload(self) -> bytes:
        return b"".join(event.to_bytes() for event in self.events)

    def to_bytes(self) -> bytes:
        payload = self.payload()
        if not payload:
            return b""
        length = len(payload) + len(END_BYTES)
        return START_BYTES + length.to_bytes(4, "big") + payload + END_BYTES

    @classmethod
    def from_bytes(cls, data: bytes) -> "Track":
        """Rebuild a track from the bytes that follow its ``MTrk`` tag.

        ``data`` starts with the 4-byte chunk length.  Only that many bytes
        are decoded (fewer if ``data`` is truncated).
        """

        cursor = ByteCursor(data)
        if cursor.remaining() < 4:
            return cls()
        length = cursor.read_u32_be()
        if length <= len(END_BYTES):
            return cls()
        body = cursor.read_bytes(min(length, cursor.remaining()))
        return cls.parse_events(ByteCursor(body))

    @classmethod
    def parse_events(cls, cursor: ByteCursor) -> "Track":
        """Read events until end-of-track or until nothing more decodes."""

        track = cls()
        while True:
            event = extract_event(cursor)
            if event is None:
                break
            if event.kind == "meta" and event.type == END_OF_TRACK:
                break
            if event.kind == "channel" and event.is_ignored():
                continue
            track.add_event(event)
        return track
