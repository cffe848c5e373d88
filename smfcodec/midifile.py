"""Standard MIDI File container: MThd header plus MTrk chunks.

Header layout (14 bytes)::

  0   "MThd"
  4   00 00 00 06      header length, fixed
  8   file type        00 00 or 00 01
  10  track count      u16 BE
  12  ticks per beat   u16 BE, 1-32767

When reading, the file type and track count are advisory.  Tracks are found
by scanning for ``MTrk`` tags; each chunk is sliced by its own length
field and scanning resumes right after it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .errors import InvalidFileHeader, InvalidTicksPerBeat
from .track import START_BYTES, Track

logger = logging.getLogger(__name__)

HDR_CHUNKID = b"MThd"
HDR_CHUNK_SIZE = b"\x00\x00\x00\x06"
HDR_TYPE0 = b"\x00\x00"
HDR_TYPE1 = b"\x00\x01"
HEADER_SIZE = 14

DEFAULT_TICKS = 128
MAX_TICKS = 0x7FFF


def check_ticks(ticks: object) -> int:
    """Return ``ticks`` as an int or raise ``InvalidTicksPerBeat``."""

    if isinstance(ticks, bool):
        raise InvalidTicksPerBeat(f"ticks per beat must be an integer, got {ticks!r}")
    if isinstance(ticks, float):
        if not ticks.is_integer():
            raise InvalidTicksPerBeat(f"ticks per beat must be an integer, got {ticks!r}")
        ticks = int(ticks)
    if not isinstance(ticks, int):
        raise InvalidTicksPerBeat(f"ticks per beat must be an integer, got {ticks!r}")
    if not 1 <= ticks <= MAX_TICKS:
        raise InvalidTicksPerBeat(
            f"ticks per beat must be between 1 and {MAX_TICKS}, got {ticks}"
        )
    return ticks


@dataclass(frozen=True)
class MidiHeader:
    file_type: int
    track_count: int
    ticks: int

    @classmethod
    def from_bytes(cls, data: bytes) -> "MidiHeader":
        if len(data) < HEADER_SIZE:
            raise InvalidFileHeader(
                f"file too short for header ({len(data)} bytes, need {HEADER_SIZE})"
            )
        if data[0:4] != HDR_CHUNKID:
            raise InvalidFileHeader(f"bad magic: {data[:4].hex()}")
        if data[4:8] != HDR_CHUNK_SIZE:
            raise InvalidFileHeader(f"bad header length: {data[4:8].hex()}")
        return cls(
            file_type=int.from_bytes(data[8:10], "big"),
            track_count=int.from_bytes(data[10:12], "big"),
            ticks=int.from_bytes(data[12:14], "big"),
        )

    def to_bytes(self) -> bytes:
        return b"".join(
            (
                HDR_CHUNKID,
                HDR_CHUNK_SIZE,
                self.file_type.to_bytes(2, "big"),
                self.track_count.to_bytes(2, "big"),
                self.ticks.to_bytes(2, "big"),
            )
        )


class MidiFile:
    """Ticks per beat plus an ordered list of tracks."""

    HDR_CHUNKID = HDR_CHUNKID
    HDR_CHUNK_SIZE = HDR_CHUNK_SIZE
    HDR_TYPE0 = HDR_TYPE0
    HDR_TYPE1 = HDR_TYPE1

    def __init__(
        self, ticks: int = DEFAULT_TICKS, tracks: Optional[Iterable[Track]] = None
    ) -> None:
        self._ticks = check_ticks(ticks)
        self.tracks: List[Track] = list(tracks) if tracks is not None else []

    @property
    def ticks(self) -> int:
        return self._ticks

    @ticks.setter
    def ticks(self, value: int) -> None:
        self._ticks = check_ticks(value)

    def set_ticks(self, ticks: int) -> None:
        self.ticks = ticks

    def add_track(self, track: Optional[Track] = None) -> Track:
        if track is None:
            track = Track()
        self.tracks.append(track)
        return track

    def _chunks(self) -> List[bytes]:
        chunks = (track.to_bytes() for track in self.tracks)
        return [chunk for chunk in chunks if chunk]

    def _header_for(self, chunks: List[bytes]) -> MidiHeader:
        # Type 1 only when more than one track actually emits a chunk.
        return MidiHeader(
            file_type=1 if len(chunks) > 1 else 0,
            track_count=len(chunks),
            ticks=self._ticks,
        )

    @property
    def file_type(self) -> int:
        return self.header().file_type

    def header(self) -> MidiHeader:
        return self._header_for(self._chunks())

    def to_bytes(self) -> bytes:
        chunks = self._chunks()
        return self._header_for(chunks).to_bytes() + b"".join(chunks)

    @staticmethod
    def read_header(data: bytes) -> MidiHeader:
        return MidiHeader.from_bytes(data)

    @classmethod
    def from_bytes(cls, data: bytes) -> "MidiFile":
        data = bytes(data)
        header = MidiHeader.from_bytes(data)
        midi = cls(ticks=header.ticks)

        scan = HEADER_SIZE
        while True:
            tag = data.find(START_BYTES, scan)
            if tag == -1:
                break
            length_at = tag + len(START_BYTES)
            length = int.from_bytes(data[length_at : length_at + 4], "big")
            chunk_end = min(len(data), length_at + 4 + length)
            track = Track.from_bytes(data[length_at:chunk_end])
            if track.is_empty():
                logger.debug("dropping empty track chunk at offset %d", tag)
            else:
                midi.add_track(track)
            scan = max(chunk_end, length_at)

        if len(midi.tracks) != header.track_count:
            logger.debug(
                "header announces %d tracks, found %d non-empty",
                header.track_count,
                len(midi.tracks),
            )
        return midi
