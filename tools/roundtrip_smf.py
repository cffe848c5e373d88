#!/usr/bin/env python3
"""Dump a Standard MIDI File before and after a decode/encode pass.

For every input file this prints a hex dump of the original bytes, the
parsed header and a per-track event summary, a hex dump of the re-encoded
bytes, and whether the two byte streams match.

Usage:
  python tools/roundtrip_smf.py song.mid
  python tools/roundtrip_smf.py --summary-only a.mid b.mid
  python tools/roundtrip_smf.py --write-dir out/ song.mid   # writes out/song.new.mid
"""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path
import sys
from typing import List

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from smfcodec import events as ev  # noqa: E402
from smfcodec.midifile import MidiFile  # noqa: E402
from smfcodec.track import Track  # noqa: E402

CHANNEL_NAMES = {
    ev.NOTE_OFF: "note_off",
    ev.NOTE_ON: "note_on",
    ev.AFTER_TOUCH: "after_touch",
    ev.CONTROLLER: "controller",
    ev.PROGRAM_CHANGE: "program_change",
    ev.CHANNEL_AFTERTOUCH: "channel_aftertouch",
    ev.PITCH_BEND: "pitch_bend",
}

META_NAMES = {
    ev.TEXT: "text",
    ev.COPYRIGHT: "copyright",
    ev.TRACK_NAME: "track_name",
    ev.INSTRUMENT: "instrument",
    ev.LYRIC: "lyric",
    ev.MARKER: "marker",
    ev.CUE_POINT: "cue_point",
    ev.CHANNEL_PREFIX: "channel_prefix",
    ev.TEMPO: "tempo",
    ev.SMPTE: "smpte",
    ev.TIME_SIG: "time_sig",
    ev.KEY_SIG: "key_sig",
    ev.SEQ_EVENT: "seq_event",
}


def hex_dump(data: bytes, width: int = 16) -> str:
    lines = []
    for offset in range(0, len(data), width):
        row = data[offset : offset + width]
        lines.append(f"{offset:08X}  {row.hex(' ')}")
    return "\n".join(lines)


def event_name(event: ev.Event) -> str:
    if event.kind == "meta":
        return "meta:" + META_NAMES.get(event.type, f"0x{event.type:02X}")
    return CHANNEL_NAMES.get(event.type, f"0x{event.type:02X}")


def summarize_track(index: int, track: Track) -> str:
    counts = Counter(event_name(event) for event in track)
    parts = ", ".join(f"{name} x{count}" for name, count in sorted(counts.items()))
    ticks = sum(event.ticks for event in track)
    return f"track {index}: {len(track)} events over {ticks} ticks ({parts})"


def describe(midi: MidiFile, data: bytes) -> List[str]:
    header = MidiFile.read_header(data)
    lines = [
        f"header: type {header.file_type}, {header.track_count} tracks announced, "
        f"{header.ticks} ticks/beat",
    ]
    lines.extend(summarize_track(i, track) for i, track in enumerate(midi.tracks, 1))
    if len(midi.tracks) != header.track_count:
        lines.append(f"note: {len(midi.tracks)} non-empty tracks decoded")
    return lines


def compare(original: bytes, rebuilt: bytes) -> str:
    mismatch = next(
        (i for i, (a, b) in enumerate(zip(original, rebuilt)) if a != b), None
    )
    if mismatch is not None:
        return (
            f"differs at 0x{mismatch:04X} "
            f"(orig=0x{original[mismatch]:02X} new=0x{rebuilt[mismatch]:02X})"
        )
    if len(original) != len(rebuilt):
        return f"size differs ({len(original)} -> {len(rebuilt)} bytes)"
    return "identical"


def process(path: Path, *, summary_only: bool, write_dir: Path | None) -> bool:
    print(f"== {path}")
    data = path.read_bytes()
    if not summary_only:
        print(f"input ({len(data)} bytes):")
        print(hex_dump(data))

    try:
        midi = MidiFile.from_bytes(data)
        rebuilt = midi.to_bytes()
    except ValueError as exc:
        print(f"error: {exc}")
        return False

    for line in describe(midi, data):
        print(line)
    if not summary_only:
        print(f"output ({len(rebuilt)} bytes):")
        print(hex_dump(rebuilt))
    if write_dir is not None:
        target = write_dir / f"{path.stem}.new.mid"
        target.write_bytes(rebuilt)
        print(f"wrote {target}")

    result = compare(data, rebuilt)
    print(f"result: {result}")
    return result == "identical"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Hex-dump, decode and re-encode .mid files."
    )
    parser.add_argument("paths", nargs="+", type=Path, help="MIDI files to process.")
    parser.add_argument(
        "--summary-only",
        action="store_true",
        help="Skip the hex dumps; print header, track summary and result.",
    )
    parser.add_argument(
        "--write-dir",
        type=Path,
        default=None,
        help="Write each re-encoded file to <dir>/<name>.new.mid.",
    )
    args = parser.parse_args(argv)

    missing = [p for p in args.paths if not p.is_file()]
    if missing:
        parser.error(f"not a file: {missing[0]}")
    if args.write_dir is not None:
        args.write_dir.mkdir(parents=True, exist_ok=True)

    ok = [
        process(path, summary_only=args.summary_only, write_dir=args.write_dir)
        for path in args.paths
    ]
    return 0 if all(ok) else 1


if __name__ == "__main__":
    raise SystemExit(main())
