"""Tests for tools/roundtrip_smf.py."""

from __future__ import annotations

import importlib.util
from pathlib import Path
import sys

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from smfcodec.events import (  # noqa: E402
    NOTE_OFF,
    NOTE_ON,
    TEMPO,
    TRACK_NAME,
    ChannelEvent,
    MetaEvent,
)
from smfcodec.midifile import MidiFile  # noqa: E402
from smfcodec.track import Track  # noqa: E402


def _load_tool_module():
    module_path = REPO_ROOT / "tools" / "roundtrip_smf.py"
    spec = importlib.util.spec_from_file_location("roundtrip_smf_tool", module_path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)
    return module


@pytest.fixture(scope="module")
def tool():
    return _load_tool_module()


def _sample_bytes() -> bytes:
    midi = MidiFile(ticks=480)
    midi.add_track(
        Track(
            [
                MetaEvent(type=TRACK_NAME, data=b"Lead"),
                MetaEvent(type=TEMPO, data=b"\x07\xA1\x20"),
            ]
        )
    )
    midi.add_track(
        Track(
            [
                ChannelEvent(NOTE_ON, channel=1, param1=60, param2=80),
                ChannelEvent(NOTE_OFF, ticks=480, channel=1, param1=60, param2=64),
                ChannelEvent(NOTE_ON, ticks=20, channel=1, param1=64, param2=80),
            ]
        )
    )
    return midi.to_bytes()


def test_compare(tool):
    assert tool.compare(b"abc", b"abc") == "identical"
    assert tool.compare(b"abc", b"abd") == "differs at 0x0002 (orig=0x63 new=0x64)"
    assert tool.compare(b"abcd", b"ab") == "size differs (4 -> 2 bytes)"


def test_hex_dump(tool):
    assert tool.hex_dump(bytes(range(18))).splitlines() == [
        "00000000  00 01 02 03 04 05 06 07 08 09 0a 0b 0c 0d 0e 0f",
        "00000010  10 11",
    ]


def test_track_summary(tool):
    midi = MidiFile.from_bytes(_sample_bytes())
    assert tool.summarize_track(1, midi.tracks[0]) == (
        "track 1: 2 events over 0 ticks (meta:tempo x1, meta:track_name x1)"
    )
    assert tool.summarize_track(2, midi.tracks[1]) == (
        "track 2: 3 events over 500 ticks (note_off x1, note_on x2)"
    )


def test_full_dump_of_identical_file(tool, tmp_path, capsys):
    data = _sample_bytes()
    path = tmp_path / "song.mid"
    path.write_bytes(data)

    assert tool.main([str(path)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == f"== {path}"
    assert lines[1] == f"input ({len(data)} bytes):"
    assert lines[2].startswith("00000000  4d 54 68 64 00 00 00 06 00 01 00 02 01 e0")
    assert "header: type 1, 2 tracks announced, 480 ticks/beat" in lines
    assert f"output ({len(data)} bytes):" in lines
    # Input and output dumps are printed in full and match line for line.
    dump = tool.hex_dump(data).splitlines()
    assert lines.count(dump[0]) == 2
    assert lines[-1] == "result: identical"


def test_summary_only_skips_dumps(tool, tmp_path, capsys):
    path = tmp_path / "song.mid"
    path.write_bytes(_sample_bytes())

    assert tool.main(["--summary-only", str(path)]) == 0
    out = capsys.readouterr().out
    assert "00000000" not in out
    assert "track 2: 3 events" in out


def test_trailing_bytes_are_reported(tool, tmp_path, capsys):
    data = _sample_bytes()
    path = tmp_path / "padded.mid"
    path.write_bytes(data + b"\x00\x00")

    assert tool.main(["--summary-only", str(path)]) == 1
    out = capsys.readouterr().out
    assert f"result: size differs ({len(data) + 2} -> {len(data)} bytes)" in out


def test_invalid_file_is_reported(tool, tmp_path, capsys):
    good = tmp_path / "good.mid"
    good.write_bytes(_sample_bytes())
    bad = tmp_path / "bad.mid"
    bad.write_bytes(b"not a midi file")

    assert tool.main(["--summary-only", str(good), str(bad)]) == 1
    out = capsys.readouterr().out
    assert "result: identical" in out
    assert "error: bad magic" in out


def test_write_dir_saves_rebuilt_file(tool, tmp_path, capsys):
    data = _sample_bytes()
    path = tmp_path / "song.mid"
    path.write_bytes(data)
    out_dir = tmp_path / "out"

    assert tool.main(["--summary-only", "--write-dir", str(out_dir), str(path)]) == 0
    assert (out_dir / "song.new.mid").read_bytes() == data
    assert f"wrote {out_dir / 'song.new.mid'}" in capsys.readouterr().out


def test_missing_file_is_a_usage_error(tool, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        tool.main([str(tmp_path / "nope.mid")])
    assert excinfo.value.code == 2
