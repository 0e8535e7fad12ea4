"""Unit tests for MidiLyricsExporter."""

import struct
from pathlib import Path

import pytest

from lyricbeat.lyrics_scanner import scan_lyrics
from lyricbeat.midi_exporter import MidiLyricsExporter
from lyricbeat.song_parser import parse_song
from lyricbeat.timeline import Timeline

META_TEMPO = 0x51
META_TEXT = 0x01


def _read_varlen(data: bytes, pos: int) -> tuple[int, int]:
    value = 0
    while True:
        byte = data[pos]
        pos += 1
        value = (value << 7) | (byte & 0x7F)
        if not byte & 0x80:
            return value, pos


def _read_midi(path: Path) -> tuple[int, list[list[tuple[int, int, bytes]]]]:
    """Return the ticks-per-beat division and each track's (tick, meta type, data) events."""
    data = path.read_bytes()
    assert data[:4] == b"MThd"
    header_len, _fmt, n_tracks, division = struct.unpack(">IHHH", data[4:14])
    pos = 8 + header_len

    tracks: list[list[tuple[int, int, bytes]]] = []
    for _ in range(n_tracks):
        assert data[pos:pos + 4] == b"MTrk"
        (length,) = struct.unpack(">I", data[pos + 4:pos + 8])
        pos += 8
        end = pos + length
        tick = 0
        events: list[tuple[int, int, bytes]] = []
        while pos < end:
            delta, pos = _read_varlen(data, pos)
            tick += delta
            status = data[pos]
            assert status == 0xFF, "only meta events are expected"
            meta_type = data[pos + 1]
            size, pos = _read_varlen(data, pos + 2)
            events.append((tick, meta_type, data[pos:pos + size]))
            pos += size
        tracks.append(events)
    return division, tracks


def test_export_writes_standard_midi_file(tmp_path: Path) -> None:
    out = tmp_path / "song.mid"
    timeline = Timeline.from_operations(scan_lyrics("first%\nsecond\n", 100))
    written = MidiLyricsExporter().export(timeline, str(out), title="Demo")
    assert written == 2
    assert out.read_bytes().startswith(b"MThd")


def test_export_skips_blank_lines(tmp_path: Path) -> None:
    out = tmp_path / "song.mid"
    timeline = Timeline.from_operations(scan_lyrics("a\n\n   \nb", 100))
    assert MidiLyricsExporter().export(timeline, str(out)) == 2


@pytest.mark.parametrize("bpm", [1, 4294967295])
def test_export_tempo_is_fixed_for_extreme_song_tempos(tmp_path: Path, bpm: int) -> None:
    out = tmp_path / "song.mid"
    song = parse_song(f"T\n{bpm}\nla#\nlo\n")
    MidiLyricsExporter().export(Timeline.from_operations(song.timeline()), str(out))

    _, tracks = _read_midi(out)
    assert len(tracks) == 2
    tempos = [data for _, kind, data in tracks[0] if kind == META_TEMPO]
    assert tempos == [(500_000).to_bytes(3, "big")]


def test_export_places_lines_at_their_start_time(tmp_path: Path) -> None:
    out = tmp_path / "song.mid"
    # At 1 BPM a whole-beat-relative pause lasts 15 s.
    song = parse_song("T\n1\nla#\nlo\n")
    MidiLyricsExporter().export(Timeline.from_operations(song.timeline()), str(out))

    division, tracks = _read_midi(out)
    texts = {
        data: tick for events in tracks for tick, kind, data in events if kind == META_TEXT
    }
    assert texts[b"la"] == 0
    # 15 s at the 120 BPM conductor tempo is 30 beats.
    assert texts[b"lo"] == 30 * division


def test_seconds_to_beats_uses_exporter_tempo() -> None:
    assert MidiLyricsExporter()._seconds_to_beats(1.5) == 3.0
    assert MidiLyricsExporter(tempo=60)._seconds_to_beats(1.5) == 1.5


@pytest.mark.parametrize("tempo", [0, 3, 60_000_001])
def test_unstorable_tempo_is_rejected(tempo: int) -> None:
    with pytest.raises(ValueError, match="MIDI tempo"):
        MidiLyricsExporter(tempo=tempo)
