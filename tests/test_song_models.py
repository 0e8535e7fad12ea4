"""Unit tests for the Song aggregate and operation models."""

import pytest

from lyricbeat.breakpoints import Breakpoint
from lyricbeat.errors import InvalidTempoError, StructuralParseFailure
from lyricbeat.lyrics_scanner import LyricsScanner
from lyricbeat.song_models import MAX_BPM, Pause, Print, Song
from lyricbeat.song_parser import parse_song


def test_song_rejects_zero_tempo() -> None:
    with pytest.raises(InvalidTempoError):
        Song(name="Title", bpm=0, lyrics="")


def test_song_rejects_non_integer_tempo() -> None:
    with pytest.raises(InvalidTempoError):
        Song(name="Title", bpm=120.0, lyrics="")  # type: ignore[arg-type]


def test_song_rejects_tempo_above_32_bits() -> None:
    with pytest.raises(InvalidTempoError, match="exceed"):
        Song(name="Title", bpm=2**40, lyrics="")


def test_song_accepts_largest_32_bit_tempo() -> None:
    assert Song(name="Title", bpm=MAX_BPM, lyrics="").bpm == 2**32 - 1


def test_direct_and_parsed_songs_share_tempo_limit() -> None:
    assert parse_song(f"Title\n{MAX_BPM}\n").bpm == MAX_BPM
    with pytest.raises(StructuralParseFailure):
        parse_song(f"Title\n{MAX_BPM + 1}\n")


def test_invalid_tempo_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        Song(name="Title", bpm=-1, lyrics="")


def test_song_rejects_empty_name() -> None:
    with pytest.raises(ValueError, match="name"):
        Song(name="", bpm=120, lyrics="")


def test_song_equality_ignores_audio() -> None:
    assert Song("T", 60, "x", audio=object()) == Song("T", 60, "x", audio=object())


def test_song_repr_hides_audio() -> None:
    assert "audio" not in repr(Song("T", 60, "x", audio="handle"))


def test_timeline_rescans_from_fresh_context() -> None:
    song = Song(name="T", bpm=120, lyrics="a\\")
    assert song.timeline() == [Print("a")]
    assert song.timeline() == [Print("a")]


def test_timeline_uses_supplied_scanner() -> None:
    song = Song(name="T", bpm=60, lyrics="a*")
    scanner = LyricsScanner([Breakpoint("*", 4, 4)])
    assert song.timeline(scanner) == [Print("a"), Pause(1.0)]
