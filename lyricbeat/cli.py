"""lyricbeat CLI entry point."""

import re
import sys
from pathlib import Path

import click

from lyricbeat import __version__
from lyricbeat.audio_track import AudioTrack
from lyricbeat.errors import StructuralParseFailure
from lyricbeat.midi_exporter import MidiLyricsExporter
from lyricbeat.song_models import Song
from lyricbeat.song_parser import load_song
from lyricbeat.terminal_renderer import TerminalRenderer
from lyricbeat.timeline import Timeline


def _name_to_filename(name: str) -> str:
    """Convert a song name to a safe MIDI filename."""
    sanitized = re.sub(r"[^\w\s-]", "", name)
    sanitized = re.sub(r"\s+", "_", sanitized.strip())
    return f"{sanitized or 'lyrics'}.mid"


def _load_or_exit(song_file: str, audio: object = None) -> Song:
    try:
        return load_song(song_file, audio=audio)
    except StructuralParseFailure as exc:
        click.echo(f"  ERROR: Could not parse '{song_file}' — {exc}", err=True)
        sys.exit(1)


def _header(song_file: str) -> None:
    click.echo(f"lyricbeat v{__version__}")
    click.echo(f"  Song   : {song_file}")


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="lyricbeat")
def main() -> None:
    """lyricbeat — tempo-synchronised lyrics from plain-text song files."""


_song_argument = click.argument(
    "song_file", type=click.Path(exists=True, dir_okay=False, readable=True)
)


# ── parse subcommand ───────────────────────────────────────────────────────────

@main.command()
@_song_argument
def parse(song_file: str) -> None:
    """
    Parse SONG_FILE and show its name, tempo and lyrics size.

    \b
    Example:
      lyricbeat parse my_song.txt
    """
    _header(song_file)
    song = _load_or_exit(song_file)
    click.echo(f"  Name   : {song.name}")
    click.echo(f"  Tempo  : {song.bpm} BPM")
    click.echo(f"  Lyrics : {len(song.lyrics)} character(s)")


# ── timeline subcommand ────────────────────────────────────────────────────────

@main.command()
@_song_argument
def timeline(song_file: str) -> None:
    """
    Print when each lyric line starts.

    \b
    Example:
      lyricbeat timeline my_song.txt
    """
    _header(song_file)
    song = _load_or_exit(song_file)
    click.echo(f"  Name   : {song.name}  |  Tempo: {song.bpm} BPM")
    click.echo()

    result = Timeline.from_operations(song.timeline())
    for start, line in result.lines():
        click.echo(f"  {start:8.3f}s  {line}")

    click.echo()
    click.echo(
        f"  {len(result.operations)} operation(s), {result.pause_count} pause(s), "
        f"{result.total_duration:.3f}s total"
    )


# ── play subcommand ────────────────────────────────────────────────────────────

@main.command()
@_song_argument
@click.option(
    "--audio",
    "audio_path",
    default=None,
    metavar="PATH",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    help="Backing track to attach to the song. Its length is reported before playback.",
)
@click.option(
    "--speed",
    type=click.FloatRange(min=0.0, min_open=True),
    default=1.0,
    show_default=True,
    help="Playback speed multiplier; 2.0 halves every pause.",
)
def play(song_file: str, audio_path: str | None, speed: float) -> None:
    """
    Render the lyrics of SONG_FILE in real time.

    \b
    Examples:
      lyricbeat play my_song.txt
      lyricbeat play my_song.txt --audio my_song.wav --speed 1.5
    """
    _header(song_file)

    if audio_path is None:
        song = _load_or_exit(song_file)
        _play(song, speed)
        return

    click.echo(f"  Audio  : {audio_path}")
    with AudioTrack(audio_path) as track:
        try:
            length = track.duration()
            click.echo(f"  Length : {length:.1f} s")
        except Exception as exc:
            click.echo(f"  WARNING: Could not decode audio — {exc}", err=True)
        song = _load_or_exit(song_file, audio=track.handle)
        _play(song, speed)


def _play(song: Song, speed: float) -> None:
    click.echo(f"  Name   : {song.name}  |  Tempo: {song.bpm} BPM  |  Speed: {speed}x")
    click.echo()
    TerminalRenderer(speed=speed).render(song.timeline())


# ── export subcommand ──────────────────────────────────────────────────────────

@main.command()
@_song_argument
@click.option(
    "--output",
    "-o",
    default=None,
    metavar="PATH",
    help="Destination MIDI file path. Defaults to <song-name>.mid.",
)
def export(song_file: str, output: str | None) -> None:
    """
    Write the lyric lines of SONG_FILE as a MIDI text track.

    \b
    Examples:
      lyricbeat export my_song.txt
      lyricbeat export my_song.txt -o karaoke.mid
    """
    _header(song_file)
    song = _load_or_exit(song_file)
    resolved_output = output if output is not None else _name_to_filename(song.name)
    click.echo(f"  Output : {resolved_output}")
    click.echo()

    click.echo("[1/2] Scanning lyrics...")
    result = Timeline.from_operations(song.timeline())

    click.echo(f"[2/2] Writing MIDI file → '{resolved_output}'...")
    exporter = MidiLyricsExporter()
    try:
        written = exporter.export(result, resolved_output, title=song.name)
    except OSError as exc:
        click.echo(f"  ERROR: Could not write MIDI file — {exc}", err=True)
        sys.exit(1)

    click.echo()
    click.echo(f"Done!  Wrote {written} lyric line(s) to '{resolved_output}'.")
