"""MidiLyricsExporter: writes a timeline as a karaoke-style MIDI lyrics track."""

from midiutil import MIDIFile

from lyricbeat.timeline import Timeline

# In format 1 midiutil writes tempo events to its own conductor track and
# shifts user track numbers up by one, so track 0 here is file track 1.
TRACK_CONDUCTOR = 0
TRACK_LYRICS = 0

# A MIDI tempo is stored as 60,000,000 / bpm microseconds per beat in 3 bytes.
MIN_MIDI_TEMPO = 4
MAX_MIDI_TEMPO = 60_000_000


class MidiLyricsExporter:
    """
    Writes the lines of a Timeline as MIDI text events.

    Timing
    ------
    The conductor track always carries the exporter's own tempo, not the
    song's: line start times are already in seconds, so any fixed tempo
    places them exactly. Seconds are converted to beats with
    beats = seconds × (tempo / 60) at that same tempo.
    """

    DEFAULT_TEMPO = 120  # BPM — 500,000 µs per beat, 2 beats per second

    def __init__(self, tempo: int = DEFAULT_TEMPO) -> None:
        """
        Args:
            tempo: Tempo written to the conductor track, in beats per minute.

        Raises:
            ValueError: If tempo cannot be stored in a MIDI tempo event.
        """
        if not MIN_MIDI_TEMPO <= tempo <= MAX_MIDI_TEMPO:
            raise ValueError(
                f"MIDI tempo must be between {MIN_MIDI_TEMPO} and {MAX_MIDI_TEMPO} BPM, got {tempo}."
            )
        self.tempo = tempo

    def _seconds_to_beats(self, seconds: float) -> float:
        return seconds * (self.tempo / 60.0)

    def export(self, timeline: Timeline, output_path: str, title: str = "") -> int:
        """
        Render the timeline's lines to a Standard MIDI File.

        Args:
            timeline:    Scanned lyrics timeline.
            output_path: Destination file path (e.g. "song.mid").
            title:       Optional name for the lyrics track.

        Returns:
            Number of text events written (empty lines are skipped).

        Raises:
            OSError: If the output file cannot be opened for writing.
        """
        midi = MIDIFile(numTracks=1, removeDuplicates=False, deinterleave=False)
        midi.addTempo(TRACK_CONDUCTOR, 0, self.tempo)
        midi.addTrackName(TRACK_LYRICS, 0, title or "Lyrics")

        written = 0
        for start, line in timeline.lines():
            if not line.strip():
                continue
            midi.addText(TRACK_LYRICS, self._seconds_to_beats(start), line)
            written += 1

        with open(output_path, "wb") as f:
            midi.writeFile(f)
        return written
