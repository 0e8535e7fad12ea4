"""AudioTrack: opens the backing track a Song carries and probes its length."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

import librosa


class AudioTrack:
    """
    Owns the audio file handle that is passed to a Song.

    The Song never reads, seeks or closes the handle; this class does, so use
    it as a context manager around everything that touches the Song:

        with AudioTrack("song.wav") as track:
            song = load_song("song.txt", audio=track.handle)
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._handle: BinaryIO | None = None

    @property
    def handle(self) -> BinaryIO:
        """
        The open binary file object.

        Raises:
            RuntimeError: If the track is not open.
        """
        if self._handle is None:
            raise RuntimeError(f"Audio track '{self.path}' is not open.")
        return self._handle

    def open(self) -> BinaryIO:
        """
        Open the file for reading.

        Raises:
            FileNotFoundError: If the audio file does not exist.
        """
        if self._handle is None:
            if not self.path.is_file():
                raise FileNotFoundError(f"Audio file not found at '{self.path}'.")
            self._handle = open(self.path, "rb")
        return self._handle

    def duration(self) -> float:
        """
        Length of the track in seconds, decoded with librosa.

        Does not touch the open handle, so it works before or after open().
        """
        return float(librosa.get_duration(path=str(self.path)))

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> "AudioTrack":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
