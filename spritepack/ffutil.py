"""FFmpeg subprocess helpers and the process-runner seam they go through."""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Protocol

log = logging.getLogger(__name__)


class FFmpegNotFoundError(RuntimeError):
    pass


class ProcessError(RuntimeError):
    """Raised when an external process exits non-zero or times out."""

    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode


class ProcessRunner(Protocol):
    def run(
        self, executable: str, args: list[str], timeout: float | None = None
    ) -> int:
        """Run *executable* with *args*, wait for it and return its exit code."""
        ...


class SubprocessRunner:
    """ProcessRunner backed by :func:`subprocess.run`."""

    def run(
        self, executable: str, args: list[str], timeout: float | None = None
    ) -> int:
        cmd = [executable, *args]
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
        except FileNotFoundError as e:
            raise FFmpegNotFoundError(f"{executable} not found: {e}") from e
        except subprocess.TimeoutExpired as e:
            raise ProcessError(f"{executable} timed out after {timeout}s") from e
        except OSError as e:
            raise ProcessError(f"{executable} failed to start: {e}") from e

        if result.returncode != 0 and result.stderr:
            log.warning("%s exited with %d: %s", executable, result.returncode, result.stderr[-500:])
        return result.returncode


def check_ffmpeg(executable: str = "ffmpeg") -> None:
    """Raise FFmpegNotFoundError if *executable* cannot be found."""
    if shutil.which(executable) is None:
        raise FFmpegNotFoundError(f"{executable} not found on PATH")


def ogg_args(wav_path: Path, ogg_path: Path, quality: int = 6) -> list[str]:
    return [
        "-i", str(wav_path.resolve()),
        "-c:a", "libvorbis",
        "-qscale:a", str(quality),
        "-y", str(ogg_path.resolve()),
    ]


def convert_to_ogg(
    wav_path: Path,
    ogg_path: Path,
    runner: ProcessRunner,
    ffmpeg: str = "ffmpeg",
    quality: int = 6,
    timeout: float | None = None,
) -> Path:
    """Encode a WAV file to ogg/vorbis with ffmpeg. Raises ProcessError on failure."""
    returncode = runner.run(ffmpeg, ogg_args(wav_path, ogg_path, quality), timeout=timeout)
    if returncode != 0:
        raise ProcessError(
            f"ffmpeg ogg conversion of {wav_path.name} failed (rc={returncode})",
            returncode=returncode,
        )
    return ogg_path
