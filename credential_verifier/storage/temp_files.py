"""Collision-resistant temp files with guaranteed deletion.

Concurrent verifications share one temp directory, so every name carries a
nanosecond timestamp and a random suffix.
"""

import secrets
import time
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from types import TracebackType

from credential_verifier.logging.logger import Log


def unique_name(prefix: str, suffix: str = "") -> str:
    return f"{prefix}_{time.time_ns()}_{secrets.token_hex(6)}{suffix}"


def _unlink_quietly(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        Log.warning(f"Failed to remove temp file {path}: {exc}")


@contextmanager
def scoped_temp_path(directory: Path, prefix: str, suffix: str = "") -> Generator[Path, None, None]:
    """Yield a unique path in *directory*; the file is removed on every exit path."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / unique_name(prefix, suffix)
    try:
        yield path
    finally:
        _unlink_quietly(path)


class TempFileArena:
    """Owns every temp file written during one verification run.

    Use as a context manager: all files handed out by ``write`` are deleted
    when the block exits, whether it returns or raises.
    """

    def __init__(self, directory: Path) -> None:
        self._directory = directory
        self._paths: list[Path] = []

    def write(self, prefix: str, suffix: str, data: bytes) -> Path:
        self._directory.mkdir(parents=True, exist_ok=True)
        path = self._directory / unique_name(prefix, suffix)
        self._paths.append(path)
        path.write_bytes(data)
        return path

    def cleanup(self) -> None:
        while self._paths:
            _unlink_quietly(self._paths.pop())

    def __enter__(self) -> "TempFileArena":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.cleanup()
