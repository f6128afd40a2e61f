# app/services/errors.py
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


class PatchError(Exception):
    """Base de todos los errores de generación / aplicación de parches."""


class PatchIOError(PatchError):
    def __init__(self, path: PathLike, reason: str, message: Optional[str] = None):
        self.path = str(path)
        self.reason = reason
        super().__init__(message or f"{self.path}: {reason}")


class TargetMissing(PatchIOError):
    def __init__(self, path: PathLike):
        super().__init__(path, "target file does not exist",
                         f"The target file '{path}' does not exist")


class SeekFailure(PatchIOError):
    def __init__(self, path: PathLike, offset: int, reason: str):
        self.offset = offset
        super().__init__(path, reason, f"Unable to seek to offset 0x{offset:X} in {path}: {reason}")


class WriteFailure(PatchIOError):
    def __init__(self, path: PathLike, offset: int, reason: str):
        self.offset = offset
        super().__init__(path, reason, f"Failed to write at offset 0x{offset:X} in {path}: {reason}")


class SizeMismatch(PatchError, ValueError):
    def __init__(self, original_size: int, modified_size: int):
        self.original_size = original_size
        self.modified_size = modified_size
        super().__init__(
            f"The files do not have the same size ({original_size} != {modified_size} bytes), "
            "comparison not possible"
        )


class MalformedPatch(PatchError, ValueError):
    def __init__(self, reason: str, path: Optional[PathLike] = None):
        self.reason = reason
        self.path = str(path) if path is not None else None
        where = f" ({self.path})" if self.path else ""
        super().__init__(f"Invalid patch file{where}: {reason}")


class ChecksumMismatch(PatchError):
    def __init__(self, path: PathLike, expected: str, actual: str):
        self.path = str(path)
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid checksum: the target file '{self.path}' does not match the original file "
            f"(expected {expected}, got {actual})"
        )


class InvalidHexData(PatchError, ValueError):
    def __init__(self, offset: int, data: str):
        self.offset = offset
        self.data = data
        super().__init__(f"Invalid hexadecimal data at offset 0x{offset:X}: {data!r}")
