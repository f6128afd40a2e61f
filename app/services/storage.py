from __future__ import annotations

from pathlib import Path

from app.services.errors import MalformedPatch, PathLike, PatchIOError
from app.services.patch_format import PatchSet, decode, encode

PATCH_SUFFIX = ".json"


def default_patch_path(modified: PathLike) -> Path:
    # firmware.bin -> ./firmware.json (directorio actual, como la herramienta original)
    return Path(Path(modified).stem + PATCH_SUFFIX)


def save_patch(path: PathLike, patch_set: PatchSet) -> None:
    p = Path(path)
    try:
        with open(p, "w", encoding="utf-8") as f:
            f.write(encode(patch_set))
    except OSError as e:
        raise PatchIOError(p, f"unable to write the JSON file: {e.strerror or e}") from e


def load_patch(path: PathLike) -> PatchSet:
    p = Path(path)
    try:
        with open(p, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise PatchIOError(p, f"unable to read the patch file: {e.strerror or e}") from e

    try:
        return decode(raw)
    except MalformedPatch as e:
        raise MalformedPatch(e.reason, path=p) from e
