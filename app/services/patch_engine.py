import hashlib
import logging
import zlib
from pathlib import Path
from typing import List, Optional

from app.services.errors import (
    ChecksumMismatch,
    InvalidHexData,
    PathLike,
    PatchIOError,
    SeekFailure,
    SizeMismatch,
    TargetMissing,
    WriteFailure,
)
from app.services.patch_format import PatchRecord, PatchSet
from app.services.storage import default_patch_path, load_patch, save_patch

logger = logging.getLogger(__name__)


def sha256(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def crc32_hex(data: bytes) -> str:
    return f"{zlib.crc32(data) & 0xFFFFFFFF:08X}"


def _read_bytes(path: PathLike) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise PatchIOError(path, f"unable to read file: {e.strerror or e}") from e


def diff(original: bytes, modified: bytes) -> List[PatchRecord]:
    """Un PatchRecord por cada byte distinto (offset absoluto + byte nuevo en hex)."""
    if len(original) != len(modified):
        raise SizeMismatch(len(original), len(modified))

    return [
        PatchRecord(offset=i, data=f"{new:02x}")
        for i, (old, new) in enumerate(zip(original, modified))
        if old != new
    ]


def create_patch(stock: bytes, mod: bytes, file_name: str) -> PatchSet:
    patches = diff(stock, mod)
    logger.debug("%s: %d differing byte(s) in %d", file_name, len(patches), len(stock))
    return PatchSet(file_name=file_name, checksum=sha256(stock), patches=tuple(patches))


def generate_patch(original_path: PathLike, modified_path: PathLike,
                   output_path: Optional[PathLike] = None) -> Path:
    """
    Lee ORIGINAL y MOD, genera el PatchSet y lo guarda en JSON.
    Devuelve la ruta del archivo escrito.
    """
    stock = _read_bytes(original_path)
    mod = _read_bytes(modified_path)

    patch_set = create_patch(stock, mod, str(modified_path))

    out = Path(output_path) if output_path else default_patch_path(modified_path)
    save_patch(out, patch_set)
    logger.info("wrote %d patch(es) to %s", patch_set.total_patches(), out)
    return out


def _decode_byte(patch: PatchRecord) -> bytes:
    if len(patch.data) != 2:
        raise InvalidHexData(patch.offset, patch.data)
    try:
        return bytes.fromhex(patch.data)
    except ValueError as e:
        raise InvalidHexData(patch.offset, patch.data) from e


def apply_patch(target_path: PathLike, patch_set: PatchSet) -> None:
    """
    Verifica el SHA-256 del archivo destino y escribe cada byte en su offset.
    No es transaccional: si un parche falla, los anteriores quedan escritos.
    """
    target = Path(target_path)
    if not target.is_file():
        raise TargetMissing(target)

    content = _read_bytes(target)
    actual = sha256(content)
    if actual != patch_set.checksum.lower():
        raise ChecksumMismatch(target, patch_set.checksum, actual)

    size = len(content)
    logger.debug("%s verified (%s), applying %d patch(es)", target, actual, patch_set.total_patches())

    try:
        f = open(target, "r+b")
    except OSError as e:
        raise PatchIOError(target, f"unable to open the target file: {e.strerror or e}") from e

    with f:
        for patch in patch_set.patches:
            data = _decode_byte(patch)

            if patch.offset >= size:
                raise SeekFailure(target, patch.offset, f"offset beyond end of file ({size} bytes)")
            try:
                f.seek(patch.offset)
            except (OSError, OverflowError) as e:
                raise SeekFailure(target, patch.offset, str(e)) from e

            try:
                f.write(data)
            except OSError as e:
                raise WriteFailure(target, patch.offset, e.strerror or str(e)) from e

    logger.info("applied %d patch(es) to %s", patch_set.total_patches(), target)


def apply_patch_file(patch_path: PathLike) -> PatchSet:
    """Carga un archivo de parche y lo aplica sobre su 'file_name'."""
    patch_set = load_patch(patch_path)
    apply_patch(Path(patch_set.file_name), patch_set)
    return patch_set
