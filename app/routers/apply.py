# app/routers/apply.py
from __future__ import annotations

import re
import tempfile
from pathlib import Path
from urllib.parse import quote

from fastapi import APIRouter, HTTPException, UploadFile, File
from fastapi.responses import Response

from app.routers.uploads import read_upload
from app.services.errors import ChecksumMismatch, PatchError
from app.services.patch_engine import apply_patch
from app.services.patch_format import decode

router = APIRouter(prefix="/admin", tags=["apply"])


def content_disposition(filename: str) -> str:
    # los headers van en latin-1: nombre ASCII de respaldo + filename* (RFC 5987) en UTF-8
    quoted = quote(filename, safe="")
    if quoted == filename:
        return f'attachment; filename="{filename}"'
    fallback = re.sub(r'[^A-Za-z0-9._-]', "_", filename)
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quoted}"


@router.post("/apply")
async def apply_uploaded_patch(
    bin_file: UploadFile = File(...),
    patch_file: UploadFile = File(...),
):
    """
    Aplica un parche JSON sobre el binario subido y devuelve el binario parcheado.
    """
    data = await read_upload(bin_file)
    raw_patch = await read_upload(patch_file)

    try:
        patch_set = decode(raw_patch)
    except PatchError as e:
        raise HTTPException(status_code=400, detail=str(e))

    with tempfile.TemporaryDirectory() as tmp:
        target = Path(tmp) / "target.bin"
        target.write_bytes(data)
        try:
            apply_patch(target, patch_set)
        except ChecksumMismatch as e:
            raise HTTPException(status_code=409, detail=str(e))
        except PatchError as e:
            raise HTTPException(status_code=400, detail=str(e))
        patched = target.read_bytes()

    filename = Path(patch_set.file_name).name or "patched.bin"
    return Response(
        content=patched,
        media_type="application/octet-stream",
        headers={"Content-Disposition": content_disposition(filename)},
    )
