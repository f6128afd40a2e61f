# app/routers/uploads.py
from typing import Optional

from fastapi import HTTPException, UploadFile

MAX_BYTES = 64 * 1024 * 1024
CHUNK = 1024 * 1024


async def read_upload(upload: UploadFile, limit: Optional[int] = None) -> bytes:
    """Lee el upload completo en memoria; corta con 413 si pasa de 'limit' (MAX_BYTES por defecto)."""
    if limit is None:
        limit = MAX_BYTES
    buf = bytearray()
    while True:
        chunk = await upload.read(CHUNK)
        if not chunk:
            break
        buf += chunk
        if len(buf) > limit:
            raise HTTPException(status_code=413, detail=f"{upload.filename or 'upload'} too large (> {limit} bytes)")
    return bytes(buf)
