from typing import Optional

from fastapi import APIRouter, UploadFile, File, Form

from app.routers.uploads import read_upload
from app.services.patch_engine import crc32_hex, sha256

router = APIRouter(prefix="/admin", tags=["fingerprint"])


@router.post("/fingerprint")
async def fingerprint(
    bin_file: UploadFile = File(...),
    # opcional: checksum de un parche, para saber si este binario es su ORIGINAL
    checksum: Optional[str] = Form(None),
):
    data = await read_upload(bin_file)
    digest = sha256(data)
    out = {
        "filename": bin_file.filename,
        "size_bytes": len(data),
        "sha256": digest,
        "cvn_crc32": crc32_hex(data),
    }
    if checksum:
        out["matches_patch"] = digest == checksum.strip().lower()

    out["copy"] = (
        f"SHA256={out['sha256']}\n"
        f"SIZE={out['size_bytes']}\n"
        f"CVN={out['cvn_crc32']}\n"
    )
    return out
