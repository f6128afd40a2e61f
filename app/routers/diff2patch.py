from fastapi import APIRouter, UploadFile, File, Form, HTTPException

from app.routers.uploads import read_upload
from app.services.errors import SizeMismatch
from app.services.patch_engine import create_patch, crc32_hex, sha256

router = APIRouter(prefix="/admin", tags=["diff2patch"])


@router.post("/diff2patch")
async def diff2patch(
    # nombre que quedará en "file_name"; por defecto el del MOD
    file_name: str = Form(None),

    stock: UploadFile = File(...),
    mod: UploadFile = File(...)
):
    stock_bytes = await read_upload(stock)
    mod_bytes   = await read_upload(mod)

    target_name = file_name or mod.filename or "patched.bin"
    try:
        patch_set = create_patch(stock_bytes, mod_bytes, target_name)
    except SizeMismatch as e:
        raise HTTPException(status_code=400, detail=str(e))

    meta = {
        "base": {
            "sha256": patch_set.checksum,
            "size_bytes": len(stock_bytes),
            "cvn_crc32": crc32_hex(stock_bytes),
            "original_filename": stock.filename,
        },

        "mod": {
            "sha256": sha256(mod_bytes),
            "size_bytes": len(mod_bytes),
            "cvn_crc32": crc32_hex(mod_bytes),
            "original_filename": mod.filename,
        },

        "patch": {
            "patch_count": patch_set.total_patches(),
        },
    }

    copy_block = (
        f"FILE={target_name}\n"
        f"BASE_SHA256={meta['base']['sha256']}\n"
        f"BASE_SIZE={meta['base']['size_bytes']}\n"
        f"BASE_CVN={meta['base']['cvn_crc32']}\n"
        f"MOD_SHA256={meta['mod']['sha256']}\n"
        f"MOD_CVN={meta['mod']['cvn_crc32']}\n"
        f"PATCHES={meta['patch']['patch_count']}\n"
    )

    return {"status": "ok", "patch": patch_set.model_dump(mode="json"), "meta": meta, "copy": copy_block}
