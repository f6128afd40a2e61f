# app/services/patch_format.py
# Formato JSON del parche: {"file_name", "checksum", "patches": [{"offset", "data"}]}
from __future__ import annotations

import json
from typing import Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError

from app.services.errors import MalformedPatch

JSON_INDENT = 2
U64_MAX = 2**64 - 1


class PatchRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    offset: StrictInt = Field(ge=0, le=U64_MAX)
    data: StrictStr  # un byte, 2 caracteres hex; se valida al aplicar


class PatchSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_name: StrictStr
    checksum: StrictStr
    patches: Tuple[PatchRecord, ...] = ()

    def total_patches(self) -> int:
        return len(self.patches)


def encode(patch_set: PatchSet) -> str:
    """PatchSet -> JSON legible (indentado, orden de claves estable)."""
    doc = {
        "file_name": patch_set.file_name,
        "checksum": patch_set.checksum,
        "patches": [{"offset": p.offset, "data": p.data} for p in patch_set.patches],
    }
    return json.dumps(doc, ensure_ascii=False, indent=JSON_INDENT)


def decode(text: Union[str, bytes]) -> PatchSet:
    """
    JSON -> PatchSet. Acepta variante compacta o indentada.
    JSON inválido o campos ausentes / con tipo incorrecto -> MalformedPatch.
    """
    try:
        return PatchSet.model_validate_json(text)
    except ValidationError as e:
        problems = []
        for err in e.errors():
            if err["type"] == "json_invalid":
                problems.append(f"Invalid JSON format: {err['msg']}")
                continue
            loc = ".".join(str(x) for x in err["loc"]) or "<root>"
            problems.append(f"{loc}: {err['msg']}")
        raise MalformedPatch("; ".join(problems)) from e
