from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.routers.apply import router as apply_router
from app.routers.diff2patch import router as diff2patch_router
from app.routers.fingerprint import router as fingerprint_router

app = FastAPI(title="patchit")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(fingerprint_router)
app.include_router(diff2patch_router)
app.include_router(apply_router)

@app.get("/health")
def health():
    return {"ok": True}
