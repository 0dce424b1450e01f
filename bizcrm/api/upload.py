"""
File upload endpoints.

Files are written to ``UPLOAD_DIR`` as ``{epoch_ms}_{stem}{ext}`` and served
back from ``/uploads``.
"""
import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, File, HTTPException, UploadFile

from bizcrm.api.deps import get_current_user_context
from bizcrm.api.responses import success
from bizcrm.utils import config

logger = logging.getLogger("bizcrm.upload")

router = APIRouter(prefix="/upload", tags=["upload"])


def upload_dir() -> Path:
    path = Path(config.get_upload_dir())
    path.mkdir(parents=True, exist_ok=True)
    return path


def stored_file_name(original_name: str, now_ms: Optional[int] = None) -> str:
    """Build the on-disk name, dropping any directory part of ``original_name``."""
    name = Path(original_name or "file").name
    suffix = Path(name).suffix
    stem = name[: -len(suffix)] if suffix else name
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{stamp}_{stem}{suffix}"


def resolve_upload_path(file_url: str) -> Path:
    # Only the basename is honoured so a URL cannot escape the upload dir
    return upload_dir() / Path(file_url).name


@router.post("")
def upload_file(file: Optional[UploadFile] = File(default=None), user_context=Depends(get_current_user_context)):
    _, current_user = user_context
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")
    limit = config.get_max_file_size()
    # Never buffer more than one byte past the limit
    data = file.file.read(limit + 1)
    if len(data) > limit:
        raise HTTPException(status_code=400, detail="File too large")
    file_name = stored_file_name(file.filename)
    (upload_dir() / file_name).write_bytes(data)
    logger.info(f"Manager {current_user.get('id')} uploaded {file_name} ({len(data)} bytes)")
    return success({
        "fileName": file.filename,
        "fileUrl": f"/uploads/{file_name}",
        "fileType": file.content_type,
    })


@router.delete("")
def delete_file(payload: Optional[Dict[str, Any]] = Body(default=None), user_context=Depends(get_current_user_context)):
    _, current_user = user_context
    file_url = (payload or {}).get("fileUrl")
    if not file_url or not isinstance(file_url, str):
        raise HTTPException(status_code=400, detail="File URL is required")
    path = resolve_upload_path(file_url)
    if not path.is_file():
        raise HTTPException(status_code=404, detail="File not found")
    path.unlink()
    logger.info(f"Manager {current_user.get('id')} deleted upload {path.name}")
    return success(message="File deleted successfully")
