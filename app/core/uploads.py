# app/core/uploads.py
import uuid
import logging
from pathlib import Path

from fastapi import UploadFile

from app.core.config import settings

logger = logging.getLogger(__name__)


def get_upload_dir() -> Path:
    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    return upload_dir


async def save_upload(file: UploadFile) -> str:
    """Сохраняет файл под случайным именем и возвращает это имя"""
    ext = file.filename.rsplit('.', 1)[-1] if file.filename and '.' in file.filename else ''
    safe_name = f"{uuid.uuid4().hex}.{ext}" if ext else uuid.uuid4().hex
    content = await file.read()
    with open(get_upload_dir() / safe_name, "wb") as f:
        f.write(content)
    logger.info(f"[Uploads] Сохранён файл {file.filename!r} как {safe_name} ({len(content)} байт)")
    return safe_name
