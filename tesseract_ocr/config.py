"""Configuration helpers for temp file locations and the tesseract executable."""

from __future__ import annotations

import os
import tempfile

APP_NAME = "tesseract-ocr"

TEMP_DIR_ENV = "TESSERACT_OCR_TEMP_DIR"
TESSERACT_CMD_ENV = "TESSERACT_CMD"
DEFAULT_TESSERACT_CMD = "tesseract"


def normalize_dir(path: str) -> str:
    """Return ``path`` with a trailing path separator."""
    if not path.endswith(os.sep):
        path += os.sep
    return path


def default_temp_dir() -> str:
    """Return the directory for temporary files, honouring ``TESSERACT_OCR_TEMP_DIR``."""
    return normalize_dir(os.environ.get(TEMP_DIR_ENV) or tempfile.gettempdir())


def get_tesseract_cmd() -> str:
    return os.environ.get(TESSERACT_CMD_ENV) or DEFAULT_TESSERACT_CMD
