"""Thin wrapper around the ``tesseract`` command-line OCR engine."""

from .errors import (
    ConfigWriteError,
    OutputReadError,
    TesseractInvocationError,
    TesseractNotFoundError,
    TesseractOCRError,
)
from .recognizer import TesseractOCR, available_languages, build_whitelist, validate_tesseract_installation

__all__ = [
    "TesseractOCR",
    "build_whitelist",
    "validate_tesseract_installation",
    "available_languages",
    "TesseractOCRError",
    "TesseractNotFoundError",
    "TesseractInvocationError",
    "ConfigWriteError",
    "OutputReadError",
]
