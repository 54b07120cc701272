"""Errors raised while driving the tesseract executable."""

from __future__ import annotations

from collections.abc import Sequence


class TesseractOCRError(RuntimeError):
    """Base class for every failure surfaced by :class:`~tesseract_ocr.TesseractOCR`."""


class TesseractNotFoundError(TesseractOCRError):
    """The tesseract executable is not installed or not on ``PATH``."""


class TesseractInvocationError(TesseractOCRError):
    """Tesseract ran but exited with a non-zero status."""

    def __init__(self, message: str, *, command: Sequence[str], returncode: int, stderr: str = "") -> None:
        super().__init__(message)
        self.command: list[str] = list(command)
        self.returncode: int = returncode
        self.stderr: str = stderr


class ConfigWriteError(TesseractOCRError):
    """The temporary tesseract config file could not be written."""


class OutputReadError(TesseractOCRError):
    """The text file produced by tesseract is missing or unreadable."""
