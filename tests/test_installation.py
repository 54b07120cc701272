from __future__ import annotations

import types
import unittest
from unittest.mock import patch

import pytesseract

from tesseract_ocr import TesseractInvocationError, TesseractNotFoundError
from tesseract_ocr.recognizer import available_languages, validate_tesseract_installation


def _fake_pytesseract(**functions: object) -> types.SimpleNamespace:
    return types.SimpleNamespace(
        pytesseract=types.SimpleNamespace(tesseract_cmd="tesseract"),
        TesseractNotFoundError=pytesseract.TesseractNotFoundError,
        **functions,
    )


class TesseractValidationTests(unittest.TestCase):
    def test_returns_version_and_points_pytesseract_at_command(self) -> None:
        fake = _fake_pytesseract(get_tesseract_version=lambda: "5.3.4")
        with patch("tesseract_ocr.recognizer.pytesseract", new=fake):
            version = validate_tesseract_installation("/opt/tesseract/bin/tesseract")

        self.assertEqual(version, "5.3.4")
        self.assertEqual(fake.pytesseract.tesseract_cmd, "/opt/tesseract/bin/tesseract")

    def test_fails_when_tesseract_not_accessible(self) -> None:
        def missing() -> str:
            raise pytesseract.TesseractNotFoundError()

        with patch("tesseract_ocr.recognizer.pytesseract", new=_fake_pytesseract(get_tesseract_version=missing)):
            with self.assertRaises(TesseractNotFoundError) as ctx:
                _ = validate_tesseract_installation()

        error_msg = str(ctx.exception)
        self.assertIn("not installed or not accessible", error_msg)
        self.assertIn("brew install tesseract", error_msg)

    def test_version_probe_failure(self) -> None:
        def broken() -> str:
            raise pytesseract.TesseractError(1, "bad install")

        with patch("tesseract_ocr.recognizer.pytesseract", new=_fake_pytesseract(get_tesseract_version=broken)):
            with self.assertRaises(TesseractNotFoundError) as ctx:
                _ = validate_tesseract_installation()

        self.assertIn("could not report its version", str(ctx.exception))


class AvailableLanguagesTests(unittest.TestCase):
    def test_languages_are_sorted(self) -> None:
        fake = _fake_pytesseract(get_languages=lambda config="": ["osd", "eng", "deu"])
        with patch("tesseract_ocr.recognizer.pytesseract", new=fake):
            self.assertEqual(available_languages(), ["deu", "eng", "osd"])

    def test_listing_failure_raises_invocation_error(self) -> None:
        def broken(config: str = "") -> list[str]:
            raise pytesseract.TesseractError(3, "tessdata missing")

        with patch("tesseract_ocr.recognizer.pytesseract", new=_fake_pytesseract(get_languages=broken)):
            with self.assertRaises(TesseractInvocationError) as ctx:
                _ = available_languages("tesseract")

        self.assertEqual(ctx.exception.returncode, 3)
        self.assertEqual(ctx.exception.command, ["tesseract", "--list-langs"])
