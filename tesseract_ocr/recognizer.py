"""Recognize text in an image by shelling out to the tesseract CLI."""

from __future__ import annotations

import logging
import os
import random
import shlex
import subprocess
from collections.abc import Iterable, Sequence

import pytesseract
from pytesseract import TesseractError

from .config import default_temp_dir, get_tesseract_cmd, normalize_dir
from .errors import (
    ConfigWriteError,
    OutputReadError,
    TesseractInvocationError,
    TesseractNotFoundError,
)

logger = logging.getLogger(__name__)

WHITELIST_DIRECTIVE = "tessedit_char_whitelist"
CONFIG_SUFFIX = ".conf"
OUTPUT_SUFFIX = ".txt"  # appended by tesseract itself

INSTALL_HINT = (
    "Install it (e.g. `brew install tesseract` or `apt-get install tesseract-ocr`) "
    "or point TESSERACT_CMD at the executable."
)


def build_whitelist(char_lists: Iterable[str | Sequence[str]]) -> str:
    """Flatten strings and character sequences into a single whitelist string."""
    whitelist = ""
    for chars in char_lists:
        whitelist += chars if isinstance(chars, str) else "".join(chars)
    return whitelist


def _language_hint_message(raw_message: str, language: str | None) -> str:
    normalized = raw_message.lower()
    missing_patterns = [
        "error opening data file",
        "failed loading language",
        "couldn't load any languages",
        "could not initialize tesseract",
    ]
    if language and any(pattern in normalized for pattern in missing_patterns):
        return (
            f"Tesseract is missing the traineddata files required for language '{language}'. "
            "Install the appropriate language data (update your tessdata directory or set TESSDATA_PREFIX) and retry."
        )
    return raw_message.strip() or "Tesseract OCR failed."


class TesseractOCR:
    """Run tesseract against a single image.

    Configure with the chained setters, then call :meth:`recognize` once::

        text = TesseractOCR("receipt.png").set_language("eng").set_whitelist("0123456789").recognize()

    The output file is named after the image's base name inside the temp
    directory, so concurrent runs on images sharing a base name and temp
    directory will overwrite each other's output.
    """

    image: str
    tesseract_cmd: str | None
    language: str | None
    whitelist: str | None
    temp_dir: str | None
    config_file: str | None
    output_file: str | None

    def __init__(self, image: str | os.PathLike[str], *, tesseract_cmd: str | None = None) -> None:
        self.image = os.fspath(image)
        self.tesseract_cmd = tesseract_cmd
        self.language = None
        self.whitelist = None
        self.temp_dir = None
        self.config_file = None
        self.output_file = None

    def set_language(self, language: str) -> TesseractOCR:
        """Set the language code (e.g. ``eng``, ``deu``) passed with ``-l``."""
        self.language = language
        return self

    def set_whitelist(self, *char_lists: str | Sequence[str]) -> TesseractOCR:
        """Restrict recognition to the given characters.

        Each argument is either a string or a sequence of single characters;
        they are concatenated in the order given.
        """
        self.whitelist = build_whitelist(char_lists)
        return self

    def set_temp_dir(self, path: str | os.PathLike[str]) -> TesseractOCR:
        self.temp_dir = os.fspath(path)
        return self

    def _resolve_temp_dir(self) -> str:
        if self.temp_dir:
            return normalize_dir(self.temp_dir)
        return default_temp_dir()

    def _executable(self) -> str:
        return self.tesseract_cmd or get_tesseract_cmd()

    def recognize(self) -> str:
        """Run tesseract and return the recognized text, stripped of surrounding whitespace."""
        temp_dir = self._resolve_temp_dir()
        try:
            self._generate_config_file(temp_dir)
            output_file = self._execute(temp_dir)
            return self._read_output_file(output_file)
        finally:
            self._remove_temp_files()

    def _generate_config_file(self, temp_dir: str) -> None:
        self.config_file = None
        if not self.whitelist:
            return
        config_file = f"{temp_dir}{random.randrange(2**31)}{CONFIG_SUFFIX}"
        try:
            with open(config_file, "w", encoding="utf-8") as handle:
                _ = handle.write(f"{WHITELIST_DIRECTIVE} {self.whitelist}")
        except OSError as exc:
            raise ConfigWriteError(f"Could not write tesseract config file {config_file}: {exc}") from exc
        self.config_file = config_file
        logger.debug("Wrote whitelist config %s", config_file)

    def build_command(self) -> list[str]:
        """Return the tesseract argument vector for the current settings.

        ``nobatch <config>`` is only included while :meth:`recognize` is
        running, since the whitelist config file exists only for that call.
        """
        return self._command(self._output_base(self._resolve_temp_dir()))

    def _command(self, output_file: str) -> list[str]:
        cmd = [self._executable(), self.image]
        if self.language:
            cmd += ["-l", self.language]
        cmd.append(output_file)
        if self.config_file:
            cmd += ["nobatch", self.config_file]
        return cmd

    def _output_base(self, temp_dir: str) -> str:
        return temp_dir + self.image.split("/")[-1]

    def _execute(self, temp_dir: str) -> str:
        output_file = self._output_base(temp_dir)
        cmd = self._command(output_file)
        logger.debug("Running %s", shlex.join(cmd))
        try:
            _ = subprocess.run(cmd, check=True, capture_output=True, text=True)
        except FileNotFoundError as exc:
            raise TesseractNotFoundError(f"Tesseract executable '{cmd[0]}' was not found. {INSTALL_HINT}") from exc
        except subprocess.CalledProcessError as exc:
            stderr = exc.stderr or ""
            logger.error("Tesseract OCR failed for %s: %s", self.image, stderr.strip())
            raise TesseractInvocationError(
                _language_hint_message(stderr or exc.stdout or str(exc), self.language),
                command=cmd,
                returncode=exc.returncode,
                stderr=stderr,
            ) from exc
        # Only a successful run owns the output file.
        self.output_file = output_file
        return output_file

    def _read_output_file(self, output_file: str) -> str:
        output_path = output_file + OUTPUT_SUFFIX
        try:
            with open(output_path, encoding="utf-8") as handle:
                text = handle.read().strip()
        except (OSError, UnicodeDecodeError) as exc:
            raise OutputReadError(f"Could not read tesseract output {output_path}: {exc}") from exc
        if not text:
            logger.warning("Tesseract produced no text for %s.", self.image)
        return text

    def _remove_temp_files(self) -> None:
        if self.config_file:
            _remove_quietly(self.config_file)
            self.config_file = None
        if self.output_file:
            _remove_quietly(self.output_file + OUTPUT_SUFFIX)
            self.output_file = None


def _remove_quietly(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Could not remove temporary file %s: %s", path, exc)



def _use_tesseract_cmd(tesseract_cmd: str | None) -> None:
    pytesseract.pytesseract.tesseract_cmd = tesseract_cmd or get_tesseract_cmd()


def validate_tesseract_installation(tesseract_cmd: str | None = None) -> str:
    """Return the installed tesseract version, raising if it cannot be run."""
    _use_tesseract_cmd(tesseract_cmd)
    try:
        version = pytesseract.get_tesseract_version()
    except pytesseract.TesseractNotFoundError as exc:
        raise TesseractNotFoundError(f"Tesseract is not installed or not accessible. {INSTALL_HINT}") from exc
    except TesseractError as exc:
        raise TesseractNotFoundError(f"Tesseract could not report its version: {exc}") from exc
    logger.debug("Found tesseract %s", version)
    return str(version)


def available_languages(tesseract_cmd: str | None = None) -> list[str]:
    """Return the traineddata languages installed for tesseract."""
    _use_tesseract_cmd(tesseract_cmd)
    try:
        languages = pytesseract.get_languages(config="")
    except pytesseract.TesseractNotFoundError as exc:
        raise TesseractNotFoundError(f"Tesseract is not installed or not accessible. {INSTALL_HINT}") from exc
    except TesseractError as exc:
        raise TesseractInvocationError(
            f"Tesseract could not list its languages: {exc}",
            command=[tesseract_cmd or get_tesseract_cmd(), "--list-langs"],
            returncode=exc.status,
        ) from exc
    return sorted(languages)
