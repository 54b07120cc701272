"""Command-line interface for tesseract-ocr."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from .config import APP_NAME
from .errors import TesseractOCRError
from .recognizer import TesseractOCR, available_languages, validate_tesseract_installation

app = typer.Typer(add_completion=False, no_args_is_help=True, help="Recognize text in images with tesseract")


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log tesseract commands and temp files")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def recognize(
    image: Annotated[Path, typer.Argument(help="Image to recognize")],
    language: Annotated[str | None, typer.Option("-l", "--lang", help="Tesseract language code, e.g. eng or deu")] = None,
    whitelist: Annotated[
        list[str] | None, typer.Option("-w", "--whitelist", help="Characters tesseract may output (repeatable)")
    ] = None,
    temp_dir: Annotated[Path | None, typer.Option("--temp-dir", help="Directory for temporary files")] = None,
    tesseract_cmd: Annotated[str | None, typer.Option("--tesseract-cmd", help="Path to the tesseract executable")] = None,
) -> None:
    """Print the text tesseract recognizes in IMAGE."""
    ocr = TesseractOCR(image, tesseract_cmd=tesseract_cmd)
    if language:
        ocr = ocr.set_language(language)
    if whitelist:
        ocr = ocr.set_whitelist(*whitelist)
    if temp_dir is not None:
        ocr = ocr.set_temp_dir(temp_dir)
    try:
        text = ocr.recognize()
    except TesseractOCRError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    typer.echo(text)


@app.command()
def check(
    tesseract_cmd: Annotated[str | None, typer.Option("--tesseract-cmd", help="Path to the tesseract executable")] = None,
) -> None:
    """Verify tesseract is installed and print its version."""
    try:
        version = validate_tesseract_installation(tesseract_cmd)
    except TesseractOCRError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    typer.echo(f"tesseract {version}")


@app.command()
def languages(
    tesseract_cmd: Annotated[str | None, typer.Option("--tesseract-cmd", help="Path to the tesseract executable")] = None,
) -> None:
    """List the languages tesseract has traineddata for."""
    try:
        installed = available_languages(tesseract_cmd)
    except TesseractOCRError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    if not installed:
        typer.echo("No languages installed.", err=True)
        raise typer.Exit(code=1)
    for code in installed:
        typer.echo(code)


def run() -> None:
    app(prog_name=APP_NAME, args=sys.argv[1:])
