#!/usr/bin/env python3
"""
Webpage Archiving CLI

Captures distant webpages to PDF with wkhtmltopdf, optionally after logging in.

Commands:
    convert - Capture a webpage to PDF
    login   - Log in to a site and keep the session cookie jar
    check   - Report whether wkhtmltopdf is available

Examples:\n

    archive_page.py convert https://en.wikipedia.org/wiki/Unit_testing

    archive_page.py convert https://example.com -o example.pdf --timeout 60000

    archive_page.py login https://intranet.example.com/login "--post user jdoe --post pwd secret"

    archive_page.py convert https://intranet.example.com/report -c /tmp/webarchiver_x.jar
"""

import os
import shutil
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from webarchiver.contexts.capture import CaptureError, ToolUnavailableError, WebpageToPdf
from webarchiver.contexts.capture.logger import setup_capture_logger
from webarchiver.utils.artifact_store import Artifact
from webarchiver.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
TIMEOUT_MS = int(os.getenv("WEBARCHIVER_TIMEOUT_MS", "30000"))


app = typer.Typer(
    help="Capture webpages to PDF with wkhtmltopdf, with timeout and output validation",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _start_session(verbose: bool) -> Path:
    log_dir = LOGS_PATH / f"capture_{now()}"
    return setup_capture_logger(log_dir, verbose=verbose)


def _require_renderer(converter: WebpageToPdf) -> None:
    try:
        converter.require_available()
    except CaptureError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("convert")
def convert_command(
    url: Annotated[str, typer.Argument(help="URL of the page to capture")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Copy the PDF to this path"),
    ] = None,
    cookie_jar: Annotated[
        Optional[Path],
        typer.Option(
            "--cookie-jar",
            "-c",
            help="Cookie jar from a previous `login`, for authenticated pages",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    timeout: Annotated[
        int,
        typer.Option("--timeout", "-t", help="Timeout in ms (values under 1000 mean 30000)"),
    ] = TIMEOUT_MS,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show renderer output and debug messages"),
    ] = False,
):
    """
    Capture a webpage to PDF.

    Examples:\n

        $ archive_page.py convert https://example.com

        $ archive_page.py convert https://example.com -o example.pdf
    """
    typer.secho(f"\nCapturing: {url}", fg=typer.colors.BLUE, bold=True)
    log_file = _start_session(verbose)

    converter = WebpageToPdf(timeout=timeout, verbose=verbose)
    _require_renderer(converter)

    jar = Artifact(path=cookie_jar) if cookie_jar is not None else None
    try:
        pdf = converter.to_pdf(url, output.name if output else None, cookie_jar=jar)
    except CaptureError as e:
        typer.secho("✗ Capture failed", fg=typer.colors.RED, bold=True)
        typer.secho(f"  {e}", fg=typer.colors.RED)
        typer.echo(f"  Log: {log_file}")
        raise typer.Exit(code=1)

    final_path = pdf.path
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(pdf.path, output)
        final_path = output

    typer.secho("✓ Capture succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  PDF: {final_path} ({pdf.size} bytes)")
    typer.echo(f"  Log: {log_file}")
    raise typer.Exit(code=0)


@app.command("login")
def login_command(
    url: Annotated[str, typer.Argument(help="URL of the login form target")],
    login_info: Annotated[
        str,
        typer.Argument(help='wkhtmltopdf --post arguments, e.g. "--post user jdoe --post pwd secret"'),
    ],
    timeout: Annotated[
        int,
        typer.Option("--timeout", "-t", help="Timeout in ms (values under 1000 mean 30000)"),
    ] = TIMEOUT_MS,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show renderer output and debug messages"),
    ] = False,
):
    """
    Log in to a site and print the path of the session cookie jar.

    Pass the jar to `convert --cookie-jar` to capture authenticated pages.
    """
    typer.secho(f"\nLogging in: {url}", fg=typer.colors.BLUE, bold=True)
    log_file = _start_session(verbose)

    converter = WebpageToPdf(timeout=timeout, verbose=verbose)
    _require_renderer(converter)

    try:
        jar = converter.login(url, login_info)
    except CaptureError as e:
        typer.secho("✗ Login failed", fg=typer.colors.RED, bold=True)
        typer.secho(f"  {e}", fg=typer.colors.RED)
        typer.echo(f"  Log: {log_file}")
        raise typer.Exit(code=1)

    typer.secho("✓ Login succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Cookie jar: {jar.path}")
    raise typer.Exit(code=0)


@app.command("check")
def check_command():
    """Report whether wkhtmltopdf is declared and installed."""
    converter = WebpageToPdf()

    if converter.is_available():
        typer.secho(f"✓ {converter.settings.executable} is available", fg=typer.colors.GREEN, bold=True)
        raise typer.Exit(code=0)

    typer.secho("✗ Renderer not available", fg=typer.colors.RED, bold=True)
    try:
        converter.require_available()
    except ToolUnavailableError as e:
        for line in str(e).splitlines():
            typer.echo(f"  {line}")
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
