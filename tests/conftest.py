"""
Shared fixtures: PDF writers and a fake wkhtmltopdf placed on PATH.

The fake renderer is a Python script. Its behaviour is driven by the
FAKE_RENDERER_MODE environment variable:

    ok            write a one-page PDF to the last argument, exit 0
    ok-exit-1     write a one-page PDF, exit 1
    empty         write nothing, exit 0
    empty-exit-1  write nothing, exit 1
    hang          sleep for a minute
"""

import json
import os
import stat
import sys
from pathlib import Path

import pytest
from PyPDF2 import PdfWriter

from webarchiver.contexts.capture.settings import CaptureSettings
from webarchiver.utils.artifact_store import ArtifactStore
from webarchiver.utils.command_registry import CommandRegistry

FAKE_RENDERER_SOURCE = """\
import json
import os
import sys
import time

from PyPDF2 import PdfWriter

args = sys.argv[1:]
args_log = os.environ.get("FAKE_RENDERER_ARGS")
if args_log:
    with open(args_log, "a", encoding="utf-8") as f:
        f.write(json.dumps(args) + "\\n")

if "--cookie-jar" in args:
    with open(args[args.index("--cookie-jar") + 1], "a", encoding="utf-8") as f:
        f.write("example.com\\tFALSE\\t/\\tFALSE\\t0\\tsession\\tabc123\\n")

mode = os.environ.get("FAKE_RENDERER_MODE", "ok")
if mode == "hang":
    time.sleep(60)

if mode in ("ok", "ok-exit-1"):
    writer = PdfWriter()
    writer.add_blank_page(width=200, height=200)
    with open(args[-1], "wb") as f:
        writer.write(f)

sys.exit(1 if mode.endswith("exit-1") else 0)
"""

TEST_COMMAND_LINES = """\
wkhtmlToPdf:
  command: wkhtmltopdf
  parameters: '"#{url}" "#{targetFilePath}"'
  install_hint: "fake renderer"
missingRenderer:
  command: webarchiver-missing-renderer-xyz
  parameters: '"#{url}" "#{targetFilePath}"'
  install_hint: "not installable"
"""

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="needs POSIX shebangs, signals and process groups")


def write_pdf(path: Path, pages: int = 1) -> Path:
    """Write a PDF with ``pages`` blank pages (0 is allowed)."""
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=200, height=200)
    with open(path, "wb") as f:
        writer.write(f)
    return path


@pytest.fixture
def command_lines_file(tmp_path):
    path = tmp_path / "command_lines.yaml"
    path.write_text(TEST_COMMAND_LINES, encoding="utf-8")
    return path


@pytest.fixture
def settings(command_lines_file):
    return CaptureSettings(registry=CommandRegistry(command_lines_file))


@pytest.fixture
def store(tmp_path):
    return ArtifactStore(tmp_path / "artifacts")


@pytest.fixture
def fake_renderer(tmp_path, monkeypatch):
    """Put a fake wkhtmltopdf first on PATH; returns the file its argv is logged to."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "wkhtmltopdf"
    script.write_text(f"#!{sys.executable}\n{FAKE_RENDERER_SOURCE}", encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    args_log = tmp_path / "renderer_args.jsonl"
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    monkeypatch.setenv("FAKE_RENDERER_ARGS", str(args_log))
    monkeypatch.setenv("FAKE_RENDERER_MODE", "ok")
    return args_log


def read_renderer_calls(args_log: Path) -> list:
    """Argument vectors received by the fake renderer, one per call."""
    if not args_log.exists():
        return []
    return [json.loads(line) for line in args_log.read_text(encoding="utf-8").splitlines()]
