"""Unit tests for wkhtmltopdf command line construction."""

import shlex

import pytest

from webarchiver.contexts.capture.command_builder import (
    build_command_line,
    build_login_command_line,
    substitute_parameters,
)

TEMPLATE = "#{url} -> #{targetFilePath}"


@pytest.mark.unit
def test_substitute_parameters_replaces_each_placeholder():
    """Test both placeholders are replaced exactly once."""
    params = substitute_parameters(TEMPLATE, "http://example.com", "/tmp/out.pdf")

    assert params == "http://example.com -> /tmp/out.pdf"
    assert "#{" not in params


@pytest.mark.unit
def test_build_command_line_prefixes_executable():
    line = build_command_line(TEMPLATE, "http://example.com", "/tmp/out.pdf")

    assert line == "wkhtmltopdf http://example.com -> /tmp/out.pdf"


@pytest.mark.unit
def test_build_command_line_with_cookie_jar():
    """Test the cookie jar flag is placed before the substituted template."""
    line = build_command_line(
        TEMPLATE, "http://example.com", "/tmp/out.pdf", cookie_jar_path="/tmp/jar1"
    )

    assert line == 'wkhtmltopdf --cookie-jar "/tmp/jar1" http://example.com -> /tmp/out.pdf'
    assert line.index('--cookie-jar "/tmp/jar1"') < line.index("http://example.com")


@pytest.mark.unit
def test_build_command_line_replaces_repeated_placeholders():
    line = build_command_line("#{url} #{url} #{targetFilePath}", "u", "t", executable="render")

    assert line == "render u u t"


@pytest.mark.unit
def test_build_command_line_does_not_escape_url():
    """Test the URL is inserted verbatim, query string and all."""
    url = "http://example.com/search?q=a&page=2"
    line = build_command_line('"#{url}" "#{targetFilePath}"', url, "/tmp/out.pdf")

    assert shlex.split(line) == ["wkhtmltopdf", url, "/tmp/out.pdf"]


@pytest.mark.unit
def test_build_login_command_line():
    line = build_login_command_line(
        "http://example.com",
        "--post user x --post pass y",
        "/tmp/session.jar",
        "/tmp/ignored.pdf",
    )

    assert line == (
        'wkhtmltopdf -q --cookie-jar "/tmp/session.jar" --post user x --post pass y '
        '"http://example.com" "/tmp/ignored.pdf"'
    )
    assert shlex.split(line) == [
        "wkhtmltopdf",
        "-q",
        "--cookie-jar",
        "/tmp/session.jar",
        "--post",
        "user",
        "x",
        "--post",
        "pass",
        "y",
        "http://example.com",
        "/tmp/ignored.pdf",
    ]
