"""Unit tests for command declarations and availability checks."""

import pytest

from webarchiver.contexts.capture import ToolUnavailableError, WebpageToPdf, is_available
from webarchiver.contexts.capture.settings import CaptureSettings
from webarchiver.utils.command_registry import CommandNotDeclaredError, CommandRegistry


@pytest.mark.unit
def test_get_descriptor(command_lines_file):
    registry = CommandRegistry(command_lines_file)
    descriptor = registry.get_descriptor("wkhtmlToPdf")

    assert descriptor.name == "wkhtmlToPdf"
    assert descriptor.command == "wkhtmltopdf"
    assert descriptor.install_hint == "fake renderer"


@pytest.mark.unit
def test_get_descriptor_not_declared(command_lines_file):
    registry = CommandRegistry(command_lines_file)

    with pytest.raises(CommandNotDeclaredError):
        registry.get_descriptor("pdftk")
    assert not registry.is_declared("pdftk")


@pytest.mark.unit
def test_missing_declarations_file(tmp_path):
    registry = CommandRegistry(tmp_path / "absent.yaml")

    with pytest.raises(FileNotFoundError):
        registry.get_descriptor("wkhtmlToPdf")
    assert registry.get_availability("wkhtmlToPdf").is_available is False


@pytest.mark.unit
def test_availability_missing_binary(command_lines_file):
    availability = CommandRegistry(command_lines_file).get_availability("missingRenderer")

    assert availability.is_available is False
    assert "webarchiver-missing-renderer-xyz" in availability.error_message
    assert availability.install_hint == "not installable"


@pytest.mark.unit
def test_availability_not_declared(command_lines_file):
    availability = CommandRegistry(command_lines_file).get_availability("pdftk")

    assert availability.is_available is False
    assert availability.error_message


@pytest.mark.unit
@pytest.mark.parametrize("command_name", ["missingRenderer", "notDeclared"])
def test_is_available_false_does_not_raise(command_name, command_lines_file, store):
    settings = CaptureSettings(registry=CommandRegistry(command_lines_file), command_name=command_name)

    assert WebpageToPdf(settings=settings, store=store).is_available() is False
    assert is_available(settings) is False


@pytest.mark.unit
def test_require_available_raises(command_lines_file, store):
    settings = CaptureSettings(
        registry=CommandRegistry(command_lines_file), command_name="missingRenderer"
    )

    with pytest.raises(ToolUnavailableError) as exc_info:
        WebpageToPdf(settings=settings, store=store).require_available()

    assert exc_info.value.command_name == "missingRenderer"
    assert exc_info.value.install_hint == "not installable"
    assert "missingRenderer" in str(exc_info.value)


@pytest.mark.unit
def test_availability_with_fake_renderer(fake_renderer, settings, store):
    assert WebpageToPdf(settings=settings, store=store).is_available() is True
