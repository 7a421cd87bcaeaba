"""
Webpage to PDF conversion with wkhtmltopdf.

wkhtmltopdf must be installed. Some webpages are broken enough to make it
abort or hang, so the declared parameters ask it to ignore load errors
(``--load-media-error-handling ignore``, ``--load-error-handling ignore``)
and every run is bounded by a watchdog timeout.

The renderer's exit code is not trusted: it can report an error after writing
a complete PDF. Success is decided by parsing the produced file instead.

Example:
    >>> converter = WebpageToPdf(timeout=60000)
    >>> jar = converter.login("https://intranet.example.com/login",
    ...                       "--post user jdoe --post pwd secret")
    >>> pdf = converter.to_pdf("https://intranet.example.com/report", "report.pdf", cookie_jar=jar)
"""

from dataclasses import dataclass
from typing import Optional

from webarchiver.contexts.capture.command_builder import build_command_line, build_login_command_line
from webarchiver.contexts.capture.exceptions import ToolUnavailableError, ValidationFailedError
from webarchiver.contexts.capture.executor import run_bounded
from webarchiver.contexts.capture.logger import _log_debug, _log_info, log_run_result, log_run_start
from webarchiver.contexts.capture.settings import (
    TIMEOUT_DEFAULT_MS,
    CaptureSettings,
    effective_timeout,
    get_default_settings,
)
from webarchiver.contexts.capture.validator import accept_output
from webarchiver.utils.artifact_store import Artifact, ArtifactStore

PDF_EXTENSION = ".pdf"
COOKIE_JAR_EXTENSION = ".jar"


@dataclass(frozen=True)
class ConversionRequest:
    """
    One capture to perform.

    Attributes:
        url: Page to capture
        file_name: Display name of the resulting PDF (optional)
        cookie_jar: Cookie jar from a previous login (optional)
        login_info: wkhtmltopdf --post arguments; makes this a login request
    """

    url: str
    file_name: Optional[str] = None
    cookie_jar: Optional[Artifact] = None
    login_info: Optional[str] = None

    @property
    def is_login(self) -> bool:
        return self.login_info is not None


class WebpageToPdf:
    """
    Converts distant webpages to PDF artifacts.

    Args:
        timeout: Watchdog timeout in ms. Values below 1000 mean the 30s default
        settings: Shared settings holding the cached parameter template
        store: Allocates the output PDFs and cookie jars
        verbose: Log renderer output even on success
    """

    def __init__(
        self,
        timeout: int = 0,
        settings: Optional[CaptureSettings] = None,
        store: Optional[ArtifactStore] = None,
        verbose: bool = False,
    ):
        self._timeout = TIMEOUT_DEFAULT_MS
        self.set_timeout(timeout)
        self.settings = settings if settings is not None else get_default_settings()
        self.store = store if store is not None else ArtifactStore()
        self.verbose = verbose

    @property
    def timeout(self) -> int:
        return self._timeout

    @timeout.setter
    def timeout(self, value: int) -> None:
        self.set_timeout(value)

    def set_timeout(self, value: int) -> None:
        """If the new value is < 1000 (1s), the 30s default is used instead."""
        self._timeout = effective_timeout(value)

    def is_available(self) -> bool:
        """Whether wkhtmltopdf is declared and installed. Never raises."""
        return self.settings.registry.get_availability(self.settings.command_name).is_available

    def require_available(self) -> None:
        """
        Raises:
            ToolUnavailableError: wkhtmltopdf is not declared or not installed
        """
        availability = self.settings.registry.get_availability(self.settings.command_name)
        if not availability.is_available:
            raise ToolUnavailableError(
                self.settings.command_name,
                reason=availability.error_message,
                install_hint=availability.install_hint,
            )

    def to_pdf(
        self,
        url: str,
        file_name: Optional[str] = None,
        cookie_jar: Optional[Artifact] = None,
    ) -> Artifact:
        """
        Convert the distant URL to PDF. The renderer is killed if it runs longer
        than the timeout.

        Args:
            url: The URL to convert
            file_name: Display name of the final PDF. Optional
            cookie_jar: Cookie jar returned by login(), for authenticated pages

        Returns:
            Artifact holding the PDF

        Raises:
            ValidationFailedError: No valid PDF was produced
        """
        if not url:
            raise ValueError("url must be a non-empty string")

        result_pdf = self.store.create_with_extension(PDF_EXTENSION)
        if file_name:
            result_pdf.filename = file_name

        line = build_command_line(
            self.settings.parameter_template,
            url,
            str(result_pdf.path),
            cookie_jar_path=str(cookie_jar.path) if cookie_jar is not None else None,
            executable=self.settings.executable,
        )

        _log_info(f"Converting {url}")
        return self._run(line, result_pdf)

    def login(self, url: str, login_info: str) -> Artifact:
        """
        Log in to a site and return the session cookie jar.

        ``login_info`` lists the form variables to post, in wkhtmltopdf
        syntax, e.g. "--post user_name THE_LOGIN --post user-pwd THE_PWD
        --post Submit doLogin". See the wkhtmltopdf documentation for --post.

        The PDF of the page reached after login is only used to check that the
        run worked; it is not returned and not deleted.

        Returns:
            Cookie jar artifact, to pass as ``cookie_jar`` to to_pdf()

        Raises:
            ValidationFailedError: The login run produced no valid PDF
        """
        if not url:
            raise ValueError("url must be a non-empty string")

        cookie_jar = self.store.create_with_extension(COOKIE_JAR_EXTENSION)
        ignore_pdf = self.store.create_with_extension(PDF_EXTENSION)

        line = build_login_command_line(
            url,
            login_info,
            str(cookie_jar.path),
            str(ignore_pdf.path),
            executable=self.settings.executable,
        )

        _log_info(f"Logging in at {url}")
        self._run(line, ignore_pdf)
        _log_debug(f"  Cookie jar: {cookie_jar.path}")

        return cookie_jar

    def convert(self, request: ConversionRequest) -> Artifact:
        """Run a ConversionRequest: login() for login requests, to_pdf() otherwise."""
        if request.is_login:
            return self.login(request.url, request.login_info)
        return self.to_pdf(request.url, request.file_name, request.cookie_jar)

    def _run(self, command_line: str, result_pdf: Artifact) -> Artifact:
        """
        Every renderer call goes through here. ``result_pdf`` must be the file
        the command writes to; it is returned only if it holds a valid PDF.
        """
        log_run_start(command_line, self._timeout)

        result = run_bounded(command_line, self._timeout)

        # Validated even after a timeout or launch failure: a usable file may exist
        try:
            accepted = accept_output(result, result_pdf, self._timeout)
        except ValidationFailedError:
            log_run_result(result, is_valid=False, verbose=self.verbose)
            raise

        log_run_result(result, is_valid=True, verbose=self.verbose)
        return accepted


def is_available(settings: Optional[CaptureSettings] = None) -> bool:
    """Whether wkhtmltopdf is declared and installed on this host."""
    settings = settings if settings is not None else get_default_settings()
    return settings.registry.get_availability(settings.command_name).is_available
