"""
Command line construction for wkhtmltopdf.

Values are inserted as-is. Quoting comes from the template, and the resulting
string is split with shell-word rules by the executor, so a URL or login
string containing quotes changes how the line is split. Callers are
responsible for passing well-formed input.
"""

from typing import Optional

# Must match the placeholders used in command_lines.yaml
URL_PLACEHOLDER = "#{url}"
TARGET_FILE_PATH_PLACEHOLDER = "#{targetFilePath}"

DEFAULT_EXECUTABLE = "wkhtmltopdf"


def substitute_parameters(template: str, url: str, target_file_path: str) -> str:
    """Replace every URL and target-file placeholder in ``template``."""
    params = template.replace(URL_PLACEHOLDER, url)
    return params.replace(TARGET_FILE_PATH_PLACEHOLDER, str(target_file_path))


def build_command_line(
    template: str,
    url: str,
    target_file_path: str,
    cookie_jar_path: Optional[str] = None,
    executable: str = DEFAULT_EXECUTABLE,
) -> str:
    """
    Build the conversion command line.

    Args:
        template: Parameter template containing #{url} and #{targetFilePath}
        url: Page to capture
        target_file_path: Where the renderer writes the PDF
        cookie_jar_path: Cookie jar from a previous login, if any
        executable: Renderer executable

    Returns:
        Full command line, e.g. 'wkhtmltopdf --cookie-jar "/tmp/jar" "http://..." "/tmp/out.pdf"'
    """
    params = template
    if cookie_jar_path is not None:
        params = f'--cookie-jar "{cookie_jar_path}" {params}'

    params = substitute_parameters(params, url, target_file_path)
    return f"{executable} {params}"


def build_login_command_line(
    url: str,
    login_info: str,
    cookie_jar_path: str,
    target_file_path: str,
    executable: str = DEFAULT_EXECUTABLE,
) -> str:
    """
    Build the login command line.

    ``login_info`` holds the form fields to post, in wkhtmltopdf syntax, and
    is passed through untouched. For a form with fields "user-name",
    "user-pwd" and a submit button "Submit" valued "doLogin":

        --post user-name THE_LOGIN --post user-pwd THE_PWD --post Submit doLogin

    The PDF written to ``target_file_path`` is only a by-product; the cookie
    jar is what the caller keeps.
    """
    line = f'{executable} -q --cookie-jar "{cookie_jar_path}"'
    line += f" {login_info}"
    line += f' "{url}"'
    line += f' "{target_file_path}"'
    return line
