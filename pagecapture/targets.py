"""
Target collection: turn an input hint into the ordered list of pages to capture.
"""

import os
import re
from pathlib import Path

from .errors import InputNotFound, NoHtmlInDirectory, NotHtmlFile


HTTP_URL_RE = re.compile(r'^https?://', re.I)
HTML_EXT_RE = re.compile(r'\.(x?html?)$', re.I)


def is_http_url(value: str) -> bool:
    return bool(HTTP_URL_RE.match(value))


def is_html_file(name: str) -> bool:
    """True for .htm, .html, .xhtml (any case)."""
    return bool(HTML_EXT_RE.search(name))


def resolve_input_hint(value: str) -> str:
    """URLs pass through; local paths become absolute."""
    if is_http_url(value):
        return value
    return str(Path(value).resolve())


def collect_html_targets(input_hint: str) -> list[str]:
    """
    Resolve an input hint into capture targets.

    - HTTP(S) URL: returned as-is, no filesystem check
    - Directory: direct HTML children in directory entry order
    - File: must carry an HTML extension

    Raises:
        InputNotFound, NoHtmlInDirectory, NotHtmlFile
    """
    if is_http_url(input_hint):
        return [input_hint]

    path = Path(input_hint)
    if not path.exists():
        raise InputNotFound(input_hint)

    if path.is_dir():
        with os.scandir(path) as entries:
            html_files = [
                str(path / entry.name)
                for entry in entries
                if entry.is_file() and is_html_file(entry.name)
            ]
        if not html_files:
            raise NoHtmlInDirectory(input_hint)
        return html_files

    if not is_html_file(path.name):
        raise NotHtmlFile(input_hint)
    return [input_hint]
