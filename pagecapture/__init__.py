"""
Full-page screenshot capture.

Primary interface:
    from pagecapture import build_options, run_capture

    options = build_options({'input': 'site/', 'output': 'shots/'})
    batch = run_capture(options)

    # Returns BatchResult with one TargetResult per page:
    # - target, output_path
    # - followed_iframe (URL navigated into, if any)
    # - error (keep-going mode only)
"""

from .capture import capture_single_page, capture_targets, run_capture
from .capture_config import (
    DEFAULTS,
    BatchResult,
    CaptureOptions,
    IframeMode,
    OutputPlan,
    TargetResult,
)
from .config import build_options, load_config, resolve_options
from .errors import (
    AmbiguousOutputForBatch,
    CaptureError,
    ConfigNotFound,
    ConfigParseError,
    IframeNotFound,
    InputNotFound,
    NoHtmlInDirectory,
    NotHtmlFile,
    OutputFileConflictsWithBatch,
)
from .output import build_output_file_path, resolve_output_path
from .targets import collect_html_targets


__all__ = [
    'run_capture',
    'capture_single_page',
    'capture_targets',
    'build_options',
    'load_config',
    'resolve_options',
    'collect_html_targets',
    'resolve_output_path',
    'build_output_file_path',
    'DEFAULTS',
    'BatchResult',
    'CaptureOptions',
    'IframeMode',
    'OutputPlan',
    'TargetResult',
    'CaptureError',
    'ConfigNotFound',
    'ConfigParseError',
    'InputNotFound',
    'NoHtmlInDirectory',
    'NotHtmlFile',
    'AmbiguousOutputForBatch',
    'OutputFileConflictsWithBatch',
    'IframeNotFound',
]
