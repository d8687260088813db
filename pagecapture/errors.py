"""
Error taxonomy for page capture.

Validation errors (config, input, output) are raised before the browser is
launched. Navigation and screenshot failures come straight from Playwright and
are not wrapped.
"""


class CaptureError(Exception):
    """Base class for errors the CLI reports as a failed capture."""


class ConfigNotFound(CaptureError):
    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"Config file not found: {self.path}")


class ConfigParseError(CaptureError):
    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Could not parse config file {self.path}: {reason}")


class InputNotFound(CaptureError):
    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"Input path does not exist: {self.path}")


class NoHtmlInDirectory(CaptureError):
    def __init__(self, directory):
        self.directory = str(directory)
        super().__init__(f"No HTML files found in directory {self.directory}")


class NotHtmlFile(CaptureError):
    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"Input file is not HTML: {self.path}")


class AmbiguousOutputForBatch(CaptureError):
    def __init__(self, path, target_count: int):
        self.path = str(path)
        self.target_count = target_count
        super().__init__(
            f"--output {self.path} looks like a file but there are {target_count} "
            "HTML inputs; pass a directory instead"
        )


class OutputFileConflictsWithBatch(CaptureError):
    def __init__(self, path, target_count: int):
        self.path = str(path)
        self.target_count = target_count
        super().__init__(
            f"--output {self.path} is an existing file but there are {target_count} "
            "HTML inputs; pass a directory instead"
        )


class IframeNotFound(CaptureError):
    def __init__(self, selector: str, index: int, reason: str = "no matching iframe"):
        self.selector = selector
        self.index = index
        super().__init__(f"{reason} (selector: {selector}, index: {index})")
