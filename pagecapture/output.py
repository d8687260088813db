"""
Output path resolution.

Decides whether screenshots go to one file or into a directory, and names
the per-target files in directory mode.
"""

from pathlib import Path, PurePosixPath
from urllib.parse import unquote, urlparse

from .capture_config import OutputPlan
from .errors import AmbiguousOutputForBatch, OutputFileConflictsWithBatch
from .targets import HTML_EXT_RE, is_http_url


def plan_output(output_hint: str, target_count: int) -> OutputPlan:
    """
    Decide the output mode without touching the filesystem beyond a stat.

    Existing directory -> directory mode. Existing file -> file mode for a
    single target. Missing path -> directory unless it has an extension and
    there is exactly one target.
    """
    resolved = Path(output_hint).resolve()
    has_ext = bool(resolved.suffix)

    if resolved.exists():
        if resolved.is_dir():
            return OutputPlan(mode='directory', path=resolved)
        if target_count > 1:
            raise OutputFileConflictsWithBatch(resolved, target_count)
        return OutputPlan(mode='file', path=resolved)

    if not has_ext:
        return OutputPlan(mode='directory', path=resolved)
    if target_count > 1:
        raise AmbiguousOutputForBatch(resolved, target_count)
    return OutputPlan(mode='file', path=resolved)


def resolve_output_path(output_hint: str, target_count: int) -> OutputPlan:
    """plan_output, then create the directory (or the file's parent)."""
    plan = plan_output(output_hint, target_count)
    if plan.is_dir:
        plan.path.mkdir(parents=True, exist_ok=True)
    else:
        plan.path.parent.mkdir(parents=True, exist_ok=True)
    return plan


def target_basename(target: str) -> str:
    if is_http_url(target):
        name = PurePosixPath(unquote(urlparse(target).path)).name
        return name or 'index'
    return Path(target).name


def screenshot_name(target: str) -> str:
    """page.html -> page.png; '.html' keeps its full name -> .html.png."""
    base = target_basename(target)
    stem = HTML_EXT_RE.sub('', base) or base
    return f"{stem}.png"


def build_output_file_path(plan: OutputPlan, target: str) -> Path:
    if not plan.is_dir:
        return plan.path
    return plan.path / screenshot_name(target)
