"""
Capture configuration.

Defines the option record for a run, the resolved output plan, and the
transient records produced while capturing.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Literal


DEFAULT_CONFIG_FILE = 'screenshot.config.toml'
DEFAULT_OUTPUT_DIR = 'screenshots'

# Top-left tolerance (CSS px) for treating an iframe as filling the viewport
VIEWPORT_CORNER_TOLERANCE = 5


class IframeMode(Enum):
    """How to treat iframes matching the iframe selector."""
    FOLLOW = 'true'   # forced: navigate into the iframe or fail
    SKIP = 'false'    # never follow
    AUTO = 'auto'     # heuristic selection, never fails


DEFAULTS = MappingProxyType({
    'input': '.',
    'output': DEFAULT_OUTPUT_DIR,
    'viewport_width': 1440,
    'viewport_height': 900,
    'wait_after_load': 1500,
    'navigation_timeout': 60000,
    'follow_iframe': IframeMode.AUTO,
    'iframe_selector': 'iframe',
    'iframe_index': 0,
    'hide_selectors': (),
    'remove_selectors': (),
    'no_sandbox': False,
    'device_scale_factor': 2,
    'headless': True,
    'keep_going': False,
    'progress': False,
})


@dataclass(frozen=True)
class CaptureOptions:
    """Fully resolved options for one run."""

    # Input / output hints
    input: str = DEFAULTS['input']
    output: str = DEFAULTS['output']

    # Viewport
    viewport_width: int = DEFAULTS['viewport_width']
    viewport_height: int = DEFAULTS['viewport_height']
    device_scale_factor: int = DEFAULTS['device_scale_factor']

    # Timing (ms)
    wait_after_load: int = DEFAULTS['wait_after_load']
    navigation_timeout: int = DEFAULTS['navigation_timeout']

    # Iframe following
    follow_iframe: IframeMode = DEFAULTS['follow_iframe']
    iframe_selector: str = DEFAULTS['iframe_selector']
    iframe_index: int = DEFAULTS['iframe_index']

    # DOM mutation before capture
    hide_selectors: tuple[str, ...] = ()
    remove_selectors: tuple[str, ...] = ()

    # Browser launch
    no_sandbox: bool = DEFAULTS['no_sandbox']
    headless: bool = DEFAULTS['headless']

    # Batch behaviour
    keep_going: bool = DEFAULTS['keep_going']
    progress: bool = DEFAULTS['progress']


@dataclass(frozen=True)
class OutputPlan:
    """Where screenshots go: a single file, or a directory of per-target files."""
    mode: Literal['file', 'directory']
    path: Path

    @property
    def is_dir(self) -> bool:
        return self.mode == 'directory'


@dataclass
class FrameInfo:
    """Geometry and src of one element matching the iframe selector."""
    src: str = ''
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0

    @property
    def covers_viewport(self) -> bool:
        return (
            self.width > 0
            and self.height > 0
            and self.y <= VIEWPORT_CORNER_TOLERANCE
            and self.x <= VIEWPORT_CORNER_TOLERANCE
        )


@dataclass
class IframeProbe:
    """Result of inspecting a loaded page for iframe candidates."""
    total: int
    frames: list[FrameInfo] = field(default_factory=list)


@dataclass
class TargetResult:
    """Outcome of capturing one target."""
    target: str
    output_path: Path
    error: str | None = None
    followed_iframe: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchResult:
    """Outcome of a whole run."""
    results: list[TargetResult] = field(default_factory=list)

    @property
    def succeeded(self) -> list[TargetResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> list[TargetResult]:
        return [r for r in self.results if not r.ok]
