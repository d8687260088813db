"""
Iframe following.

Some HTML exports wrap the real page in a full-viewport iframe. Before
capturing, the navigator can re-point the page at the iframe's src so the
screenshot shows the framed document at full height.

Modes:
- SKIP: do nothing
- FOLLOW: the iframe at iframe_index must exist and carry a src
- AUTO: pick the iframe that fills the viewport (or the first one); never fails
"""

from typing import TYPE_CHECKING
from urllib.parse import urljoin

if TYPE_CHECKING:
    from playwright.sync_api import Page

from .capture_config import FrameInfo, IframeMode, IframeProbe
from .errors import IframeNotFound
from .navigation import navigate


PROBE_IFRAMES_JS = """
(selector) => Array.from(document.querySelectorAll(selector)).map((node) => {
  const rect = node.getBoundingClientRect();
  return {
    src: node.getAttribute('src') || '',
    x: rect.left,
    y: rect.top,
    width: rect.width,
    height: rect.height,
  };
})
"""


def probe_iframes(page: "Page", selector: str) -> IframeProbe:
    """Inspect all elements matching selector on the current page."""
    raw = page.evaluate(PROBE_IFRAMES_JS, selector) or []
    frames = [
        FrameInfo(
            src=item.get('src') or '',
            x=item.get('x') or 0,
            y=item.get('y') or 0,
            width=item.get('width') or 0,
            height=item.get('height') or 0,
        )
        for item in raw
    ]
    return IframeProbe(total=len(frames), frames=frames)


def choose_iframe_index(probe: IframeProbe, mode: IframeMode, iframe_index: int) -> int:
    """
    Pick which matching element to follow.

    In AUTO mode a single match wins outright; with several, the first one
    covering the viewport's top-left corner wins, falling back to index 0.
    FOLLOW always uses iframe_index.
    """
    if mode is not IframeMode.AUTO:
        return iframe_index
    if probe.total <= 1:
        return 0
    for i, frame in enumerate(probe.frames):
        if frame.covers_viewport:
            return i
    return 0


def maybe_follow_iframe(
    page: "Page",
    mode: IframeMode,
    iframe_selector: str,
    iframe_index: int,
    timeout_ms: int,
) -> str | None:
    """
    Navigate into the selected iframe if the mode asks for it.

    Returns:
        The URL navigated to, or None if the page was left alone

    Raises:
        IframeNotFound: FOLLOW mode only, when no usable iframe is found
    """
    if mode is IframeMode.SKIP:
        return None

    probe = probe_iframes(page, iframe_selector)
    if probe.total == 0:
        if mode is IframeMode.FOLLOW:
            raise IframeNotFound(iframe_selector, iframe_index)
        return None

    index = choose_iframe_index(probe, mode, iframe_index)
    src = probe.frames[index].src if 0 <= index < probe.total else ''
    if not src:
        if mode is IframeMode.FOLLOW:
            reason = 'iframe has no src' if index < probe.total else 'no matching iframe'
            raise IframeNotFound(iframe_selector, index, reason=reason)
        return None

    frame_url = urljoin(page.url, src)
    navigate(page, frame_url, timeout_ms)
    return frame_url
