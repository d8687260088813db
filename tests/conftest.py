"""
Shared fakes standing in for Playwright's sync API objects.
"""

import sys
from pathlib import Path

# Ensure project root on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from pagecapture.iframe import PROBE_IFRAMES_JS


class FakePage:
    """Records every call; serves iframe probes from a {url: {selector: frames}} table."""

    def __init__(self, frames=None, fail_on=None):
        self.url = 'about:blank'
        self.frames = frames or {}
        self.fail_on = fail_on or set()
        self.calls = []

    def set_default_navigation_timeout(self, timeout):
        self.calls.append(('set_timeout', timeout))

    def goto(self, url, wait_until=None, timeout=None):
        self.calls.append(('goto', url, wait_until, timeout))
        if url in self.fail_on:
            raise RuntimeError(f"net::ERR_FAILED at {url}")
        self.url = url

    def wait_for_load_state(self, state, timeout=None):
        self.calls.append(('wait_for_load_state', state, timeout))

    def evaluate(self, script, arg=None):
        if script == PROBE_IFRAMES_JS:
            self.calls.append(('probe', arg))
            return [dict(f) for f in self.frames.get(self.url, {}).get(arg, [])]
        self.calls.append(('evaluate', arg))
        return None

    def add_style_tag(self, content=None):
        self.calls.append(('add_style_tag', content))

    def screenshot(self, path=None, full_page=False):
        self.calls.append(('screenshot', path, full_page))
        Path(path).write_bytes(b'\x89PNG\r\n\x1a\n')

    def call_names(self):
        return [c[0] for c in self.calls]


class FakeContext:
    def __init__(self, browser, **kwargs):
        self.browser = browser
        self.kwargs = kwargs
        self.closed = False
        self.pages = []

    def new_page(self):
        page = self.browser.page_factory()
        self.pages.append(page)
        return page

    def close(self):
        self.closed = True


class FakeBrowser:
    def __init__(self, page_factory=FakePage):
        self.page_factory = page_factory
        self.contexts = []
        self.closed = False

    def new_context(self, **kwargs):
        context = FakeContext(self, **kwargs)
        self.contexts.append(context)
        return context

    def close(self):
        self.closed = True

    @property
    def pages(self):
        return [p for c in self.contexts for p in c.pages]


class FakeChromium:
    def __init__(self, browser):
        self.browser = browser
        self.launch_kwargs = None

    def launch(self, **kwargs):
        self.launch_kwargs = kwargs
        return self.browser


class FakePlaywright:
    """Callable stand-in for sync_playwright()."""

    def __init__(self, browser):
        self.chromium = FakeChromium(browser)
        self.started = 0

    def __call__(self):
        self.started += 1
        return self

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def fake_browser():
    return FakeBrowser()


@pytest.fixture
def fake_playwright(fake_browser):
    return FakePlaywright(fake_browser)


@pytest.fixture
def make_page():
    def factory(frames=None, fail_on=None):
        return FakePage(frames=frames, fail_on=fail_on)
    return factory
