"""
Tests for pagecapture/iframe.py - iframe selection and following.
"""

import pytest

from pagecapture.capture_config import FrameInfo, IframeMode, IframeProbe
from pagecapture.errors import IframeNotFound
from pagecapture.iframe import choose_iframe_index, maybe_follow_iframe, probe_iframes


PAGE = "file:///site/index.html"


def frame(src="", x=0, y=0, width=0, height=0):
    return {"src": src, "x": x, "y": y, "width": width, "height": height}


def loaded(make_page, frames, url=PAGE):
    page = make_page(frames={url: frames})
    page.url = url
    return page


def gotos(page):
    return [c[1] for c in page.calls if c[0] == "goto"]


class TestFrameInfo:

    def test_covers_viewport(self):
        assert FrameInfo(width=100, height=100, x=0, y=0).covers_viewport
        assert FrameInfo(width=100, height=100, x=5, y=5).covers_viewport

    def test_offset_or_empty_box(self):
        assert not FrameInfo(width=100, height=100, x=6, y=0).covers_viewport
        assert not FrameInfo(width=100, height=100, x=0, y=40).covers_viewport
        assert not FrameInfo(width=0, height=100).covers_viewport


class TestChooseIframeIndex:
    """Pure selection logic."""

    def test_auto_single_match(self):
        probe = IframeProbe(total=1, frames=[FrameInfo(src="a.html", x=300, y=300)])
        assert choose_iframe_index(probe, IframeMode.AUTO, 4) == 0

    def test_auto_prefers_viewport_filling_frame(self):
        probe = IframeProbe(total=3, frames=[
            FrameInfo(src="ad.html", x=500, y=20, width=300, height=250),
            FrameInfo(src="hidden.html", x=0, y=0, width=0, height=0),
            FrameInfo(src="main.html", x=0, y=0, width=1440, height=900),
        ])
        assert choose_iframe_index(probe, IframeMode.AUTO, 0) == 2

    def test_auto_falls_back_to_first(self):
        probe = IframeProbe(total=2, frames=[
            FrameInfo(src="a.html", x=50, y=50, width=10, height=10),
            FrameInfo(src="b.html", x=60, y=60, width=10, height=10),
        ])
        assert choose_iframe_index(probe, IframeMode.AUTO, 1) == 0

    def test_forced_uses_configured_index(self):
        probe = IframeProbe(total=2, frames=[FrameInfo(), FrameInfo()])
        assert choose_iframe_index(probe, IframeMode.FOLLOW, 1) == 1


class TestProbeIframes:

    def test_probe_reads_geometry(self, make_page):
        page = loaded(make_page, {"iframe": [frame("inner.html", 0, 0, 800, 600)]})
        probe = probe_iframes(page, "iframe")
        assert probe.total == 1
        assert probe.frames[0] == FrameInfo(src="inner.html", x=0, y=0, width=800, height=600)

    def test_probe_no_matches(self, make_page):
        page = loaded(make_page, {})
        assert probe_iframes(page, ".frame") == IframeProbe(total=0, frames=[])


class TestMaybeFollowIframe:
    """Mode handling against a fake page."""

    def test_skip_never_probes(self, make_page):
        page = loaded(make_page, {"iframe": [frame("inner.html", 0, 0, 10, 10)]})
        assert maybe_follow_iframe(page, IframeMode.SKIP, "iframe", 0, 1000) is None
        assert page.calls == []

    def test_auto_zero_matches_is_noop(self, make_page):
        page = loaded(make_page, {})
        assert maybe_follow_iframe(page, IframeMode.AUTO, "iframe", 0, 1000) is None
        assert gotos(page) == []
        assert page.url == PAGE

    def test_forced_zero_matches_raises(self, make_page):
        page = loaded(make_page, {})
        with pytest.raises(IframeNotFound) as excinfo:
            maybe_follow_iframe(page, IframeMode.FOLLOW, ".frame", 0, 1000)
        message = str(excinfo.value)
        assert ".frame" in message
        assert "index: 0" in message
        assert gotos(page) == []

    def test_forced_missing_src_raises(self, make_page):
        page = loaded(make_page, {"iframe": [frame("a.html"), frame("")]})
        with pytest.raises(IframeNotFound) as excinfo:
            maybe_follow_iframe(page, IframeMode.FOLLOW, "iframe", 1, 1000)
        assert "index: 1" in str(excinfo.value)

    def test_forced_index_out_of_range_raises(self, make_page):
        page = loaded(make_page, {"iframe": [frame("a.html")]})
        with pytest.raises(IframeNotFound) as excinfo:
            maybe_follow_iframe(page, IframeMode.FOLLOW, "iframe", 3, 1000)
        assert "index: 3" in str(excinfo.value)

    def test_forced_follows_relative_src(self, make_page):
        page = loaded(make_page, {"iframe": [frame("a.html"), frame("pages/b.html")]})
        followed = maybe_follow_iframe(page, IframeMode.FOLLOW, "iframe", 1, 2500)
        assert followed == "file:///site/pages/b.html"
        assert page.url == followed
        assert ("goto", followed, "load", 2500) in page.calls
        assert ("wait_for_load_state", "networkidle", 2500) in page.calls

    def test_auto_follows_viewport_frame(self, make_page):
        url = "https://example.com/wrapper/"
        page = loaded(make_page, {"iframe": [
            frame("/ads/1", 900, 40, 300, 250),
            frame("https://cdn.example.com/report", 0, 0, 1440, 900),
        ]}, url=url)
        followed = maybe_follow_iframe(page, IframeMode.AUTO, "iframe", 0, 1000)
        assert followed == "https://cdn.example.com/report"

    def test_auto_empty_src_is_noop(self, make_page):
        page = loaded(make_page, {"iframe": [frame("", 0, 0, 100, 100)]})
        assert maybe_follow_iframe(page, IframeMode.AUTO, "iframe", 0, 1000) is None
        assert gotos(page) == []
