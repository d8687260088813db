"""
Page capture.

For each target:
- Navigate and wait for load + network idle
- Optionally follow into an iframe
- Remove and hide selected DOM nodes
- Wait, then save a full-page PNG

One browser is shared by the whole batch; every target gets its own
context so DOM changes never leak between pages.
"""

import time
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Iterable

from playwright.sync_api import sync_playwright
from tqdm import tqdm

if TYPE_CHECKING:
    from playwright.sync_api import Browser, Page, Playwright

from .capture_config import BatchResult, CaptureOptions, OutputPlan, TargetResult
from .iframe import maybe_follow_iframe
from .navigation import navigate, to_navigable_url
from .output import build_output_file_path, resolve_output_path
from .targets import collect_html_targets, resolve_input_hint


SANDBOX_ARGS = ['--no-sandbox', '--disable-setuid-sandbox']

REMOVE_NODES_JS = """
(selectors) => {
  for (const selector of selectors) {
    document.querySelectorAll(selector).forEach((node) => node.remove());
  }
}
"""


def build_hide_css(selectors: Iterable[str]) -> str:
    """CSS forcing every selector match out of the rendered page."""
    return '\n'.join(
        f"{selector} {{ display: none !important; visibility: hidden !important; }}"
        for selector in selectors
    )


def remove_nodes(page: "Page", selectors: Iterable[str]) -> None:
    selectors = list(selectors)
    if selectors:
        page.evaluate(REMOVE_NODES_JS, selectors)


def hide_nodes(page: "Page", selectors: Iterable[str]) -> None:
    css = build_hide_css(selectors)
    if css:
        page.add_style_tag(content=css)


def take_screenshot(page: "Page", output_path: Path) -> Path:
    page.screenshot(path=str(output_path), full_page=True)
    return output_path


def launch_browser(playwright: "Playwright", options: CaptureOptions) -> "Browser":
    launch_args = {'headless': options.headless}
    if options.no_sandbox:
        launch_args['args'] = list(SANDBOX_ARGS)
    return playwright.chromium.launch(**launch_args)


def capture_single_page(
    browser: "Browser",
    target: str,
    output_path: Path,
    options: CaptureOptions,
) -> TargetResult:
    """
    Capture one target into output_path.

    Errors propagate; the context is closed either way.
    """
    context = browser.new_context(
        viewport={'width': options.viewport_width, 'height': options.viewport_height},
        device_scale_factor=options.device_scale_factor,
    )
    try:
        page = context.new_page()
        page.set_default_navigation_timeout(options.navigation_timeout)

        navigate(page, to_navigable_url(target), options.navigation_timeout)
        followed = maybe_follow_iframe(
            page,
            options.follow_iframe,
            options.iframe_selector,
            options.iframe_index,
            options.navigation_timeout,
        )

        remove_nodes(page, options.remove_selectors)
        hide_nodes(page, options.hide_selectors)

        if options.wait_after_load > 0:
            time.sleep(options.wait_after_load / 1000)

        take_screenshot(page, output_path)
        return TargetResult(target=target, output_path=output_path, followed_iframe=followed)
    finally:
        context.close()


def capture_targets(
    browser: "Browser",
    targets: Iterable[str],
    plan: OutputPlan,
    options: CaptureOptions,
    report: Callable[[str], None] = print,
    report_error: Callable[[str], None] | None = None,
) -> BatchResult:
    """
    Capture targets one after another.

    By default the first failure aborts the batch. With options.keep_going,
    failures are recorded and the loop moves on.
    """
    batch = BatchResult()
    for target in targets:
        output_path = build_output_file_path(plan, target)
        try:
            result = capture_single_page(browser, target, output_path, options)
        except Exception as exc:
            if not options.keep_going:
                raise
            batch.results.append(TargetResult(target=target, output_path=output_path, error=str(exc)))
            if report_error:
                report_error(f"Failed to capture {target}: {exc}")
            continue
        batch.results.append(result)
        report(f"Screenshot saved to {output_path}")
    return batch


def run_capture(
    options: CaptureOptions,
    report: Callable[[str], None] = print,
    report_error: Callable[[str], None] | None = None,
    playwright_factory: Callable = sync_playwright,
) -> BatchResult:
    """
    Run a full capture: validate inputs and outputs, then capture every target.

    Targets and the output plan are resolved before the browser starts, so
    validation errors never leave a browser behind.
    """
    targets = collect_html_targets(resolve_input_hint(options.input))
    plan = resolve_output_path(options.output, len(targets))

    with playwright_factory() as p:
        browser = launch_browser(p, options)
        try:
            if options.progress and len(targets) > 1:
                with tqdm(targets, desc="Pages", unit="page") as pbar:
                    return capture_targets(
                        browser, pbar, plan, options,
                        report=tqdm.write,
                        report_error=report_error,
                    )
            return capture_targets(
                browser, targets, plan, options,
                report=report,
                report_error=report_error,
            )
        finally:
            browser.close()
