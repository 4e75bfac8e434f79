"""Browser projects the suite can run against (desktop, mobile, tablet)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..errors import ValidationError

DESKTOP_VIEWPORT = {"width": 1920, "height": 1080}


@dataclass(frozen=True)
class BrowserProject:
    """One named browser/device combination."""

    name: str
    browser_name: str
    device: str | None = None
    viewport: dict[str, int] | None = None


PROJECTS: dict[str, BrowserProject] = {
    "chromium": BrowserProject("chromium", "chromium", "Desktop Chrome", DESKTOP_VIEWPORT),
    "firefox": BrowserProject("firefox", "firefox", "Desktop Firefox", DESKTOP_VIEWPORT),
    "webkit": BrowserProject("webkit", "webkit", "Desktop Safari", DESKTOP_VIEWPORT),
    "mobile-chrome": BrowserProject("mobile-chrome", "chromium", "Pixel 5"),
    "mobile-safari": BrowserProject("mobile-safari", "webkit", "iPhone 12"),
    "tablet": BrowserProject("tablet", "webkit", "iPad Pro 11"),
}

DEFAULT_PROJECT = "chromium"


def resolve_project(name: str) -> BrowserProject:
    try:
        return PROJECTS[name]
    except KeyError:
        raise ValidationError(
            f"Unknown browser project {name!r}. Valid projects: {', '.join(PROJECTS)}"
        ) from None


def context_options(project: BrowserProject, devices: dict[str, dict[str, Any]]) -> dict[str, Any]:
    """Build ``browser.new_context`` kwargs for *project*.

    *devices* is ``playwright.devices``; its descriptors carry a
    ``default_browser_type`` key that ``new_context`` does not accept.
    """
    options: dict[str, Any] = {}
    if project.device:
        descriptor = dict(devices[project.device])
        descriptor.pop("default_browser_type", None)
        options.update(descriptor)
    if project.viewport:
        options["viewport"] = dict(project.viewport)
    return options
