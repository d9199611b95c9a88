"""Browser runtime configuration (env names, probe paths, launch flags)."""

from __future__ import annotations

ENV_BROWSER_EXECUTABLE_PATH = "BROWSER_EXECUTABLE_PATH"

# Probed in order when no override is set; first existing path wins.
BROWSER_CANDIDATE_PATHS: dict[str, tuple[str, ...]] = {
    "linux": (
        "/usr/bin/chromium",
        "/usr/bin/chromium-browser",
        "/usr/bin/google-chrome",
    ),
    "darwin": (
        "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome",
        "/Applications/Chromium.app/Contents/MacOS/Chromium",
    ),
    "win32": ("C:\\Program Files\\Google\\Chrome\\Application\\chrome.exe",),
}

# Always headless: the target hosts have no display server.
BROWSER_HEADLESS = True

# Chromium refuses to start in unprivileged containers without these.
# Not configurable via env to prevent misconfiguration.
BROWSER_LAUNCH_ARGS: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--no-zygote",
    "--single-process",
    "--disable-gpu",
    "--disable-software-rasterizer",
    "--disable-extensions",
    "--disable-background-networking",
    "--disable-background-timer-throttling",
    "--disable-backgrounding-occluded-windows",
    "--disable-breakpad",
    "--disable-component-extensions-with-background-pages",
    "--disable-features=TranslateUI",
    "--disable-ipc-flooding-protection",
    "--disable-renderer-backgrounding",
    "--disable-sync",
    "--force-color-profile=srgb",
    "--metrics-recording-only",
    "--mute-audio",
    "--hide-scrollbars",
    "--disable-default-apps",
    "--disable-crash-reporter",
    "--disable-crashpad",
)


def candidate_paths_for(platform: str) -> tuple[str, ...]:
    """Well-known install locations for *platform* (a ``sys.platform`` value)."""
    if platform.startswith("linux"):
        return BROWSER_CANDIDATE_PATHS["linux"]
    if platform == "darwin":
        return BROWSER_CANDIDATE_PATHS["darwin"]
    if platform in {"win32", "cygwin"}:
        return BROWSER_CANDIDATE_PATHS["win32"]
    return ()


__all__ = [
    "BROWSER_CANDIDATE_PATHS",
    "BROWSER_HEADLESS",
    "BROWSER_LAUNCH_ARGS",
    "ENV_BROWSER_EXECUTABLE_PATH",
    "candidate_paths_for",
]
