"""Runtime package.

Keep this module dependency-light: importing `relay.runtime.*` in unit tests
should not launch a browser.
"""

__all__: list[str] = []
