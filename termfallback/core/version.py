"""Installed distribution version.

The version lives in ``pyproject.toml`` and reaches the runtime through
the installed package metadata, so it is correct for editable and
regular installs alike.
"""

from __future__ import annotations

import functools
from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION_NAME = "termfallback"


@functools.cache
def get_version() -> str:
    """Return the installed ``termfallback`` version.

    Raises:
        RuntimeError: If the distribution is not installed (e.g. the
            source tree is only on ``sys.path``).
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError as exc:
        raise RuntimeError(f"{DISTRIBUTION_NAME} is not installed; no version metadata") from exc
