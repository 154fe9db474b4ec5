"""The fixed ``User-Agent`` sent with every runtime API request."""

from __future__ import annotations

import platform

from .version import __version__


def default_user_agent() -> str:
    return f"aws-lambda-python/{platform.python_version()}-lambda-runtime-client/{__version__}"


__all__ = ["default_user_agent"]
