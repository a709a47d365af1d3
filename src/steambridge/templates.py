"""Templated responses.

The only pages steambridge renders are the interstitial pages that send the
browser back to the native application.
"""

from __future__ import annotations

from fastapi.templating import Jinja2Templates
from jinja2 import Environment, PackageLoader

__all__ = ["templates"]

templates = Jinja2Templates(
    env=Environment(
        loader=PackageLoader("steambridge", package_path="templates"),
        autoescape=True,
    ),
)
"""The template manager."""
