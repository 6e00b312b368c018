# File: site_mirror/report/__init__.py
"""site_mirror.report: run reports written by the CLI."""

from .json_report import render_json

__all__ = ["render_json"]
