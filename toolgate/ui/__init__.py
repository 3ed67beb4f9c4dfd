"""User interface components for TOOLGATE.

This package contains:
- report: Rich table and guidance output for check results
"""

from toolgate.ui.report import print_guidance, render_report, summarize

__all__ = [
    "print_guidance",
    "render_report",
    "summarize",
]
