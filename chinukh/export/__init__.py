"""Export and console rendering of mitzvot."""

from chinukh.export.formatter import (
    EXPORT_FORMATS,
    export_mitzvah,
    format_as_json,
    format_as_markdown,
    format_as_text,
    render_mitzvah,
    render_stats,
)

__all__ = [
    "EXPORT_FORMATS",
    "export_mitzvah",
    "format_as_json",
    "format_as_markdown",
    "format_as_text",
    "render_mitzvah",
    "render_stats",
]
