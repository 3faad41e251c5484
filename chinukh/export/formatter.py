"""Rendering mitzvot as text, Markdown and JSON, for the console and for export."""

import json
import logging
from pathlib import Path

from chinukh.models import CollectionStats, Mitzvah

logger = logging.getLogger(__name__)

EXPORT_FORMATS: tuple[str, ...] = ("json", "txt", "md")


def format_as_json(mitzvah: Mitzvah) -> str:
    return json.dumps(mitzvah.to_payload(), indent=2, ensure_ascii=False)


def format_as_text(mitzvah: Mitzvah) -> str:
    lines = [f"MITZVAH {mitzvah.number}", "=" * 50, ""]

    if mitzvah.index_title:
        lines.append(f"Title: {mitzvah.index_title}")
    if mitzvah.he_title:
        lines.append(f"Hebrew Title: {mitzvah.he_title}")
    if mitzvah.categories:
        lines.append(f"Categories: {', '.join(mitzvah.categories)}")

    lines.extend(["", "-" * 50, ""])

    if mitzvah.has_english:
        lines.extend(["English Text:", mitzvah.english_joined("\n"), ""])
    if mitzvah.has_hebrew:
        lines.extend(["Hebrew Text:", mitzvah.hebrew_joined("\n"), ""])

    return "\n".join(lines) + "\n"


def format_as_markdown(mitzvah: Mitzvah) -> str:
    parts = [f"# Mitzvah {mitzvah.number}"]

    if mitzvah.index_title:
        parts.append(f"**Title:** {mitzvah.index_title}")
    if mitzvah.he_title:
        parts.append(f"**Hebrew Title:** {mitzvah.he_title}")
    if mitzvah.categories:
        parts.append(f"**Categories:** {', '.join(mitzvah.categories)}")

    parts.append("---")

    if mitzvah.has_english:
        parts.extend(["## English Text", mitzvah.english_joined("\n\n")])
    if mitzvah.has_hebrew:
        parts.extend(["## Hebrew Text", mitzvah.hebrew_joined("\n\n")])

    return "\n\n".join(parts) + "\n"


FORMATTERS = {
    "json": format_as_json,
    "txt": format_as_text,
    "md": format_as_markdown,
}


def export_mitzvah(mitzvah: Mitzvah, fmt: str = "json", dest_dir: str | Path = ".") -> Path | None:
    """Write a mitzvah to ``mitzvah_<n>_export.<fmt>`` in ``dest_dir``.

    Args:
        mitzvah: The mitzvah to export.
        fmt: One of ``json``, ``txt`` or ``md`` (case-insensitive).
        dest_dir: Directory to write into; created if missing.

    Returns:
        Path of the written file, or None if the format is unsupported
        or the file could not be written.
    """
    fmt = fmt.lower()
    formatter = FORMATTERS.get(fmt)
    if formatter is None:
        logger.error("Unsupported format: %r. Use: %s", fmt, ", ".join(EXPORT_FORMATS))
        return None

    path = Path(dest_dir) / f"mitzvah_{mitzvah.number}_export.{fmt}"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(formatter(mitzvah), encoding="utf-8")
    except OSError as e:
        logger.error("Error exporting mitzvah %d: %s", mitzvah.number, e)
        return None

    logger.info("Exported mitzvah %d as %s", mitzvah.number, path)
    return path


def render_mitzvah(mitzvah: Mitzvah, show_hebrew: bool = True, show_english: bool = True) -> str:
    """Format a mitzvah for the terminal."""
    rule = "=" * 60
    lines = ["", rule, f"MITZVAH {mitzvah.number}", rule]

    if mitzvah.index_title or mitzvah.title:
        lines.append(f"Title: {mitzvah.index_title or mitzvah.title}")
    if show_hebrew and mitzvah.he_title:
        lines.append(f"Hebrew Title: {mitzvah.he_title}")
    if mitzvah.categories:
        lines.append(f"Categories: {', '.join(mitzvah.categories)}")

    lines.append("-" * 60)

    if show_english and mitzvah.has_english:
        lines.extend(["English Text:", mitzvah.english_joined("\n"), ""])
    if show_hebrew and mitzvah.has_hebrew:
        lines.extend(["Hebrew Text:", mitzvah.hebrew_joined("\n"), ""])

    lines.append(rule)
    return "\n".join(lines)


def render_stats(stats: CollectionStats) -> str:
    rule = "=" * 40
    return "\n".join(
        [
            "SEFER HACHINUKH STATISTICS",
            rule,
            f"Total Mitzvot: {stats.total}",
            f"With English: {stats.with_english}",
            f"With Hebrew: {stats.with_hebrew}",
            f"Average Text Length: {stats.average_text_length} characters",
            f"Categories: {len(stats.categories)}",
            rule,
        ]
    )
