"""Tests for export and console rendering."""

import json
from pathlib import Path

import pytest

from chinukh.export import (
    export_mitzvah,
    format_as_markdown,
    format_as_text,
    render_mitzvah,
    render_stats,
)
from chinukh.models import CollectionStats, Mitzvah
from tests.factories import make_payload


@pytest.fixture
def mitzvah() -> Mitzvah:
    return Mitzvah.model_validate(
        make_payload(
            24,
            indexTitle="Remember the Sabbath",
            categories=["Halakhah", "Shabbat"],
            text=["Sanctify the day.", "With words."],
            he=["לקדש את היום.", "בדברים."],
        )
    )


class TestFormatters:
    def test_text(self, mitzvah: Mitzvah) -> None:
        content = format_as_text(mitzvah)
        assert content.startswith("MITZVAH 24\n" + "=" * 50)
        assert "Title: Remember the Sabbath" in content
        assert "Hebrew Title: ספר החינוך" in content
        assert "Categories: Halakhah, Shabbat" in content
        assert "English Text:\nSanctify the day.\nWith words." in content
        assert "Hebrew Text:\nלקדש את היום.\nבדברים." in content

    def test_markdown(self, mitzvah: Mitzvah) -> None:
        content = format_as_markdown(mitzvah)
        assert content.startswith("# Mitzvah 24\n\n**Title:** Remember the Sabbath")
        assert "## English Text\n\nSanctify the day.\n\nWith words." in content
        assert "## Hebrew Text\n\nלקדש את היום.\n\nבדברים." in content

    def test_missing_sections_omitted(self) -> None:
        bare = Mitzvah(number=3)
        assert "English Text" not in format_as_text(bare)
        assert "Categories" not in format_as_markdown(bare)


class TestExportMitzvah:
    @pytest.mark.parametrize("fmt", ["json", "txt", "md", "MD"])
    def test_supported_formats(self, mitzvah: Mitzvah, tmp_path: Path, fmt: str) -> None:
        path = export_mitzvah(mitzvah, fmt, tmp_path / "exports")

        assert path is not None
        assert path.name == f"mitzvah_24_export.{fmt.lower()}"
        assert path.exists()

    def test_json_content(self, mitzvah: Mitzvah, tmp_path: Path) -> None:
        path = export_mitzvah(mitzvah, "json", tmp_path)
        assert path is not None
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["mitzvahNumber"] == 24
        assert data["he"] == ["לקדש את היום.", "בדברים."]

    def test_unsupported_format_writes_nothing(self, mitzvah: Mitzvah, tmp_path: Path) -> None:
        assert export_mitzvah(mitzvah, "pdf", tmp_path) is None
        assert list(tmp_path.iterdir()) == []


class TestRendering:
    def test_render_mitzvah_hides_hebrew(self, mitzvah: Mitzvah) -> None:
        output = render_mitzvah(mitzvah, show_hebrew=False)
        assert "MITZVAH 24" in output
        assert "Sanctify the day." in output
        assert "לקדש" not in output
        assert "ספר החינוך" not in output

    def test_render_stats(self) -> None:
        stats = CollectionStats(total=613, with_english=600, with_hebrew=613, categories=["A", "B"], average_text_length=1234)
        output = render_stats(stats)
        assert "Total Mitzvot: 613" in output
        assert "Average Text Length: 1234 characters" in output
        assert "Categories: 2" in output
