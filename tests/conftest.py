"""Shared fixtures for the Sefer HaChinukh tests."""

from pathlib import Path

import pytest

from chinukh.models import Mitzvah, MitzvahCollection
from chinukh.storage import MitzvahStore
from tests.factories import make_payload


@pytest.fixture
def store(tmp_path: Path) -> MitzvahStore:
    return MitzvahStore(tmp_path / "data")


@pytest.fixture
def sample_collection() -> MitzvahCollection:
    return MitzvahCollection(
        [
            Mitzvah.model_validate(
                make_payload(
                    1,
                    indexTitle="Be Fruitful and Multiply",
                    categories=["Halakhah", "Positive Commandments", "Family"],
                    text=["It is a mitzvah to be fruitful and multiply.", "This applies to every man."],
                    he=["מצות פריה ורביה.", "וזה נוהג בכל מקום."],
                )
            ),
            Mitzvah.model_validate(
                make_payload(
                    24,
                    indexTitle="Remember the Sabbath",
                    categories=["Halakhah", "Positive Commandments", "Shabbat"],
                    text="To sanctify the Shabbat day with words, as it says remember the Sabbath day.",
                    he="לקדש את יום השבת בדברים.",
                )
            ),
            Mitzvah.model_validate(
                make_payload(
                    32,
                    indexTitle=None,
                    title=None,
                    heTitle="שלא לעשות מלאכה בשבת",
                    categories=["Negative Commandments", "Shabbat"],
                    text=[],
                    he=["שלא לעשות מלאכה ביום השבת."],
                )
            ),
        ]
    )
