"""JSON file storage for downloaded mitzvot and derived artifacts."""

import json
import logging
from pathlib import Path
from typing import Any

import chardet
from pydantic import ValidationError

from chinukh.models import FailedDownload, IndexEntry, Mitzvah, MitzvahCollection

logger = logging.getLogger(__name__)

COLLECTION_FILENAME = "all_mitzvot.json"
INDEX_FILENAME = "mitzvot_index.json"
FAILURES_FILENAME = "failed_downloads.json"


def mitzvah_filename(number: int) -> str:
    """Return the per-mitzvah file name, e.g. ``mitzvah_007.json``."""
    return f"mitzvah_{number:03d}.json"


def write_json_atomic(data: Any, path: Path) -> None:
    """Write pretty-printed JSON through a temp file and rename it into place.

    Readers never see a half-written file: either the old content or the
    new content is present at ``path``.

    Args:
        data: JSON-serializable data.
        path: Destination file.

    Raises:
        OSError: If the file cannot be written or renamed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        tmp.replace(path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise


def read_json(path: Path) -> Any:
    """Read a JSON file, detecting the encoding when it is not UTF-8.

    Args:
        path: JSON file to read.

    Returns:
        The decoded JSON value.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the content is not valid JSON.
    """
    raw_bytes = path.read_bytes()
    try:
        text = raw_bytes.decode("utf-8-sig")
    except UnicodeDecodeError:
        detected = chardet.detect(raw_bytes)
        encoding = detected.get("encoding") or "utf-8"
        logger.warning(
            "%s is not UTF-8, decoding as %s (%.0f%%)",
            path,
            encoding,
            (detected.get("confidence") or 0) * 100,
        )
        try:
            text = raw_bytes.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            # Common legacy Hebrew encoding
            text = raw_bytes.decode("windows-1255", errors="replace")
    return json.loads(text)


class MitzvahStore:
    """Reads and writes the mitzvah data directory.

    Layout::

        mitzvah_001.json ... mitzvah_613.json   one file per mitzvah
        all_mitzvot.json                         full ordered collection
        mitzvot_index.json                       derived search index
        failed_downloads.json                    present only while a retry is pending

    Write methods raise ``OSError``; callers decide whether a failed write
    is fatal.

    Args:
        output_dir: Data directory.
    """

    def __init__(self, output_dir: str | Path) -> None:
        self.output_dir = Path(output_dir)

    @property
    def collection_path(self) -> Path:
        return self.output_dir / COLLECTION_FILENAME

    @property
    def index_path(self) -> Path:
        return self.output_dir / INDEX_FILENAME

    @property
    def failures_path(self) -> Path:
        return self.output_dir / FAILURES_FILENAME

    def mitzvah_path(self, number: int) -> Path:
        return self.output_dir / mitzvah_filename(number)

    def ensure_directory(self) -> None:
        if not self.output_dir.exists():
            self.output_dir.mkdir(parents=True, exist_ok=True)
            logger.info("Created directory: %s", self.output_dir)

    # -- Mitzvot --------------------------------------------------------

    def save_mitzvah(self, mitzvah: Mitzvah) -> Path:
        path = self.mitzvah_path(mitzvah.number)
        write_json_atomic(mitzvah.to_payload(), path)
        return path

    def load_mitzvah(self, number: int) -> Mitzvah | None:
        """Load a single per-mitzvah file, or None if it does not exist."""
        path = self.mitzvah_path(number)
        if not path.exists():
            return None
        return Mitzvah.model_validate(read_json(path))

    def save_collection(self, collection: MitzvahCollection) -> Path:
        write_json_atomic(collection.to_payload(), self.collection_path)
        return self.collection_path

    def load_collection(self) -> MitzvahCollection | None:
        """Load the full collection file.

        Entries that fail validation or repeat an earlier number are
        skipped with a warning.

        Returns:
            The collection, or None if no collection has been saved yet.

        Raises:
            OSError: If the file exists but cannot be read.
            ValueError: If the file is not a JSON array.
        """
        if not self.collection_path.exists():
            return None

        data = read_json(self.collection_path)
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON array in {self.collection_path}")

        collection = MitzvahCollection()
        for position, item in enumerate(data):
            try:
                mitzvah = Mitzvah.model_validate(item)
            except ValidationError as e:
                logger.warning("Skipping invalid entry %d in %s: %s", position, self.collection_path, e)
                continue
            if mitzvah.number in collection:
                logger.warning("Skipping duplicate mitzvah %d in %s", mitzvah.number, self.collection_path)
                continue
            collection.add(mitzvah)
        return collection

    # -- Index ----------------------------------------------------------

    def save_index(self, entries: list[IndexEntry]) -> Path:
        write_json_atomic([e.model_dump(by_alias=True) for e in entries], self.index_path)
        return self.index_path

    def load_index(self) -> list[IndexEntry] | None:
        if not self.index_path.exists():
            return None
        data = read_json(self.index_path)
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON array in {self.index_path}")
        return [IndexEntry.model_validate(item) for item in data]

    # -- Failures -------------------------------------------------------

    def has_pending_failures(self) -> bool:
        return self.failures_path.exists()

    def save_failures(self, failures: list[FailedDownload]) -> Path:
        write_json_atomic([f.model_dump() for f in failures], self.failures_path)
        return self.failures_path

    def load_failures(self) -> list[FailedDownload]:
        """Load pending failures; an absent file means nothing to retry.

        Raises:
            OSError: If the file exists but cannot be read.
            ValueError: If the content is malformed.
        """
        if not self.failures_path.exists():
            return []
        data = read_json(self.failures_path)
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON array in {self.failures_path}")
        return [FailedDownload.model_validate(item) for item in data]

    def clear_failures(self) -> None:
        self.failures_path.unlink(missing_ok=True)
