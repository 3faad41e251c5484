"""Sequential, rate-limited download of Sefer HaChinukh from the Sefaria API."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx
from pydantic import ValidationError

from chinukh.config import SourceConfig
from chinukh.ingestion.indexer import build_index
from chinukh.models import FailedDownload, Mitzvah, MitzvahCollection
from chinukh.storage import MitzvahStore

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 50

ClientFactory = Callable[[], httpx.AsyncClient]


class DownloadError(Exception):
    """The API answered, but not with a usable mitzvah payload."""


class MitzvahDownloader:
    """Downloads mitzvot one at a time and writes them to a MitzvahStore.

    Requests are strictly sequential with a fixed pause between them, so
    the request rate toward Sefaria is bounded. Per-mitzvah failures are
    recorded and never abort a run; only failing to create the HTTP
    client does.

    Args:
        config: Remote source settings (URL, corpus name, count, delay).
        store: Destination for downloaded records and derived artifacts.
        client_factory: Builds the HTTP client for one run. Defaults to an
            ``httpx.AsyncClient`` configured from ``config``.
        sleep: Awaitable used for the inter-request pause.
        preview_length: Preview size for the index built after a full run.
    """

    def __init__(
        self,
        config: SourceConfig,
        store: MitzvahStore,
        client_factory: ClientFactory | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        preview_length: int = 100,
    ) -> None:
        self._config = config
        self._store = store
        self._client_factory = client_factory or self._default_client
        self._sleep = sleep
        self._preview_length = preview_length

    def _default_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._config.timeout_seconds,
            headers={"User-Agent": self._config.user_agent},
            follow_redirects=True,
        )

    def url_for(self, number: int) -> str:
        reference = f"{self._config.corpus_name}.{number}"
        return f"{self._config.base_url}{reference}"

    async def download_all(self) -> tuple[MitzvahCollection, list[FailedDownload]]:
        """Download every mitzvah from 1 to ``total_mitzvot``.

        Each mitzvah is saved to its own file as soon as it arrives. When
        the loop ends the full collection and the index are saved, and
        the failures file is written (or removed when nothing failed).

        Returns:
            The mitzvot downloaded successfully, and the failures.
        """
        total = self._config.total_mitzvot
        logger.info("Starting download of %d mitzvot", total)

        try:
            client = self._client_factory()
        except Exception:
            logger.exception("Could not create HTTP client, aborting download")
            return MitzvahCollection(), []

        self._best_effort("create data directory", self._store.ensure_directory)

        collection = MitzvahCollection()
        failed: list[FailedDownload] = []

        async with client:
            for number in range(1, total + 1):
                logger.info("Downloading mitzvah %d...", number)
                outcome = await self._download_one(client, number)
                if isinstance(outcome, FailedDownload):
                    failed.append(outcome)
                else:
                    collection.add(outcome)

                if number % PROGRESS_EVERY == 0:
                    logger.info(
                        "Progress: %d/%d mitzvot processed (%d%%)",
                        number,
                        total,
                        round(number / total * 100),
                    )

                if number < total:
                    await self._pause()

        if self._best_effort("save complete collection", self._store.save_collection, collection):
            logger.info("Saved complete collection: %s", self._store.collection_path)
        self._rebuild_index(collection)
        self._record_failures(failed)

        logger.info("Download complete: %d/%d mitzvot", len(collection), total)
        if failed:
            logger.warning(
                "Failed downloads (%d): %s",
                len(failed),
                ", ".join(str(f.number) for f in failed),
            )
        return collection, failed

    async def retry_failed(self) -> list[Mitzvah]:
        """Retry the mitzvot listed in the failures file.

        Recovered mitzvot are saved to their own files but not merged into
        the saved collection; reload or re-run a full download for that.

        Returns:
            The mitzvot recovered by this retry.
        """
        try:
            pending = self._store.load_failures()
        except (OSError, ValueError) as e:
            logger.error("Error reading failed downloads file: %s", e)
            return []

        numbers = list(dict.fromkeys(f.number for f in pending))
        if not numbers:
            logger.info("No failed downloads to retry")
            # An empty failures file would otherwise signal a pending retry forever
            self._best_effort("remove failed downloads file", self._store.clear_failures)
            return []

        logger.info("Retrying %d failed downloads", len(numbers))

        try:
            client = self._client_factory()
        except Exception:
            logger.exception("Could not create HTTP client, aborting retry")
            return []

        successful: list[Mitzvah] = []
        still_failed: list[FailedDownload] = []

        async with client:
            for position, number in enumerate(numbers):
                outcome = await self._download_one(client, number)
                if isinstance(outcome, FailedDownload):
                    still_failed.append(outcome)
                else:
                    successful.append(outcome)
                    logger.info("Recovered mitzvah %d", number)

                if position < len(numbers) - 1:
                    await self._pause()

        self._record_failures(still_failed)
        logger.info(
            "Retry complete: %d recovered, %d still failing",
            len(successful),
            len(still_failed),
        )
        return successful

    async def _download_one(self, client: httpx.AsyncClient, number: int) -> Mitzvah | FailedDownload:
        """Fetch, validate and save one mitzvah; never raises."""
        try:
            mitzvah = await self._fetch(client, number)
        except (httpx.HTTPError, DownloadError) as e:
            logger.error("Error downloading mitzvah %d: %s", number, e)
            return FailedDownload(number=number, error=str(e) or type(e).__name__)
        except Exception as e:
            logger.exception("Unexpected error downloading mitzvah %d", number)
            return FailedDownload(number=number, error=str(e) or type(e).__name__)

        self._best_effort(f"save file for mitzvah {number}", self._store.save_mitzvah, mitzvah)
        return mitzvah

    async def _fetch(self, client: httpx.AsyncClient, number: int) -> Mitzvah:
        """GET one mitzvah and stamp it with its number.

        Raises:
            httpx.HTTPError: On transport failure.
            DownloadError: On a non-2xx status or a malformed payload.
        """
        response = await client.get(self.url_for(number))
        if not response.is_success:
            raise DownloadError(f"HTTP {response.status_code}: {response.reason_phrase}")

        try:
            data = response.json()
        except ValueError as e:
            raise DownloadError("Invalid response data format") from e

        if not isinstance(data, dict) or not data:
            raise DownloadError("Invalid response data format")
        # Sefaria reports unknown references as 200 with an "error" field
        if isinstance(data.get("error"), str):
            raise DownloadError(data["error"])

        data["mitzvahNumber"] = number
        try:
            return Mitzvah.model_validate(data)
        except ValidationError as e:
            raise DownloadError(f"Invalid response data format: {e.error_count()} validation errors") from e

    async def _pause(self) -> None:
        delay_ms = self._config.request_delay_ms
        if delay_ms > 0:
            await self._sleep(delay_ms / 1000)

    def _rebuild_index(self, collection: MitzvahCollection) -> None:
        try:
            entries = build_index(collection, self._preview_length)
            self._store.save_index(entries)
        except (OSError, ValueError) as e:
            logger.warning("Could not create search index: %s", e)
            return
        logger.info("Created search index: %s", self._store.index_path)

    def _record_failures(self, failed: list[FailedDownload]) -> None:
        if failed:
            if self._best_effort("save failed downloads", self._store.save_failures, failed):
                logger.info("Failed downloads saved to: %s", self._store.failures_path)
        else:
            self._best_effort("remove failed downloads file", self._store.clear_failures)

    @staticmethod
    def _best_effort(description: str, action: Callable[..., Any], *args: Any) -> bool:
        """Run a side operation whose failure must not stop the run."""
        try:
            action(*args)
        except OSError as e:
            logger.warning("Could not %s: %s", description, e)
            return False
        return True
