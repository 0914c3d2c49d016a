"""Sequential upload of export files to the import endpoint."""

import enum
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from wrapped_common.history_import import iter_chunks
from wrapped_common.history_import.constants import TRANSPORT_CHUNK_SIZE
from wrapped_importer.api_client import ApiError, ImportApiClient
from wrapped_importer.export_reader import ExportFileError, ExportFileReader

logger = logging.getLogger(__name__)

EXPORT_SUFFIX = ".json"
INVALID_JSON_MESSAGE = "Invalid JSON"


class FileStatus(enum.StrEnum):
    PENDING = "pending"
    PROCESSING = "processing"
    DONE = "done"
    ERROR = "error"


@dataclass
class FileProgress:
    """Upload state of one selected file."""

    name: str
    count: int
    status: FileStatus = FileStatus.PENDING
    error: str | None = None


@dataclass
class ImportSummary:
    """Aggregate counters over every successful chunk of a run."""

    inserted: int = 0
    skipped_short: int = 0
    total: int = 0
    files: list[FileProgress] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(f.status is FileStatus.ERROR for f in self.files)


ProgressCallback = Callable[[list[FileProgress], int], None]


class ImportOrchestrator:
    """Parses every selected file, then uploads them one chunk at a time.

    Chunks are sent strictly in order with a single request in flight. A
    failed chunk marks its file as errored; later chunks and files still run.
    """

    def __init__(
        self,
        client: ImportApiClient,
        reader: ExportFileReader | None = None,
        chunk_size: int = TRANSPORT_CHUNK_SIZE,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        self._client = client
        self._reader = reader or ExportFileReader()
        self._chunk_size = chunk_size
        self._on_progress = on_progress

    def _parse_all(self, paths: list[Path]) -> tuple[list[FileProgress], list[list[dict[str, Any]]]]:
        statuses: list[FileProgress] = []
        parsed: list[list[dict[str, Any]]] = []
        for path in paths:
            try:
                entries = self._reader.read(path)
            except ExportFileError as exc:
                logger.warning("Skipping %s: %s", path.name, exc.detail)
                statuses.append(FileProgress(path.name, 0, FileStatus.ERROR, INVALID_JSON_MESSAGE))
                parsed.append([])
                continue
            statuses.append(FileProgress(path.name, len(entries)))
            parsed.append(entries)
        return statuses, parsed

    def _report(self, statuses: list[FileProgress], percent: int) -> None:
        if self._on_progress is not None:
            self._on_progress(statuses, percent)

    async def run(self, paths: Iterable[Path]) -> ImportSummary:
        json_paths = [p for p in paths if p.name.endswith(EXPORT_SUFFIX)]
        statuses, parsed = self._parse_all(json_paths)
        summary = ImportSummary(files=statuses)
        summary.total = sum(s.count for s in statuses if s.status is not FileStatus.ERROR)

        processed = 0
        for progress, entries in zip(statuses, parsed, strict=True):
            if progress.status is FileStatus.ERROR:
                continue
            progress.status = FileStatus.PROCESSING
            file_ok = True

            for chunk in iter_chunks(entries, self._chunk_size):
                try:
                    result = await self._client.import_entries(chunk)
                except ApiError as exc:
                    logger.warning("Chunk of %s failed: %s", progress.name, exc)
                    file_ok = False
                    progress.error = exc.detail
                else:
                    summary.inserted += result.inserted
                    summary.skipped_short += result.skipped_short
                processed += len(chunk)
                self._report(statuses, round(processed / summary.total * 100))

            progress.status = FileStatus.DONE if file_ok else FileStatus.ERROR
            logger.info("Finished %s: %s", progress.name, progress.status)

        return summary
