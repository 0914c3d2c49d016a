"""Streaming reader for ``Streaming_History_Audio_*.json`` export files."""

import logging
from pathlib import Path
from typing import Any

import ijson  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)


class ExportFileError(Exception):
    """Raised when an export file cannot be read as a JSON array."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"{path.name}: {detail}")


class ExportFileReader:
    """Reads one export file into memory as a list of raw entries.

    Records are kept as the plain dicts found in the file; validation and
    filtering happen server side.
    """

    def read(self, path: Path) -> list[dict[str, Any]]:
        try:
            with path.open("rb") as f:
                self._expect_array(f, path)
                f.seek(0)
                return list(ijson.items(f, "item", use_float=True))
        except ijson.JSONError as exc:
            raise ExportFileError(path, f"invalid JSON: {exc}") from exc
        except OSError as exc:
            raise ExportFileError(path, f"cannot read file: {exc}") from exc

    @staticmethod
    def _expect_array(f: Any, path: Path) -> None:
        events = ijson.parse(f)
        try:
            _prefix, event, _value = next(events)
        except StopIteration:
            raise ExportFileError(path, "file is empty") from None
        if event != "start_array":
            raise ExportFileError(path, "top-level value is not an array")
