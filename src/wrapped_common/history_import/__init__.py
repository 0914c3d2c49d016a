"""Streaming-history import: row validation, filtering and chunking."""

from wrapped_common.history_import.batching import chunked, iter_chunks
from wrapped_common.history_import.models import (
    ImportCounters,
    ImportResult,
    PlayEvent,
    Rejection,
    StoredHistoryRow,
)
from wrapped_common.history_import.normalizers import normalize_play_event

__all__ = [
    "ImportCounters",
    "ImportResult",
    "PlayEvent",
    "Rejection",
    "StoredHistoryRow",
    "chunked",
    "iter_chunks",
    "normalize_play_event",
]
