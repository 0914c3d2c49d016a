"""Database enums."""

import enum


class HistorySource(enum.StrEnum):
    """Where a streaming_history row came from."""

    IMPORT = "import"
    SCROBBLE = "scrobble"
