"""Shared database package -- convenience re-exports.

Importing this module registers all models with Base.metadata.
"""

from wrapped_common.db.base import Base
from wrapped_common.db.enums import HistorySource
from wrapped_common.db.models import SpotifyUser, StreamingHistory
from wrapped_common.db.operations import HistoryRepository
from wrapped_common.db.session import DatabaseManager

__all__ = [
    "Base",
    "HistorySource",
    "SpotifyUser",
    "StreamingHistory",
    "DatabaseManager",
    "HistoryRepository",
]
