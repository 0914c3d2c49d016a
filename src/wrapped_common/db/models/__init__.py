"""Re-export all model classes."""

from wrapped_common.db.models.history import StreamingHistory
from wrapped_common.db.models.user import SpotifyUser

__all__ = [
    "SpotifyUser",
    "StreamingHistory",
]
