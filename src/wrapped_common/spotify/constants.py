"""Spotify API URLs and retry defaults."""

# Spotify Accounts service
SPOTIFY_AUTHORIZE_URL = "https://accounts.spotify.com/authorize"
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"

# Spotify Web API
SPOTIFY_API_BASE = "https://api.spotify.com/v1"

ME_URL = f"{SPOTIFY_API_BASE}/me"
CURRENTLY_PLAYING_URL = f"{SPOTIFY_API_BASE}/me/player/currently-playing"
RECENTLY_PLAYED_URL = f"{SPOTIFY_API_BASE}/me/player/recently-played"
TOP_ARTISTS_URL = f"{SPOTIFY_API_BASE}/me/top/artists"
TOP_TRACKS_URL = f"{SPOTIFY_API_BASE}/me/top/tracks"
RECOMMENDATIONS_URL = f"{SPOTIFY_API_BASE}/recommendations"
USER_PLAYLISTS_URL = f"{SPOTIFY_API_BASE}/me/playlists"
PLAYLIST_URL = f"{SPOTIFY_API_BASE}/playlists"

# Retry defaults
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_BASE_DELAY = 1.0  # seconds
DEFAULT_CONCURRENCY_LIMIT = 5
DEFAULT_REQUEST_TIMEOUT = 30.0  # seconds

# Recommendation seeding
MAX_SEED_TRACKS = 3
MAX_SEED_ARTISTS = 2
DEFAULT_RECOMMENDATION_LIMIT = 20
DEFAULT_MIN_POPULARITY = 30
