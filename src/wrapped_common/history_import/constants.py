"""Constants for streaming-history import processing."""

# Entries per client -> server request
TRANSPORT_CHUNK_SIZE = 2000

# Entries per server -> database upsert statement
STORE_CHUNK_SIZE = 500

# Plays shorter than this are not counted as listens
MIN_MS_PLAYED = 30_000

# Spotify accepts at most 100 URIs per add-items call
PLAYLIST_ADD_CHUNK_SIZE = 100
