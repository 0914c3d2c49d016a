"""HTTP API: Spotify sign-in, history import, analytics and wrapped stats."""
