"""Command-line importer for Spotify extended streaming-history exports."""
