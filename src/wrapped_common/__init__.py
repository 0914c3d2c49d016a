"""Shared building blocks for the wrapped API and importer."""
