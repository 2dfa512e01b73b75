"""Organize and analyse a Spotify liked-songs library by year and month."""

__version__ = "0.1.0"
