"""HTTP surface: the one-shot Spotify OAuth helper."""
