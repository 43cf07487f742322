"""Page objects and smoke runner for the song library site."""

__version__ = "1.0.0"
