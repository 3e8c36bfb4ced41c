"""noddy - resolve spoken app names to launchable executables."""

__version__ = "0.1.0"
