"""Interactive ignore, stage, commit and push assistant."""

__version__ = "1.0.0"
