"""Save and restore terminal tab/pane layouts as named tabsets."""

__version__ = "0.1.0"
