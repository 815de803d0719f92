"""Version information for ScreenHound."""

__version__ = "0.2.0"
