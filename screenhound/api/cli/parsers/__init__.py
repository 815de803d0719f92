"""Argument parsers for ScreenHound CLI commands."""
