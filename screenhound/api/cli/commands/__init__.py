"""Command implementations for the ScreenHound CLI."""
