"""Core domain types for ScreenHound."""
