"""ScreenHound command line interface."""
