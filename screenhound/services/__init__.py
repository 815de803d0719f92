"""Service layer for ScreenHound - search, enrichment and collection."""
