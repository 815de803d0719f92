"""MCP server package for ScreenHound."""
