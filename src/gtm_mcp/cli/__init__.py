"""Command-line interface for gtm-mcp."""
