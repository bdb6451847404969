"""CLI and HTTP adapters."""
