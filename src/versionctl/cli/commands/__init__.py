"""Command implementations for the versionctl CLI."""
