"""Command implementations for the nextver CLI."""
