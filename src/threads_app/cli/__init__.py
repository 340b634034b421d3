"""Command line entry point, bootstrap and slash commands."""
