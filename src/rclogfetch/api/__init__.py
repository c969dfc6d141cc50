"""Concrete wiring of the application layer for scripts and the CLI."""
