"""Command-line interface for BlogNest."""
