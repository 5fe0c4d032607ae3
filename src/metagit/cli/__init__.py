"""Command line interface for metagit."""
