"""Command line interface for Net_Games."""
