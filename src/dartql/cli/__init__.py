"""Command line interface for dartql."""
