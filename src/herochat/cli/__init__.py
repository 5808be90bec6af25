"""Command-line interface for herochat."""
