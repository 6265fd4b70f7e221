"""Command-line interface for datalink."""
