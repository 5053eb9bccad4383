"""Command-line interface for the calculator package."""
