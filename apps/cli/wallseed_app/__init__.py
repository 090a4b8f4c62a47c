"""Command-line app for wallseed."""
