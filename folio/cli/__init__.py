"""Command-line interface for the blog backend."""
