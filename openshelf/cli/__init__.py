"""Command-line tools for openshelf."""
