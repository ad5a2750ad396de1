"""Abstract provider contracts."""
