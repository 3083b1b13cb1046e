"""Packaged data files (default lookup tables)."""
