"""Bundled definition files."""
