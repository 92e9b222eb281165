"""Availability and booking engine for venue activities."""
