"""Glimpse - a terminal overlay reader for plain-text books."""
