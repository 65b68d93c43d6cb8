"""Scrape course grades from the UNIST Blackboard portal into a JSON file."""

__version__ = "0.1.0"
