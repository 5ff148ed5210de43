"""Extraction utilities for scraped event content."""
