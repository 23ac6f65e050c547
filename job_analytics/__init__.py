"""Descriptive analytics over job postings, companies, and skills."""

__version__ = "1.0.0"
