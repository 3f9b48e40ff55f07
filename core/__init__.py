"""Core modules for the document translation service."""
