"""Core domain types, models, configuration and exceptions."""
