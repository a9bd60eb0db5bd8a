"""Argument parsers for PlanHound CLI subcommands."""
