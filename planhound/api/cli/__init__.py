"""Command line interface for PlanHound."""
