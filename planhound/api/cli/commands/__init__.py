"""PlanHound CLI command implementations."""
