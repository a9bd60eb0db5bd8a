"""Version information for PlanHound."""

__version__ = "0.1.0"
