"""Provider implementations for PlanHound interfaces."""
