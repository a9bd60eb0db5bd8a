"""MCP server for PlanHound."""
