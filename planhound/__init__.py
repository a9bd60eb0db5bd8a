"""PlanHound: plan compression and semantic code chunking for coding agents."""

from planhound.version import __version__

__all__ = ["__version__"]
