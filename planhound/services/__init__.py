"""Service layer for PlanHound."""

from planhound.services.chunking_service import ChunkingService
from planhound.services.factory import PlanHoundServices, create_services
from planhound.services.plan_compression_service import PlanCompressionService, compress_plan
from planhound.services.scope_resolver import (
    ScopeResolution,
    get_step_scope,
    resolve_scope,
    translate_scope_selector,
)

__all__ = [
    "ChunkingService",
    "PlanCompressionService",
    "PlanHoundServices",
    "ScopeResolution",
    "compress_plan",
    "create_services",
    "get_step_scope",
    "resolve_scope",
    "translate_scope_selector",
]
