from .identity_service import IdentityService
from .production_registry import ProductionRegistry
from .report_renderer import ReportRenderer

__all__ = ["IdentityService", "ProductionRegistry", "ReportRenderer"]
