from .base import ReconciliationEngine
from .plan import PlanEngine
from .pulumi_engine import PulumiEngine

__all__ = ['ReconciliationEngine', 'PlanEngine', 'PulumiEngine']
