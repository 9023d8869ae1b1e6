from .engine import AIDebugInfo, DecisionEngine
from .strategies import AIStatus, AnalysisContext, Strategy, default_strategies

__all__ = [
    'AIDebugInfo', 'DecisionEngine', 'AIStatus', 'AnalysisContext',
    'Strategy', 'default_strategies',
]
