"""
API Routers Package
"""

from .stats import router as stats_router
from .consistency import router as consistency_router
from .performance import router as performance_router
from .targets import router as targets_router

__all__ = ['stats_router', 'consistency_router', 'performance_router', 'targets_router']
