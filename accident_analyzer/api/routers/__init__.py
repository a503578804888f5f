"""
accident_analyzer/api/routers package marker.
"""

from accident_analyzer.api.routers.accident_analysis import router as accident_analysis_router

__all__ = [
    "accident_analysis_router",
]
