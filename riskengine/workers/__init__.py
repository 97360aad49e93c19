"""
Risk Engine - Workers Module
Background workers that keep activity data moving
"""

from riskengine.workers.activity_refresher import ActivityRefreshWorker

__all__ = [
    "ActivityRefreshWorker"
]
