"""
Core modules for the creator dashboard
"""
from .metrics import engagement_rate, average_views_per_video, growth_projection
from .state import ChannelStore

__all__ = [
    'engagement_rate',
    'average_views_per_video',
    'growth_projection',
    'ChannelStore',
]
