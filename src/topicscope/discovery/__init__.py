"""
Topic discovery: one run over a ROS graph, producing a DiscoveryReport.
"""

from .models import DiscoveryReport, TopicRegistry, TopicReport
from .runner import DiscoveryRunner

__all__ = [
    "DiscoveryReport",
    "DiscoveryRunner",
    "TopicRegistry",
    "TopicReport",
]
