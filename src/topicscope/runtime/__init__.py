"""
ROS runtime access: locating an installation and running its tools.
"""

from .backends import Ros1Backend, Ros2Backend, RosBackend, get_backend
from .commands import CommandRunner
from .environment import RosRuntime, locate_runtime
from .scrapers import EndpointSet

__all__ = [
    "CommandRunner",
    "EndpointSet",
    "Ros1Backend",
    "Ros2Backend",
    "RosBackend",
    "RosRuntime",
    "get_backend",
    "locate_runtime",
]
