"""Shared pytest fixtures for topicscope tests."""

from __future__ import annotations

import pytest

from topicscope.discovery.models import TopicRegistry
from topicscope.runtime.backends import RosBackend
from topicscope.runtime.commands import CommandRunner
from topicscope.runtime.environment import RosRuntime
from topicscope.runtime.scrapers import EndpointSet

TWIST_STAMPED_ROS1 = """\
std_msgs/Header header
  uint32 seq
  time stamp
  string frame_id
geometry_msgs/Twist twist
  geometry_msgs/Vector3 linear
    float64 x
    float64 y
    float64 z
  geometry_msgs/Vector3 angular
    float64 x
    float64 y
    float64 z
"""

BATTERY_STATE_ROS2 = (
    "uint8 POWER_SUPPLY_STATUS_UNKNOWN = 0\n"
    "uint8 POWER_SUPPLY_STATUS_CHARGING = 1\n"
    "\n"
    "std_msgs/Header header\n"
    "\tbuiltin_interfaces/Time stamp\n"
    "\t\tint32 sec\n"
    "\t\tuint32 nanosec\n"
    "\tstring frame_id\n"
    "float32 voltage\n"
)


class FakeBackend(RosBackend):
    """Backend returning canned data; records which commands were asked for."""

    version = "2"

    def __init__(
        self,
        topics: dict[str, str] | None = None,
        schemas: dict[str, str] | None = None,
        endpoints: dict[str, EndpointSet] | None = None,
        rates: dict[str, float | None] | None = None,
    ):
        super().__init__(CommandRunner({}))
        self.topics = topics or {}
        self.schemas = schemas or {}
        self.endpoint_map = endpoints or {}
        self.rates = rates or {}
        self.schema_requests: list[str] = []
        self.rate_requests: list[tuple[str, int, float]] = []

    def list_topics(self, registry: TopicRegistry) -> TopicRegistry:
        for name, message_type in self.topics.items():
            registry.add(name, message_type)
        return registry

    def schema_text(self, message_type: str) -> str:
        self.schema_requests.append(message_type)
        return self.schemas.get(message_type, "")

    def endpoints(self, topic: str) -> EndpointSet:
        return self.endpoint_map.get(topic, EndpointSet([], []))

    def rate_command(self, topic: str, window: int) -> list[str]:
        return ["fake-hz", str(window), topic]

    def measure_rate(self, topic: str, window: int, timeout: float) -> float | None:
        self.rate_requests.append((topic, window, timeout))
        return self.rates.get(topic)


@pytest.fixture
def backend_factory() -> type[FakeBackend]:
    return FakeBackend


@pytest.fixture
def twist_stamped_text() -> str:
    return TWIST_STAMPED_ROS1


@pytest.fixture
def battery_state_text() -> str:
    return BATTERY_STATE_ROS2


@pytest.fixture
def ros2_runtime() -> RosRuntime:
    return RosRuntime(version="2", distro="humble", env={"ROS_VERSION": "2", "PATH": "/usr/bin"})


@pytest.fixture
def ros1_runtime() -> RosRuntime:
    return RosRuntime(version="1", distro="noetic", env={"ROS_VERSION": "1", "PATH": "/usr/bin"})


@pytest.fixture
def fake_backend(twist_stamped_text: str, battery_state_text: str) -> FakeBackend:
    return FakeBackend(
        topics={
            "/cmd_vel": "geometry_msgs/msg/TwistStamped",
            "/battery": "sensor_msgs/msg/BatteryState",
            "/cmd_vel_safe": "geometry_msgs/msg/TwistStamped",
        },
        schemas={
            "geometry_msgs/msg/TwistStamped": twist_stamped_text,
            "sensor_msgs/msg/BatteryState": battery_state_text,
        },
        endpoints={
            "/cmd_vel": EndpointSet(["/teleop"], ["/base_controller"]),
            "/battery": EndpointSet(["/bms"], []),
        },
        rates={"/cmd_vel": 20.0, "/battery": 1.0},
    )
