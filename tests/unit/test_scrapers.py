"""Tests for ROS command output scrapers."""

from topicscope.runtime.scrapers import (
    EndpointSet,
    parse_average_rate,
    parse_plain_topic_list,
    parse_ros1_topic_info,
    parse_ros1_topic_list,
    parse_ros2_topic_info,
    parse_ros2_topic_list,
)

ROSTOPIC_LIST_V = """
Published topics:
 * /rosout [rosgraph_msgs/Log] 2 publishers
 * /cmd_vel [geometry_msgs/Twist] 1 publisher
 * /odom [nav_msgs/Odometry] 1 publisher

Subscribed topics:
 * /rosout [rosgraph_msgs/Log] 1 subscriber
 * /scan [sensor_msgs/LaserScan] 1 subscriber
"""

ROSTOPIC_INFO = """Type: geometry_msgs/Twist

Publishers:
 * /teleop_twist_keyboard (http://robot:40123/)

Subscribers:
 * /base_controller (http://robot:40567/)
 * /rosbag_record (http://robot:40789/)

"""

ROS2_TOPIC_INFO_V = """Type: geometry_msgs/msg/Twist

Publisher count: 1

Node name: teleop
Node namespace: /
Topic type: geometry_msgs/msg/Twist
Endpoint type: PUBLISHER
GID: 01.0f.5a.2b
QoS profile:
  Reliability: RELIABLE

Subscription count: 2

Node name: controller
Node namespace: /robot1
Topic type: geometry_msgs/msg/Twist
Endpoint type: SUBSCRIPTION
GID: 01.0f.5a.2c

Node name: _CREATED_BY_BARE_DDS_APP_
Node namespace: _CREATED_BY_BARE_DDS_APP_
Topic type: geometry_msgs/msg/Twist
Endpoint type: SUBSCRIPTION
"""


class TestRos1TopicList:
    def test_verbose_list(self) -> None:
        assert parse_ros1_topic_list(ROSTOPIC_LIST_V) == [
            ("/rosout", "rosgraph_msgs/Log"),
            ("/cmd_vel", "geometry_msgs/Twist"),
            ("/odom", "nav_msgs/Odometry"),
            ("/scan", "sensor_msgs/LaserScan"),
        ]

    def test_later_type_wins_first_position_kept(self) -> None:
        text = " * /a [pkg/Old] 1 publisher\n * /b [pkg/B] 1 publisher\n * /a [pkg/New] 1 subscriber\n"
        assert parse_ros1_topic_list(text) == [("/a", "pkg/New"), ("/b", "pkg/B")]

    def test_plain_list(self) -> None:
        assert parse_plain_topic_list("/rosout\n /odom \n\n") == ["/rosout", "/odom"]


class TestRos2TopicList:
    def test_typed_lines(self) -> None:
        text = "/parameter_events [rcl_interfaces/msg/ParameterEvent]\n/rosout [rcl_interfaces/msg/Log]\n"
        assert parse_ros2_topic_list(text) == [
            ("/parameter_events", "rcl_interfaces/msg/ParameterEvent"),
            ("/rosout", "rcl_interfaces/msg/Log"),
        ]

    def test_untyped_line_is_unknown(self) -> None:
        assert parse_ros2_topic_list("/chatter\n\n") == [("/chatter", "unknown")]


class TestTopicInfo:
    def test_ros1_sections(self) -> None:
        assert parse_ros1_topic_info(ROSTOPIC_INFO) == EndpointSet(
            ["/teleop_twist_keyboard"], ["/base_controller", "/rosbag_record"]
        )

    def test_ros1_none_section(self) -> None:
        text = "Type: std_msgs/String\n\nPublishers: None\n\nSubscribers: \n * /listener (http://h:1/)\n"
        assert parse_ros1_topic_info(text) == EndpointSet([], ["/listener"])

    def test_ros2_blocks(self) -> None:
        endpoints = parse_ros2_topic_info(ROS2_TOPIC_INFO_V)
        assert endpoints.publishers == ["/teleop"]
        assert endpoints.subscribers == [
            "/robot1/controller",
            "_CREATED_BY_BARE_DDS_APP_/_CREATED_BY_BARE_DDS_APP_",
        ]

    def test_ros2_missing_name_and_namespace(self) -> None:
        assert parse_ros2_topic_info("Endpoint type: PUBLISHER\n") == EndpointSet(["/unknown"], [])

    def test_empty_output(self) -> None:
        assert parse_ros2_topic_info("") == EndpointSet([], [])
        assert parse_ros1_topic_info("") == EndpointSet([], [])


class TestAverageRate:
    def test_last_value_wins(self) -> None:
        text = (
            "subscribed to [/cmd_vel]\n"
            "average rate: 9.876\n\tmin: 0.099s max: 0.102s std dev: 0.00100s window: 10\n"
            "average rate: 10.002\n\tmin: 0.099s max: 0.101s std dev: 0.00050s window: 20\n"
        )
        assert parse_average_rate(text) == 10.002

    def test_silent_topic(self) -> None:
        assert parse_average_rate("WARNING: topic [/x] does not appear to be published yet\n") is None

    def test_unparseable_value_ignored(self) -> None:
        assert parse_average_rate("average rate: 5.0\naverage rate: nan?\n") == 5.0
