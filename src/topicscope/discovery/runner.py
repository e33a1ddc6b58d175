"""
Discovery runner.

Orchestrates one discovery run: enumerate topics, then collect schema,
endpoints and rate for each.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

from ..core.config import DiscoveryConfig
from ..core.errors import NoTopicsError
from ..core.schema import FieldRecord, parse_schema
from ..runtime.backends import RosBackend, get_backend
from ..runtime.environment import RosRuntime
from .models import DiscoveryReport, TopicRegistry, TopicReport

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


class DiscoveryRunner:
    """
    Runs topic discovery against one ROS runtime.

    Topics are processed by up to ``config.jobs`` worker threads. Report
    order always follows enumeration order.
    """

    def __init__(
        self,
        runtime: RosRuntime,
        config: DiscoveryConfig | None = None,
        backend: RosBackend | None = None,
        progress: ProgressCallback | None = None,
    ):
        """
        Initialize the runner.

        Args:
            runtime: Located ROS runtime
            config: Discovery settings (defaults when omitted)
            backend: Introspection backend (picked from runtime when omitted)
            progress: Called with (index, total, topic) as each topic starts
        """
        self.runtime = runtime
        self.config = config or DiscoveryConfig()
        self.backend = backend or get_backend(runtime)
        self.progress = progress

        # Message types repeat across topics; one lookup per type per run.
        self._schemas: dict[str, list[FieldRecord]] = {}
        self._schema_lock = threading.Lock()

    def list_topics(self) -> TopicRegistry:
        """
        Enumerate live topics into a fresh registry.

        Raises:
            NoTopicsError: If no topics were found
        """
        registry = self.backend.list_topics(TopicRegistry())
        if not registry:
            raise NoTopicsError("No topics found. Is a ROS master/daemon running?")
        return registry

    def run(self, registry: TopicRegistry | None = None) -> DiscoveryReport:
        """
        Execute a full discovery run.

        Args:
            registry: Topics from an earlier :meth:`list_topics` call;
                enumerated afresh when omitted

        Returns:
            DiscoveryReport with one TopicReport per topic
        """
        if registry is None:
            registry = self.list_topics()
        total = len(registry)
        logger.info(
            "Discovering %d topic(s) on ROS %s (%s), hz-window=%d hz-timeout=%ss",
            total,
            self.runtime.version,
            self.runtime.distro,
            self.config.hz_window,
            self.config.hz_timeout,
        )

        report = DiscoveryReport(
            ros_version=self.runtime.version,
            ros_distro=self.runtime.distro,
            hz_window=self.config.hz_window,
            hz_timeout=self.config.hz_timeout,
        )

        work = [
            (index, name, message_type)
            for index, (name, message_type) in enumerate(registry.items(), start=1)
        ]
        if self.config.jobs == 1:
            report.topics = [self._inspect(*item, total) for item in work]
        else:
            with ThreadPoolExecutor(max_workers=self.config.jobs) as pool:
                report.topics = list(pool.map(lambda item: self._inspect(*item, total), work))

        return report

    def schema_for(self, message_type: str) -> list[FieldRecord]:
        """Parse the schema of ``message_type``, once per run."""
        with self._schema_lock:
            cached = self._schemas.get(message_type)
        if cached is not None:
            return cached

        schema = parse_schema(self.backend.schema_text(message_type))
        if not schema:
            logger.warning("Empty schema for message type %s", message_type)

        with self._schema_lock:
            return self._schemas.setdefault(message_type, schema)

    def _inspect(self, index: int, name: str, message_type: str, total: int) -> TopicReport:
        if self.progress is not None:
            self.progress(index, total, name)
        logger.debug("[%d/%d] %s (%s)", index, total, name, message_type)

        endpoints = self.backend.endpoints(name)
        return TopicReport(
            name=name,
            message_type=message_type,
            schema=self.schema_for(message_type),
            publishers=endpoints.publishers,
            subscribers=endpoints.subscribers,
            frequency_hz=self.backend.measure_rate(
                name, self.config.hz_window, self.config.hz_timeout
            ),
        )
