"""
Monitoring Registry - Factory Registration for Call Monitors.

The host registers constructor functions; each produces one monitor
instance. Instances live until shutdown(), which closes every instance
that supports it so collectors publish their reports.

Usage:
    registry = MonitoringRegistry()
    registry.register("json", lambda: RequestMetricsCollector(context=ctx))
    monitors = registry.create_instances()
    ...
    registry.shutdown()
"""

from __future__ import annotations

from threading import RLock
from typing import Dict, List, Optional

import structlog

from perf_reporter.interfaces.monitoring import MonitoringFactory, MonitoringInterface

logger = structlog.get_logger(__name__)


class MonitoringRegistry:
    """Thread-safe registry of monitor factories and live instances."""

    def __init__(self) -> None:
        self._factories: Dict[str, MonitoringFactory] = {}
        self._instances: List[MonitoringInterface] = []
        self._lock = RLock()

    def register(self, name: str, factory: MonitoringFactory) -> None:
        """
        Register a monitor factory.

        Args:
            name: Unique name for the factory
            factory: Zero-argument callable returning a monitor

        Raises:
            ValueError: If a factory with this name is already registered
        """
        with self._lock:
            if name in self._factories:
                raise ValueError(
                    f"Monitoring factory '{name}' is already registered. "
                    f"Use unregister() first."
                )
            self._factories[name] = factory
            logger.debug("monitoring_factory_registered", name=name)

    def unregister(self, name: str) -> bool:
        """Remove a factory. Existing instances are kept."""
        with self._lock:
            return self._factories.pop(name, None) is not None

    def list_factories(self) -> List[str]:
        with self._lock:
            return list(self._factories)

    def create_instances(self) -> List[MonitoringInterface]:
        """
        Create one monitor per registered factory.

        Returns:
            New instances, in registration order
        """
        with self._lock:
            created = [factory() for factory in self._factories.values()]
            self._instances.extend(created)
            return list(created)

    def create(self, name: str) -> Optional[MonitoringInterface]:
        """Create a monitor from one named factory, None if not registered."""
        with self._lock:
            factory = self._factories.get(name)
            if factory is None:
                return None
            instance = factory()
            self._instances.append(instance)
            return instance

    @property
    def instances(self) -> List[MonitoringInterface]:
        with self._lock:
            return list(self._instances)

    def shutdown(self) -> int:
        """
        Close all live instances.

        Returns:
            Number of instances closed
        """
        with self._lock:
            instances = list(self._instances)
            self._instances.clear()

        closed = 0
        for instance in instances:
            close = getattr(instance, "close", None)
            if close is None:
                continue
            try:
                close()
                closed += 1
            except Exception:
                logger.exception(
                    "monitor_close_failed",
                    monitor=type(instance).__name__,
                )
        logger.debug("monitoring_shutdown", closed=closed)
        return closed
