"""
Monitoring Protocol.

Defines the call lifecycle hooks invoked by a call-dispatch layer around
every remote operation.

Hook order for one call:
    on_call_started -> [on_call_retried]* -> on_call_succeeded | on_call_failed
    -> on_call_finished

Design Notes:
    - Hooks are fire-and-forget observers and must never raise
    - The token returned by on_call_started is passed back to later hooks
    - Implementations must be safe to call from any worker thread
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from perf_reporter.domain.entities import CallOutcome, CoreMetrics


@runtime_checkable
class MonitoringInterface(Protocol):
    """Observer of outbound service calls."""

    def on_call_started(
        self,
        service_name: str,
        operation_name: str,
        request: Any = None,
    ) -> Optional[Any]:
        """
        Called before a call is dispatched.

        Returns:
            Opaque correlation token handed back to the later hooks
        """
        ...

    def on_call_succeeded(
        self,
        service_name: str,
        operation_name: str,
        request: Any,
        outcome: Optional[CallOutcome],
        core_metrics: CoreMetrics,
        token: Any = None,
    ) -> None:
        """
        Called after a call completed successfully.

        Args:
            service_name: Service name (e.g. "S3")
            operation_name: Operation name (e.g. "PutObject")
            request: Opaque request object
            outcome: Terminal outcome reported by the transport
            core_metrics: Named numeric metrics captured by the transport
            token: Value returned by on_call_started
        """
        ...

    def on_call_failed(
        self,
        service_name: str,
        operation_name: str,
        request: Any,
        outcome: Optional[CallOutcome],
        core_metrics: CoreMetrics,
        token: Any = None,
    ) -> None:
        """Called after a call failed. Same arguments as on_call_succeeded."""
        ...

    def on_call_retried(
        self,
        service_name: str,
        operation_name: str,
        request: Any,
        token: Any = None,
    ) -> None:
        """Called before each retry attempt."""
        ...

    def on_call_finished(
        self,
        service_name: str,
        operation_name: str,
        request: Any,
        token: Any = None,
    ) -> None:
        """Called once per call after the terminal hook."""
        ...


# Constructor function registered with the host; produces one monitor
MonitoringFactory = Callable[[], MonitoringInterface]
