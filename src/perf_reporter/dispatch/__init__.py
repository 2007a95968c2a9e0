"""
Dispatch Package - Instrumented Remote Calls.

    - InstrumentedDispatcher: Runs a call with retries and fires the
      lifecycle hooks of every attached monitor
"""

from perf_reporter.dispatch.call_dispatcher import InstrumentedDispatcher

__all__ = ["InstrumentedDispatcher"]
