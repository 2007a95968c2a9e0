"""
JSON Reporter - Publishes a Report to Stdout and a File.

Design Notes:
    - Empty record lists produce no output at all
    - Stdout is written first; a failing console does not block the file
    - The file is truncate-created and written once; failures are logged
    - Callers serialize access (the collector holds its lock while publishing)
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import IO, Optional, Sequence, Union

import structlog

from perf_reporter.config.models import DEFAULT_REPORT_PATH
from perf_reporter.domain.entities import MetricRecord
from perf_reporter.interfaces.report_formatter import ReportFormatter
from perf_reporter.reporting.formatters import ResultsFormatter

logger = structlog.get_logger(__name__)


class JsonReporter:
    """Serializes metric records and writes them to stdout and a file."""

    def __init__(
        self,
        output_path: Union[str, Path, None] = DEFAULT_REPORT_PATH,
        formatter: Optional[ReportFormatter] = None,
        echo_stdout: bool = True,
        indent: int = 2,
        stream: Optional[IO[str]] = None,
    ) -> None:
        """
        Initialize reporter.

        Args:
            output_path: Report file path; None disables the file sink
            formatter: Schema strategy (canonical "results" by default)
            echo_stdout: Print the report to the console stream
            indent: JSON indentation
            stream: Console stream (sys.stdout at publish time if None)
        """
        self.output_path = Path(output_path) if output_path is not None else None
        self.formatter = formatter or ResultsFormatter()
        self.echo_stdout = echo_stdout
        self.indent = indent
        self._stream = stream

    def render(self, records: Sequence[MetricRecord]) -> str:
        """Render records to JSON text using the configured formatter."""
        document = self.formatter.format(records)
        return json.dumps(document, indent=self.indent)

    def publish(self, records: Sequence[MetricRecord]) -> Optional[str]:
        """
        Publish records to the console and the report file.

        Args:
            records: Records in recording order

        Returns:
            The JSON text written, or None if there was nothing to report
        """
        if not records:
            logger.debug("report_skipped_empty")
            return None

        text = self.render(records)

        if self.echo_stdout:
            self._write_console(text)

        if self.output_path is not None:
            self._write_file(text)

        return text

    def _write_console(self, text: str) -> bool:
        """Print the report; a closed or broken stream is logged."""
        stream = self._stream or sys.stdout
        try:
            print(text, file=stream)
            stream.flush()
        except (OSError, ValueError) as e:
            logger.warning("report_echo_failed", error=str(e))
            return False
        return True

    def _write_file(self, text: str) -> bool:
        """Best-effort write of the full report."""
        try:
            with open(self.output_path, "w", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            logger.warning(
                "report_write_failed",
                path=str(self.output_path),
                error=str(e),
            )
            return False

        logger.info(
            "report_written",
            path=str(self.output_path),
            schema=self.formatter.schema_name,
        )
        return True
