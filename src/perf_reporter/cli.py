"""
Command Line Interface.

    perf-reporter run        Run the scenario matrix and write the report
    perf-reporter summarize  Summarize an existing report file
    perf-reporter version    Print the package version
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from perf_reporter import __version__, configure_logging
from perf_reporter.adapters.in_memory_store import InMemoryObjectStore
from perf_reporter.benchmark.runner import BenchmarkRunner
from perf_reporter.collector.metrics_collector import RequestMetricsCollector
from perf_reporter.collector.scenario_context import ScenarioContext
from perf_reporter.config.loader import apply_overrides, load_config
from perf_reporter.config.models import ReporterConfig
from perf_reporter.dispatch.call_dispatcher import InstrumentedDispatcher
from perf_reporter.registry.monitoring_registry import MonitoringRegistry
from perf_reporter.resilience.retry import RetryConfig

app = typer.Typer(help="Request latency collection and JSON reporting")

# stdout carries the report; human-facing messages go to stderr
console = Console(stderr=True)


def _build_config(
    config_path: Optional[Path],
    profile: Optional[str],
    overrides: Dict[str, Any],
) -> ReporterConfig:
    if config_path is not None:
        config = load_config(config_path, profile)
    else:
        config = ReporterConfig()
    return apply_overrides(config, overrides) if overrides else config


@app.command()
def version() -> None:
    """Print the package version."""
    print(__version__)


@app.command()
def run(
    region: Optional[str] = typer.Option(None, "--region", help="Region label"),
    az_id: Optional[str] = typer.Option(
        None, "--az-id", help="Availability zone id for express buckets"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", exists=True, dir_okay=False, help="YAML config file"
    ),
    profile: Optional[str] = typer.Option(None, "--profile", help="Config profile"),
    output: Optional[Path] = typer.Option(None, "--output", help="Report file path"),
    schema: Optional[str] = typer.Option(
        None, "--schema", help="Report schema: results or perf-results"
    ),
    operations: Optional[List[str]] = typer.Option(
        None, "--operation", "-o", help="Record only these operations"
    ),
    latency_ms: float = typer.Option(
        0.0, "--latency-ms", min=0.0, help="Simulated store latency"
    ),
    attempts: int = typer.Option(1, "--attempts", min=1, help="Attempts per call"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Run the object store scenario matrix against the in-memory store."""
    configure_logging(logging.DEBUG if verbose else logging.WARNING)

    overrides: Dict[str, Any] = {}
    if region:
        overrides.setdefault("benchmark", {})["region"] = region
    if az_id:
        overrides.setdefault("benchmark", {})["availability_zone_id"] = az_id
    if output:
        overrides.setdefault("report", {})["output_path"] = str(output)
    if schema:
        overrides.setdefault("report", {})["schema"] = schema
    if operations:
        overrides.setdefault("collection", {})["operations"] = list(operations)

    if profile and config_path is None:
        raise typer.BadParameter(
            "a profile overlays a config file; pass --config as well",
            param_hint="'--profile'",
        )
    try:
        config = _build_config(config_path, profile, overrides)
    except (OSError, ValueError) as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(code=2)

    context = ScenarioContext()
    registry = MonitoringRegistry()
    registry.register(
        "json",
        lambda: RequestMetricsCollector.from_config(config, context=context),
    )
    dispatcher = InstrumentedDispatcher(
        registry.create_instances(),
        retry_config=RetryConfig(max_attempts=attempts),
        latency_metric_key=config.collection.latency_metric_key,
    )
    store = InMemoryObjectStore(latency_seconds=latency_ms / 1000.0)
    runner = BenchmarkRunner(
        store,
        dispatcher,
        context,
        availability_zone_id=config.benchmark.availability_zone_id,
        object_key=config.benchmark.object_key,
    )

    console.print(
        f"[blue]Running {len(config.benchmark.matrix)} scenarios "
        f"in {config.benchmark.region}[/blue]"
    )
    try:
        results = runner.run_matrix(config.benchmark.matrix)
    finally:
        registry.shutdown()

    failed = [r for r in results if not r.passed]
    for r in failed:
        console.print(
            f"[red]Scenario failed: Size={r.scenario.size_label}, "
            f"BucketType={r.scenario.bucket_type}[/red]"
        )
    console.print(
        f"[green]All tests completed. Results saved to "
        f"{config.report.output_path}[/green]"
    )
    if failed:
        raise typer.Exit(code=1)


def summarize_report(document: Dict[str, Any]) -> Dict[str, Dict[str, float]]:
    """
    Per-name statistics for a report in either schema.

    Returns:
        Dict of name -> count, mean, min, max
    """
    values: Dict[str, List[float]] = {}
    if "results" in document:
        for entry in document["results"]:
            values.setdefault(entry["name"], []).extend(entry["measurements"])
    elif "perf-results" in document:
        for entry in document["perf-results"]:
            values.setdefault(entry["name"], []).append(entry["durationMs"])
    else:
        raise ValueError("report has neither 'results' nor 'perf-results'")

    return {
        name: {
            "count": len(samples),
            "mean": sum(samples) / len(samples),
            "min": min(samples),
            "max": max(samples),
        }
        for name, samples in values.items()
        if samples
    }


@app.command()
def summarize(
    report_path: Path = typer.Argument(..., help="Report JSON file"),
) -> None:
    """Print per-metric statistics for a report file."""
    try:
        document = json.loads(report_path.read_text(encoding="utf-8"))
        summary = summarize_report(document)
    except (OSError, ValueError, KeyError) as e:
        console.print(f"[red]Cannot summarize {report_path}: {e}[/red]")
        raise typer.Exit(code=1)

    table = Table(title=str(report_path))
    table.add_column("Metric")
    table.add_column("Count", justify="right")
    table.add_column("Mean (ms)", justify="right")
    table.add_column("Min (ms)", justify="right")
    table.add_column("Max (ms)", justify="right")
    for name, stats in summary.items():
        table.add_row(
            name,
            str(stats["count"]),
            f"{stats['mean']:.2f}",
            f"{stats['min']:.2f}",
            f"{stats['max']:.2f}",
        )
    Console().print(table)


if __name__ == "__main__":
    app()
