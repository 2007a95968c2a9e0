from perf_reporter.cli import app

app(prog_name="perf-reporter")
