"""
Unit Tests - Testing Individual Components in Isolation.

Test Files:
    - test_metric_record.py: Record construction and invariants
    - test_metrics_collector.py: Hooks, filtering, context tagging
    - test_json_reporter.py: Report sinks and empty-run silence
    - test_formatters.py: Output schemas
    - test_config_loader.py: Configuration loading/validation
"""
