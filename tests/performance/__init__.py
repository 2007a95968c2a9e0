"""
Performance Tests - Concurrency Stress for the Collector.
"""
