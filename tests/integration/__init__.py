"""
Integration Tests - Collector, Dispatcher and Runner Together.
"""
