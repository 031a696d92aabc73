"""
Utility modules for the row validation tool

Provides:
- logging: Structured logging setup
- metrics: Prometheus metrics publishing
- tracing: OpenTelemetry tracing helpers
"""

__version__ = "1.0.0"
__all__ = ["logging", "metrics", "tracing"]
