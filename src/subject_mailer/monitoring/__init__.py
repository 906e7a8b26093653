"""Monitoring and metrics instrumentation for Subject Mailer.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from subject_mailer.monitoring.metrics import (
    classifications_total,
    drafts_total,
    llm_latency_seconds,
    llm_tokens_total,
    validation_failures_total,
)

__all__ = [
    "validation_failures_total",
    "classifications_total",
    "drafts_total",
    "llm_latency_seconds",
    "llm_tokens_total",
]
