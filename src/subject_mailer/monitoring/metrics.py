"""Custom Prometheus metrics for Subject Mailer.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules worth configuring:
- classifications_total{outcome!="success"} (provider or model output problems)
- drafts_total{source="fallback"} (drafting degraded to templates)
"""

from prometheus_client import Counter, Histogram

# === Validation Metrics ===

validation_failures_total = Counter(
    "validation_failures_total",
    "Total validation failures by gate and error type",
    ["stage", "error_type"],
)
"""
Validation failures counter.

Labels:
- stage: subject_input (user input gate), analysis_output (model output gate)
- error_type: not_a_string, not_an_object, schema_violation
"""

# === Assistant Metrics ===

classifications_total = Counter(
    "classifications_total",
    "Subject classifications by outcome",
    ["outcome"],
)
"""
Labels:
- outcome: success, empty_response, malformed_output, validation_error, provider_error
"""

drafts_total = Counter(
    "drafts_total",
    "Drafted emails by text source",
    ["source", "mode"],
)
"""
Labels:
- source: llm, fallback
- mode: single, stream
"""

# === LLM Performance Metrics ===

llm_latency_seconds = Histogram(
    "llm_latency_seconds",
    "LLM generation latency in seconds",
    ["model", "success"],
    buckets=[0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
)

llm_tokens_total = Counter(
    "llm_tokens_total",
    "Total tokens consumed by model and type",
    ["model", "token_type"],
)
"""
Labels:
- model: Model name
- token_type: prompt (input tokens), completion (output tokens)
"""
