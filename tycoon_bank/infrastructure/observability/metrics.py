"""Prometheus metrics for risk outcomes, NPC generation and simulation cost"""

from prometheus_client import Counter, Histogram

# Risk metrics
risk_evaluation_counter = Counter(
    "tycoon_bank_risk_evaluations_total",
    "Default probability evaluations",
    ["recommendation"],  # APPROVE | REVIEW | DENY
)

risk_tier_counter = Counter(
    "tycoon_bank_risk_tier_total",
    "Evaluated borrowers by risk tier",
    ["tier"],
)

# Generation metrics
applicants_generated_counter = Counter(
    "tycoon_bank_applicants_generated_total",
    "NPC loan applicants generated",
    ["tier"],
)

depositors_generated_counter = Counter(
    "tycoon_bank_depositors_generated_total",
    "NPC depositors generated",
    ["customer_type"],
)

# Simulation metrics
simulation_duration_histogram = Histogram(
    "tycoon_bank_simulation_duration_seconds",
    "Portfolio Monte Carlo wall time",
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_risk_evaluation(recommendation: str, risk_tier: str) -> None:
    """Record recommendation and tier distribution of evaluated borrowers"""
    risk_evaluation_counter.labels(recommendation=recommendation).inc()
    risk_tier_counter.labels(tier=risk_tier).inc()


def record_generated_applicants(tiers: list[str]) -> None:
    for tier in tiers:
        applicants_generated_counter.labels(tier=tier).inc()


def record_generated_depositors(customer_types: list[str]) -> None:
    for customer_type in customer_types:
        depositors_generated_counter.labels(customer_type=customer_type).inc()
