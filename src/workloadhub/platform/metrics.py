"""
WorkloadHub Prometheus metrics.

Exposed through the ASGI app mounted at /metrics.
"""

from prometheus_client import Counter

OVERRIDE_MUTATIONS = Counter(
    "workloadhub_override_mutations_total",
    "Capacity override set/reset operations",
    ["operation", "outcome"],
)

BOARD_FETCH_FAILURES = Counter(
    "workloadhub_board_fetch_failures_total",
    "Failed calls to the project board API",
    ["operation"],
)
