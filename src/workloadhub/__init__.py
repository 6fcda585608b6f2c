"""
WorkloadHub - Sprint Workload and Capacity Dashboard Backend

This package contains the WorkloadHub backend services:
- engine: Workload Aggregation Engine (group filter, subitem dedup,
  effort aggregation, capacity overrides)
- board: monday.com board client (tasks and groups)
- storage: Team roster and capacity override persistence
- api: FastAPI REST endpoints
- platform: Cross-cutting concerns (config, logging)
"""

__version__ = "0.1.0"
