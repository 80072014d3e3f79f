"""Single-user task planner: automatic slot placement and workload-based assignment."""

__version__ = "0.1.0"
