"""Incremental gallery build pipeline.

scan -> cache lookup -> plan -> execute pending -> order -> encode
"""

from .artifact import marshal_page, unmarshal_page
from .cache import CacheStore
from .executor import ExecutionReport, execute_pending, resolve_worker_count
from .orchestrator import BuildResult, build_gallery, load_previous_artifact
from .ordering import order_items
from .planner import WorkPlan, plan_work
from .scanner import scan_directory

__all__ = [
    "BuildResult",
    "CacheStore",
    "ExecutionReport",
    "WorkPlan",
    "build_gallery",
    "execute_pending",
    "load_previous_artifact",
    "marshal_page",
    "order_items",
    "plan_work",
    "resolve_worker_count",
    "scan_directory",
    "unmarshal_page",
]
