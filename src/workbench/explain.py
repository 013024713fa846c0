"""Read-only view model over an execution plan document."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from dal.query_result import ExplainResult

SLOW_NODE_TYPES = ("Seq Scan", "Sort", "Hash Join", "Nested Loop")
FAST_NODE_TYPES = ("Index Scan", "Index Only Scan", "Bitmap Index Scan")

EXPENSIVE_COST_PERCENT = 50.0


def format_duration(ms: Optional[float]) -> str:
    """Render milliseconds as µs, ms or s with two decimals."""
    if ms is None:
        return "N/A"
    if ms < 1:
        return f"{ms * 1000:.2f} µs"
    if ms < 1000:
        return f"{ms:.2f} ms"
    return f"{ms / 1000:.2f} s"


def format_count(value: Optional[float]) -> str:
    if value is None:
        return "N/A"
    if isinstance(value, float) and not value.is_integer():
        return f"{value:,}"
    return f"{int(value):,}"


def node_speed(node_type: str) -> str:
    """Coarse speed class of a plan node: "slow", "fast" or "neutral"."""
    if any(name in node_type for name in SLOW_NODE_TYPES):
        return "slow"
    if any(name in node_type for name in FAST_NODE_TYPES):
        return "fast"
    return "neutral"


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


@dataclass
class PlanNodeView:
    """Display fields of one plan node."""

    node_type: str
    total_cost: float
    startup_cost: Optional[float] = None
    plan_rows: Optional[float] = None
    relation_name: Optional[str] = None
    alias: Optional[str] = None
    index_name: Optional[str] = None
    actual_total_time: Optional[float] = None
    actual_rows: Optional[float] = None
    shared_blocks: int = 0
    filter: Optional[str] = None
    index_condition: Optional[str] = None
    cost_percent: float = 0.0
    children: List["PlanNodeView"] = field(default_factory=list)

    @property
    def is_expensive(self) -> bool:
        return self.cost_percent > EXPENSIVE_COST_PERCENT

    @property
    def speed(self) -> str:
        return node_speed(self.node_type)

    @property
    def time_label(self) -> str:
        return format_duration(self.actual_total_time)

    @property
    def rows_label(self) -> str:
        return format_count(self.actual_rows)

    @property
    def relation_label(self) -> Optional[str]:
        if not self.relation_name:
            return None
        if self.alias and self.alias != self.relation_name:
            return f"{self.relation_name} ({self.alias})"
        return self.relation_name

    def walk(self):
        """Yield this node and its descendants depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()


def _build_node(node: Dict[str, Any], max_cost: float) -> PlanNodeView:
    total_cost = _number(node.get("Total Cost")) or 0.0
    cost_percent = (total_cost / max_cost) * 100 if max_cost > 0 else 0.0
    blocks = (_number(node.get("Shared Hit Blocks")) or 0) + (
        _number(node.get("Shared Read Blocks")) or 0
    )
    children = [
        _build_node(child, max_cost)
        for child in node.get("Plans") or []
        if isinstance(child, dict)
    ]
    return PlanNodeView(
        node_type=str(node.get("Node Type", "Unknown")),
        total_cost=total_cost,
        startup_cost=_number(node.get("Startup Cost")),
        plan_rows=_number(node.get("Plan Rows")),
        relation_name=node.get("Relation Name"),
        alias=node.get("Alias"),
        index_name=node.get("Index Name"),
        actual_total_time=_number(node.get("Actual Total Time")),
        actual_rows=_number(node.get("Actual Rows")),
        shared_blocks=int(blocks),
        filter=node.get("Filter"),
        index_condition=node.get("Index Cond"),
        cost_percent=cost_percent,
        children=children,
    )


@dataclass
class PlanSummary:
    """Header figures plus the node tree of an explained statement."""

    planning_time: str
    execution_time: str
    total_cost: str
    root: PlanNodeView


def summarize_plan(result: ExplainResult) -> Optional[PlanSummary]:
    """Build the plan view, or None when the document holds no plan."""
    plan = result.plan
    if not isinstance(plan, list) or not plan or not isinstance(plan[0], dict):
        return None
    root = plan[0].get("Plan")
    if not isinstance(root, dict):
        return None

    max_cost = _number(root.get("Total Cost")) or 0.0
    return PlanSummary(
        planning_time=format_duration(result.planning_time),
        execution_time=format_duration(result.execution_time),
        total_cost=f"{result.total_cost:.2f}" if result.total_cost else "N/A",
        root=_build_node(root, max_cost),
    )
