"""Employee production and sell-through scoring."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .models import ProductionEntry, WasteEntry

DEFAULT_PAR_TARGET = 150
DEFAULT_CATEGORY_COUNT = 5

_STATUS_ORDER = {"undercooking": 0, "overcooking": 1, "good": 2}


@dataclass
class EmployeePerformance:
    employee_name: str
    production_score: int  # % of par target cooked
    sell_through_rate: int  # % of cooked that sold
    category_coverage: int  # % of menu sections cooked
    total_cooked: int
    total_sold: int
    total_wasted: int
    status: str  # "good" | "undercooking" | "overcooking"
    issues: list[str] = field(default_factory=list)


def _percent(part: float, whole: float) -> int:
    if whole <= 0:
        return 0
    return math.floor(part / whole * 100 + 0.5)


def calculate_performance(
    employee_name: str,
    production_entries: list[ProductionEntry],
    waste_entries: list[WasteEntry],
    par_target: int = DEFAULT_PAR_TARGET,
    category_count: int = DEFAULT_CATEGORY_COUNT,
) -> EmployeePerformance:
    """Score one employee's production against target and waste."""
    own_production = [p for p in production_entries if p.employee_name == employee_name]
    own_waste = [w for w in waste_entries if w.employee == employee_name]

    total_cooked = sum(p.total_cooked for p in own_production)
    total_wasted = sum(w.quantity for w in own_waste)
    total_sold = total_cooked - total_wasted

    production_score = _percent(total_cooked, par_target)
    sell_through = _percent(total_sold, total_cooked)

    categories = {i.category for p in own_production for i in p.items}
    coverage = _percent(len(categories), category_count)

    status = "good"
    issues: list[str] = []

    if production_score < 80:
        status = "undercooking"
        issues.append(
            f"Only producing {production_score}% of target - needs to cook more"
        )
    elif production_score > 120:
        status = "overcooking"
        issues.append(
            f"Producing {production_score}% of target - cooking too much"
        )

    if sell_through < 60:
        status = "overcooking"
        issues.append(f"Only {sell_through}% sell-through - too much waste")
    elif sell_through > 90 and production_score < 100:
        issues.append(f"{sell_through}% sell-through suggests could cook more")

    if coverage < 70:
        issues.append(
            f"Only covering {coverage}% of categories - not enough variety"
        )

    return EmployeePerformance(
        employee_name=employee_name,
        production_score=production_score,
        sell_through_rate=sell_through,
        category_coverage=coverage,
        total_cooked=total_cooked,
        total_sold=total_sold,
        total_wasted=total_wasted,
        status=status,
        issues=issues,
    )


def rank_performances(
    performances: list[EmployeePerformance],
) -> list[EmployeePerformance]:
    """Order employees needing attention first: undercooking, overcooking, good."""
    return sorted(performances, key=lambda p: _STATUS_ORDER[p.status])


def format_performance_report(
    performances: list[EmployeePerformance], period: str = "This Week"
) -> str:
    """Format performance scores for terminal display."""
    if not performances:
        return (
            "No performance data available yet. "
            "Start tracking production and waste!"
        )

    ranked = rank_performances(performances)
    lines: list[str] = [f"Employee Performance - {period}", "=" * 60]
    for perf in ranked:
        lines.append("")
        lines.append(f"{perf.employee_name:<25} [{perf.status.upper()}]")
        lines.append(
            f"  Production: {perf.production_score:>3}%   "
            f"Sell-Through: {perf.sell_through_rate:>3}%   "
            f"Coverage: {perf.category_coverage:>3}%"
        )
        lines.append(
            f"  Cooked: {perf.total_cooked}  Sold: {perf.total_sold}  "
            f"Wasted: {perf.total_wasted}"
        )
        for issue in perf.issues:
            lines.append(f"  ⚠️ {issue}")

    lines.append("")
    lines.append("=" * 60)
    lines.append(
        f"Good: {sum(1 for p in ranked if p.status == 'good')}  "
        f"Undercooking: {sum(1 for p in ranked if p.status == 'undercooking')}  "
        f"Overcooking: {sum(1 for p in ranked if p.status == 'overcooking')}"
    )
    return "\n".join(lines)
