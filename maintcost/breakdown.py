"""Dataclasses making up the cost analytics report."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .status import Category

MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass
class CostTotals:
    """Cost sums per category over the full event history."""

    all: float = 0.0
    service: float = 0.0
    registration: float = 0.0
    insurance: float = 0.0
    issues: float = 0.0

    def get(self, category: Category) -> float:
        return getattr(self, category.value)

    def to_dict(self) -> Dict[str, float]:
        return {
            "all": self.all,
            "service": self.service,
            "registration": self.registration,
            "insurance": self.insurance,
            "issues": self.issues,
        }


@dataclass
class MonthlyBreakdown:
    """Cost sums for one calendar month."""

    month: str
    year: int
    month_number: int
    service: float = 0.0
    registration: float = 0.0
    insurance: float = 0.0
    issues: float = 0.0
    total: float = 0.0

    def add(self, category: Category, amount: float) -> None:
        setattr(self, category.value, getattr(self, category.value) + amount)
        self.total += amount

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "year": self.year,
            "monthNumber": self.month_number,
            "service": self.service,
            "registration": self.registration,
            "insurance": self.insurance,
            "issues": self.issues,
            "total": self.total,
        }


@dataclass
class CategoryBreakdown:
    name: str
    value: float
    percentage: float
    color: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "value": self.value,
            "percentage": self.percentage,
            "color": self.color,
        }


@dataclass
class YearlyTrend:
    year: int
    total: float = 0.0
    service: float = 0.0
    registration: float = 0.0
    insurance: float = 0.0
    issues: float = 0.0
    average_monthly: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "total": self.total,
            "service": self.service,
            "registration": self.registration,
            "insurance": self.insurance,
            "issues": self.issues,
            "averageMonthly": self.average_monthly,
        }


@dataclass
class Averages:
    monthly_average: float = 0.0
    service_average: float = 0.0
    issue_average: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {
            "monthlyAverage": self.monthly_average,
            "serviceAverage": self.service_average,
            "issueAverage": self.issue_average,
        }


@dataclass
class Projections:
    next_month_estimate: float = 0.0
    next_quarter_estimate: float = 0.0
    year_end_estimate: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {
            "nextMonthEstimate": self.next_month_estimate,
            "nextQuarterEstimate": self.next_quarter_estimate,
            "yearEndEstimate": self.year_end_estimate,
        }


@dataclass
class TopExpense:
    """A cost-bearing event in the top-expenses ranking."""

    id: str
    type: str
    date: Optional[datetime]
    description: str
    amount: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "date": self.date.isoformat() if self.date else None,
            "description": self.description,
            "amount": self.amount,
        }


@dataclass
class CostComparison:
    """Period-over-period change of the monthly totals."""

    period: str
    current: float
    previous: float
    change: float
    change_percentage: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period": self.period,
            "current": self.current,
            "previous": self.previous,
            "change": self.change,
            "changePercentage": self.change_percentage,
        }


@dataclass
class CostAnalytics:
    """
    Complete cost analytics report for one vehicle.

    cost_per_km is None when no odometer reading exists; it is then left out
    of to_dict() entirely, which is distinct from a zero cost.
    """

    total_costs: CostTotals
    monthly_costs: List[MonthlyBreakdown]
    category_breakdown: List[CategoryBreakdown]
    yearly_trends: List[YearlyTrend]
    averages: Averages
    projections: Projections
    cost_per_km: Optional[float] = None
    cost_per_day: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "totalCosts": self.total_costs.to_dict(),
            "monthlyCosts": [m.to_dict() for m in self.monthly_costs],
            "categoryBreakdown": [c.to_dict() for c in self.category_breakdown],
            "yearlyTrends": [y.to_dict() for y in self.yearly_trends],
            "averages": self.averages.to_dict(),
            "projections": self.projections.to_dict(),
        }
        if self.cost_per_km is not None:
            data["costPerKm"] = self.cost_per_km
        if self.cost_per_day is not None:
            data["costPerDay"] = self.cost_per_day
        return data


@dataclass
class CostReport:
    """Analytics plus the caller-parameterized comparison and ranking."""

    analytics: CostAnalytics
    comparison: CostComparison
    top_expenses: List[TopExpense] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "analytics": self.analytics.to_dict(),
            "comparison": self.comparison.to_dict(),
            "topExpenses": [e.to_dict() for e in self.top_expenses],
        }
