"""
특수 항목 레코드

Debt, Investment, SavingsGoal 및 이력 행.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

from core.types import DebtType, GoalStatus, InvestmentType


def _parse_ts(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def _format_ts(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


@dataclass
class DebtPayment:
    """부채 상환 이력"""

    amount: Decimal
    date: datetime
    principal_paid: Decimal
    interest_paid: Decimal

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "DebtPayment":
        return cls(
            amount=Decimal(row["amount"]),
            date=datetime.fromisoformat(row["payment_date"]),
            principal_paid=Decimal(row["principal_paid"]),
            interest_paid=Decimal(row["interest_paid"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "amount": str(self.amount),
            "date": self.date.isoformat(),
            "principal_paid": str(self.principal_paid),
            "interest_paid": str(self.interest_paid),
        }


@dataclass
class Debt:
    """부채

    current_balance는 남은 상환액. 기여 시 감소, 인출 시 증가.
    """

    debt_id: str
    user_id: str
    name: str
    debt_type: DebtType
    original_amount: Decimal
    current_balance: Decimal
    interest_rate: Decimal
    minimum_payment: Decimal
    created_at: datetime
    updated_at: datetime
    due_date: datetime | None = None
    payments: list[DebtPayment] = field(default_factory=list)

    @property
    def balance(self) -> Decimal:
        return self.current_balance

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Debt":
        return cls(
            debt_id=row["debt_id"],
            user_id=row["user_id"],
            name=row["name"],
            debt_type=DebtType(row["debt_type"]),
            original_amount=Decimal(row["original_amount"]),
            current_balance=Decimal(row["current_balance"]),
            interest_rate=Decimal(row["interest_rate"]),
            minimum_payment=Decimal(row["minimum_payment"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
            due_date=_parse_ts(row.get("due_date")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "debt_id": self.debt_id,
            "user_id": self.user_id,
            "name": self.name,
            "debt_type": self.debt_type.value,
            "original_amount": str(self.original_amount),
            "current_balance": str(self.current_balance),
            "interest_rate": str(self.interest_rate),
            "minimum_payment": str(self.minimum_payment),
            "due_date": _format_ts(self.due_date),
            "payments": [p.to_dict() for p in self.payments],
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


@dataclass
class Investment:
    """투자 (current_value가 잔액)"""

    investment_id: str
    user_id: str
    name: str
    investment_type: InvestmentType
    initial_amount: Decimal
    current_value: Decimal
    rate_per_annum: Decimal
    created_at: datetime
    updated_at: datetime
    symbol: str | None = None
    purchase_date: datetime | None = None
    notes: str | None = None

    @property
    def balance(self) -> Decimal:
        return self.current_value

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Investment":
        return cls(
            investment_id=row["investment_id"],
            user_id=row["user_id"],
            name=row["name"],
            investment_type=InvestmentType(row["investment_type"]),
            initial_amount=Decimal(row["initial_amount"]),
            current_value=Decimal(row["current_value"]),
            rate_per_annum=Decimal(row["rate_per_annum"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
            symbol=row.get("symbol"),
            purchase_date=_parse_ts(row.get("purchase_date")),
            notes=row.get("notes"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "investment_id": self.investment_id,
            "user_id": self.user_id,
            "name": self.name,
            "investment_type": self.investment_type.value,
            "symbol": self.symbol,
            "initial_amount": str(self.initial_amount),
            "current_value": str(self.current_value),
            "rate_per_annum": str(self.rate_per_annum),
            "purchase_date": _format_ts(self.purchase_date),
            "notes": self.notes,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


@dataclass
class GoalContribution:
    """저축 목표 적립 이력 (인출은 음수 금액)"""

    amount: Decimal
    date: datetime
    note: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "GoalContribution":
        return cls(
            amount=Decimal(row["amount"]),
            date=datetime.fromisoformat(row["contribution_date"]),
            note=row.get("note"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "amount": str(self.amount),
            "date": self.date.isoformat(),
            "note": self.note,
        }


@dataclass
class SavingsGoal:
    """저축 목표 (current_amount가 잔액)"""

    goal_id: str
    user_id: str
    title: str
    target_amount: Decimal
    current_amount: Decimal
    status: GoalStatus
    created_at: datetime
    updated_at: datetime
    deadline: datetime | None = None
    contributions: list[GoalContribution] = field(default_factory=list)

    @property
    def balance(self) -> Decimal:
        return self.current_amount

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "SavingsGoal":
        return cls(
            goal_id=row["goal_id"],
            user_id=row["user_id"],
            title=row["title"],
            target_amount=Decimal(row["target_amount"]),
            current_amount=Decimal(row["current_amount"]),
            status=GoalStatus(row["status"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
            deadline=_parse_ts(row.get("deadline")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "goal_id": self.goal_id,
            "user_id": self.user_id,
            "title": self.title,
            "target_amount": str(self.target_amount),
            "current_amount": str(self.current_amount),
            "status": self.status.value,
            "deadline": _format_ts(self.deadline),
            "contributions": [c.to_dict() for c in self.contributions],
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
