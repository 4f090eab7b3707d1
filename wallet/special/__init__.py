"""
특수 항목 모듈

Debt / Investment / SavingsGoal Handler와 레지스트리.
"""

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.types import EntityType
from wallet.special.base import SpecialEntityHandler
from wallet.special.debt import DebtHandler
from wallet.special.goal import GoalHandler
from wallet.special.investment import InvestmentHandler


def build_handlers(db: SQLiteAdapter) -> dict[EntityType, SpecialEntityHandler]:
    """항목 종류별 Handler 생성"""
    handlers: list[SpecialEntityHandler] = [
        DebtHandler(db),
        InvestmentHandler(db),
        GoalHandler(db),
    ]
    return {handler.entity_type: handler for handler in handlers}


__all__ = [
    "SpecialEntityHandler",
    "DebtHandler",
    "InvestmentHandler",
    "GoalHandler",
    "build_handlers",
]
