"""
특수 항목 Handler 기본 클래스

Debt / Investment / SavingsGoal이 구현해야 할 인터페이스 정의.
TransferEngine은 이 인터페이스에만 의존.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.errors import EntityNotFoundError
from core.types import EntityType


class SpecialEntityHandler(ABC):
    """특수 항목 Handler 추상 클래스

    각 항목 종류별로 이 클래스를 상속하여 구현.
    모든 조회는 user_id로 필터링 (다른 사용자의 항목은 None).
    쓰기는 호출자의 트랜잭션 안에서 수행 (커밋하지 않음).

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    @property
    @abstractmethod
    def entity_type(self) -> EntityType:
        """처리하는 항목 종류"""
        pass

    @abstractmethod
    async def load(self, user_id: str, entity_id: str) -> Any | None:
        """항목 조회

        Args:
            user_id: 사용자 ID
            entity_id: 항목 ID

        Returns:
            항목 레코드 또는 None
        """
        pass

    @abstractmethod
    async def apply_withdrawal(self, entity: Any, amount: Decimal) -> None:
        """항목에서 인출 반영

        Raises:
            InsufficientFundsError: 항목 잔액 부족 (해당되는 종류만)
        """
        pass

    @abstractmethod
    async def apply_contribution(
        self,
        entity: Any,
        amount: Decimal,
        note: str | None = None,
    ) -> None:
        """항목으로 적립 / 상환 반영"""
        pass

    async def require(self, user_id: str, entity_id: str) -> Any:
        """항목 조회 (없으면 예외)

        Raises:
            EntityNotFoundError: 항목 없음
        """
        entity = await self.load(user_id, entity_id)
        if entity is None:
            raise EntityNotFoundError(self.entity_type.value, entity_id)
        return entity

    @staticmethod
    def now() -> datetime:
        return datetime.now(timezone.utc)
