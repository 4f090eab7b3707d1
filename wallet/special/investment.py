"""
Investment Handler

투자 저장 및 인출 / 적립 반영.
"""

import logging
import uuid
from datetime import datetime
from decimal import Decimal

from core.constants import ZERO
from core.errors import InsufficientFundsError
from core.types import EntityType, InvestmentType
from wallet.special.base import SpecialEntityHandler
from wallet.special.models import Investment

logger = logging.getLogger(__name__)


class InvestmentHandler(SpecialEntityHandler):
    """Investment Handler"""

    @property
    def entity_type(self) -> EntityType:
        return EntityType.INVESTMENT

    async def create(
        self,
        user_id: str,
        name: str,
        initial_amount: Decimal,
        investment_type: InvestmentType = InvestmentType.OTHER,
        current_value: Decimal | None = None,
        rate_per_annum: Decimal = ZERO,
        symbol: str | None = None,
        purchase_date: datetime | None = None,
        notes: str | None = None,
    ) -> Investment:
        """투자 생성 (current_value 미지정 시 initial_amount)"""
        now = self.now()
        investment = Investment(
            investment_id=f"inv-{uuid.uuid4().hex[:12]}",
            user_id=user_id,
            name=name,
            investment_type=investment_type,
            initial_amount=initial_amount,
            current_value=(
                initial_amount if current_value is None else current_value
            ),
            rate_per_annum=rate_per_annum,
            created_at=now,
            updated_at=now,
            symbol=symbol,
            purchase_date=purchase_date or now,
            notes=notes,
        )

        async with self.db.transaction():
            await self.db.execute(
                """
                INSERT INTO investment (
                    investment_id, user_id, name, investment_type, symbol,
                    initial_amount, current_value, rate_per_annum,
                    purchase_date, notes, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    investment.investment_id,
                    investment.user_id,
                    investment.name,
                    investment.investment_type.value,
                    investment.symbol,
                    str(investment.initial_amount),
                    str(investment.current_value),
                    str(investment.rate_per_annum),
                    investment.purchase_date.isoformat()
                    if investment.purchase_date
                    else None,
                    investment.notes,
                    now.isoformat(),
                    now.isoformat(),
                ),
            )

        logger.info(
            f"Investment created: {investment.investment_id}",
            extra={"user_id": user_id, "value": str(investment.current_value)},
        )
        return investment

    async def load(self, user_id: str, entity_id: str) -> Investment | None:
        row = await self.db.fetchone_dict(
            "SELECT * FROM investment WHERE user_id = ? AND investment_id = ?",
            (user_id, entity_id),
        )
        return Investment.from_row(row) if row else None

    async def apply_withdrawal(self, entity: Investment, amount: Decimal) -> None:
        if entity.current_value < amount:
            raise InsufficientFundsError(
                source=f"investment {entity.investment_id}",
                available=entity.current_value,
                requested=amount,
            )

        entity.current_value -= amount
        await self._save_value(entity)

        logger.info(
            f"Investment withdrawn: {entity.investment_id}",
            extra={"amount": str(amount), "value": str(entity.current_value)},
        )

    async def apply_contribution(
        self,
        entity: Investment,
        amount: Decimal,
        note: str | None = None,
    ) -> None:
        entity.current_value += amount
        await self._save_value(entity)

        logger.info(
            f"Investment contributed: {entity.investment_id}",
            extra={"amount": str(amount), "value": str(entity.current_value)},
        )

    async def _save_value(self, entity: Investment) -> None:
        entity.updated_at = self.now()
        await self.db.execute(
            """
            UPDATE investment SET current_value = ?, updated_at = ?
            WHERE investment_id = ? AND user_id = ?
            """,
            (
                str(entity.current_value),
                entity.updated_at.isoformat(),
                entity.investment_id,
                entity.user_id,
            ),
        )
