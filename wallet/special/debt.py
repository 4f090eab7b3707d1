"""
Debt Handler

부채 저장 및 인출 / 상환 반영.
인출은 신용한도 차입으로 취급해 잔액 검사 없이 current_balance 증가.
"""

import logging
import uuid
from datetime import datetime
from decimal import Decimal

from core.constants import ZERO
from core.types import DebtType, EntityType
from wallet.special.base import SpecialEntityHandler
from wallet.special.models import Debt, DebtPayment

logger = logging.getLogger(__name__)


class DebtHandler(SpecialEntityHandler):
    """Debt Handler"""

    @property
    def entity_type(self) -> EntityType:
        return EntityType.DEBT

    async def create(
        self,
        user_id: str,
        name: str,
        original_amount: Decimal,
        debt_type: DebtType = DebtType.OTHER,
        current_balance: Decimal | None = None,
        interest_rate: Decimal = ZERO,
        minimum_payment: Decimal = ZERO,
        due_date: datetime | None = None,
    ) -> Debt:
        """부채 생성

        current_balance 미지정 시 original_amount로 시작.
        """
        now = self.now()
        debt = Debt(
            debt_id=f"debt-{uuid.uuid4().hex[:12]}",
            user_id=user_id,
            name=name,
            debt_type=debt_type,
            original_amount=original_amount,
            current_balance=(
                original_amount if current_balance is None else current_balance
            ),
            interest_rate=interest_rate,
            minimum_payment=minimum_payment,
            created_at=now,
            updated_at=now,
            due_date=due_date,
        )

        async with self.db.transaction():
            await self.db.execute(
                """
                INSERT INTO debt (
                    debt_id, user_id, name, debt_type,
                    original_amount, current_balance, interest_rate,
                    minimum_payment, due_date, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    debt.debt_id,
                    debt.user_id,
                    debt.name,
                    debt.debt_type.value,
                    str(debt.original_amount),
                    str(debt.current_balance),
                    str(debt.interest_rate),
                    str(debt.minimum_payment),
                    debt.due_date.isoformat() if debt.due_date else None,
                    now.isoformat(),
                    now.isoformat(),
                ),
            )

        logger.info(
            f"Debt created: {debt.debt_id}",
            extra={"user_id": user_id, "balance": str(debt.current_balance)},
        )
        return debt

    async def load(self, user_id: str, entity_id: str) -> Debt | None:
        row = await self.db.fetchone_dict(
            "SELECT * FROM debt WHERE user_id = ? AND debt_id = ?",
            (user_id, entity_id),
        )
        if row is None:
            return None

        debt = Debt.from_row(row)
        rows = await self.db.fetchall_dict(
            """
            SELECT * FROM debt_payment
            WHERE debt_id = ?
            ORDER BY id
            """,
            (entity_id,),
        )
        debt.payments = [DebtPayment.from_row(r) for r in rows]
        return debt

    async def apply_withdrawal(self, entity: Debt, amount: Decimal) -> None:
        entity.current_balance += amount
        await self._save_balance(entity)

        logger.info(
            f"Debt increased: {entity.debt_id}",
            extra={"amount": str(amount), "balance": str(entity.current_balance)},
        )

    async def apply_contribution(
        self,
        entity: Debt,
        amount: Decimal,
        note: str | None = None,
    ) -> None:
        # 이자 분리 없이 전액 원금 상환으로 기록
        payment = DebtPayment(
            amount=amount,
            date=self.now(),
            principal_paid=amount,
            interest_paid=ZERO,
        )
        entity.current_balance -= amount
        entity.payments.append(payment)

        await self._save_balance(entity)
        await self.db.execute(
            """
            INSERT INTO debt_payment (
                debt_id, amount, payment_date, principal_paid, interest_paid
            ) VALUES (?, ?, ?, ?, ?)
            """,
            (
                entity.debt_id,
                str(payment.amount),
                payment.date.isoformat(),
                str(payment.principal_paid),
                str(payment.interest_paid),
            ),
        )

        logger.info(
            f"Debt paid: {entity.debt_id}",
            extra={"amount": str(amount), "balance": str(entity.current_balance)},
        )

    async def _save_balance(self, entity: Debt) -> None:
        entity.updated_at = self.now()
        await self.db.execute(
            """
            UPDATE debt SET current_balance = ?, updated_at = ?
            WHERE debt_id = ? AND user_id = ?
            """,
            (
                str(entity.current_balance),
                entity.updated_at.isoformat(),
                entity.debt_id,
                entity.user_id,
            ),
        )
