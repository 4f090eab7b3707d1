"""
SavingsGoal Handler

저축 목표 저장 및 인출 / 적립 반영.
적립으로 목표액 도달 시 completed, 인출로 목표액 미만이 되면 in-progress 복귀.
인출도 음수 적립 이력으로 남김.
"""

import logging
import uuid
from datetime import datetime
from decimal import Decimal

from core.constants import ZERO
from core.errors import InsufficientFundsError
from core.types import EntityType, GoalStatus
from wallet.special.base import SpecialEntityHandler
from wallet.special.models import GoalContribution, SavingsGoal

logger = logging.getLogger(__name__)


class GoalHandler(SpecialEntityHandler):
    """SavingsGoal Handler"""

    @property
    def entity_type(self) -> EntityType:
        return EntityType.GOAL

    async def create(
        self,
        user_id: str,
        title: str,
        target_amount: Decimal,
        current_amount: Decimal = ZERO,
        deadline: datetime | None = None,
    ) -> SavingsGoal:
        """저축 목표 생성"""
        now = self.now()
        goal = SavingsGoal(
            goal_id=f"goal-{uuid.uuid4().hex[:12]}",
            user_id=user_id,
            title=title,
            target_amount=target_amount,
            current_amount=current_amount,
            status=self._status_for(current_amount, target_amount),
            created_at=now,
            updated_at=now,
            deadline=deadline,
        )

        async with self.db.transaction():
            await self.db.execute(
                """
                INSERT INTO savings_goal (
                    goal_id, user_id, title, target_amount, current_amount,
                    deadline, status, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    goal.goal_id,
                    goal.user_id,
                    goal.title,
                    str(goal.target_amount),
                    str(goal.current_amount),
                    goal.deadline.isoformat() if goal.deadline else None,
                    goal.status.value,
                    now.isoformat(),
                    now.isoformat(),
                ),
            )

        logger.info(
            f"Goal created: {goal.goal_id}",
            extra={"user_id": user_id, "target": str(target_amount)},
        )
        return goal

    async def load(self, user_id: str, entity_id: str) -> SavingsGoal | None:
        row = await self.db.fetchone_dict(
            "SELECT * FROM savings_goal WHERE user_id = ? AND goal_id = ?",
            (user_id, entity_id),
        )
        if row is None:
            return None

        goal = SavingsGoal.from_row(row)
        rows = await self.db.fetchall_dict(
            """
            SELECT * FROM goal_contribution
            WHERE goal_id = ?
            ORDER BY id
            """,
            (entity_id,),
        )
        goal.contributions = [GoalContribution.from_row(r) for r in rows]
        return goal

    async def apply_withdrawal(self, entity: SavingsGoal, amount: Decimal) -> None:
        if entity.current_amount < amount:
            raise InsufficientFundsError(
                source=f"goal {entity.goal_id}",
                available=entity.current_amount,
                requested=amount,
            )

        entity.current_amount -= amount
        await self._record(entity, -amount, "withdrawal")

        logger.info(
            f"Goal withdrawn: {entity.goal_id}",
            extra={"amount": str(amount), "current": str(entity.current_amount)},
        )

    async def apply_contribution(
        self,
        entity: SavingsGoal,
        amount: Decimal,
        note: str | None = None,
    ) -> None:
        entity.current_amount += amount
        await self._record(entity, amount, note)

        logger.info(
            f"Goal contributed: {entity.goal_id}",
            extra={"amount": str(amount), "current": str(entity.current_amount)},
        )

    async def _record(
        self,
        entity: SavingsGoal,
        amount: Decimal,
        note: str | None,
    ) -> None:
        """잔액 / 상태 저장 후 이력 행 추가"""
        now = self.now()
        if entity.status != GoalStatus.ARCHIVED:
            entity.status = self._status_for(
                entity.current_amount, entity.target_amount
            )
        entity.updated_at = now

        contribution = GoalContribution(amount=amount, date=now, note=note)
        entity.contributions.append(contribution)

        await self.db.execute(
            """
            UPDATE savings_goal
            SET current_amount = ?, status = ?, updated_at = ?
            WHERE goal_id = ? AND user_id = ?
            """,
            (
                str(entity.current_amount),
                entity.status.value,
                now.isoformat(),
                entity.goal_id,
                entity.user_id,
            ),
        )
        await self.db.execute(
            """
            INSERT INTO goal_contribution (goal_id, amount, contribution_date, note)
            VALUES (?, ?, ?, ?)
            """,
            (entity.goal_id, str(amount), now.isoformat(), note),
        )

    @staticmethod
    def _status_for(current: Decimal, target: Decimal) -> GoalStatus:
        if current >= target:
            return GoalStatus.COMPLETED
        return GoalStatus.IN_PROGRESS
