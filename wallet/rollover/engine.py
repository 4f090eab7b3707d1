"""
월말 정산 엔진

CURRENT 잔액을 0으로 만들고 차액을 MAIN과 정산.
- 잔액 0: 정산 시각만 기록
- 잉여 (> 0): CURRENT → MAIN deposit 이체
- 부족 (< 0): MAIN → CURRENT borrow 이체 (반환 금액은 음수 유지)

같은 기간 중복 실행 방지는 호출자 (스케줄러) 책임.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import ZERO
from core.errors import AccountsNotFoundError, LedgerError
from core.ledger import LedgerStore
from core.types import (
    AccountCategory,
    TransactionDirection,
    TransferEndpoint,
    TransferKind,
    TransferType,
)
from wallet.balance import BalanceSynchronizer
from wallet.transfer import CompanionEntry, TransferEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RolloverResult:
    """정산 결과"""

    status: str
    message: str
    amount: Decimal


@dataclass
class RolloverBatchResult:
    """전체 사용자 정산 결과"""

    results: dict[str, RolloverResult] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def processed(self) -> int:
        return len(self.results)

    @property
    def failed(self) -> int:
        return len(self.errors)


class RolloverEngine:
    """월말 정산 엔진

    Args:
        db: SQLite 어댑터
        transfer_engine: 이체 엔진 (None이면 생성)
    """

    def __init__(
        self,
        db: SQLiteAdapter,
        transfer_engine: TransferEngine | None = None,
    ):
        self.db = db
        self.store = LedgerStore(db)
        self.synchronizer = BalanceSynchronizer(db)
        self.transfer_engine = transfer_engine or TransferEngine(db)

    async def perform_month_end_rollover(self, user_id: str) -> RolloverResult:
        """단일 사용자 월말 정산

        Raises:
            AccountsNotFoundError: MAIN 또는 CURRENT 없음
        """
        now = datetime.now(timezone.utc)
        month = now.strftime("%B")

        async with self.db.transaction():
            main = await self.store.get_account(user_id, AccountCategory.MAIN)
            current = await self.store.get_account(user_id, AccountCategory.CURRENT)
            if main is None or current is None:
                raise AccountsNotFoundError(user_id)

            balance = await self.synchronizer.sync_current_account_balance(user_id)
            if balance is None:
                raise AccountsNotFoundError(user_id)

            if balance == ZERO:
                await self.store.mark_rollover(current.account_id, now)
                result = RolloverResult(
                    status="success",
                    message="Balance was 0, no transfer needed.",
                    amount=ZERO,
                )
            elif balance > ZERO:
                await self.transfer_engine.execute_transfer(
                    user_id=user_id,
                    from_account=TransferEndpoint.CURRENT,
                    to_account=TransferEndpoint.MAIN,
                    amount=balance,
                    transfer_type=TransferType.DEPOSIT,
                    description=f"Month-end Rollover: Surplus from {month}",
                    companion=CompanionEntry(
                        account=AccountCategory.CURRENT,
                        direction=TransactionDirection.EXPENSE,
                        kind=TransferKind.ROLLOVER_SURPLUS,
                        description=f"Rollover Surplus: {month}",
                    ),
                    date=now,
                )
                await self.store.mark_rollover(current.account_id, now)
                result = RolloverResult(
                    status="success",
                    message="Surplus transferred to Main Account.",
                    amount=balance,
                )
            else:
                await self.transfer_engine.execute_transfer(
                    user_id=user_id,
                    from_account=TransferEndpoint.MAIN,
                    to_account=TransferEndpoint.CURRENT,
                    amount=-balance,
                    transfer_type=TransferType.BORROW,
                    description=f"Month-end Rollover: Deficit coverage for {month}",
                    companion=CompanionEntry(
                        account=AccountCategory.CURRENT,
                        direction=TransactionDirection.INCOME,
                        kind=TransferKind.ROLLOVER_DEFICIT,
                        description=f"Rollover Deficit Coverage: {month}",
                    ),
                    date=now,
                )
                await self.store.mark_rollover(current.account_id, now)
                result = RolloverResult(
                    status="success",
                    message="Deficit covered by Main Account.",
                    amount=balance,
                )

        logger.info(
            f"Rollover completed: {user_id}",
            extra={"user_id": user_id, "amount": str(result.amount)},
        )
        return result

    async def perform_rollover_for_all_users(self) -> RolloverBatchResult:
        """계좌가 있는 모든 사용자 정산

        한 사용자가 실패해도 나머지는 계속 진행.
        """
        batch = RolloverBatchResult()
        user_ids = await self.store.list_users_with_accounts()

        for user_id in user_ids:
            try:
                batch.results[user_id] = await self.perform_month_end_rollover(user_id)
            except LedgerError as e:
                logger.error(f"Rollover failed for {user_id}: {e}")
                batch.errors[user_id] = str(e)

        logger.info(
            f"Rollover batch finished: {batch.processed} succeeded, "
            f"{batch.failed} failed"
        )
        return batch
