"""
잔액 동기화

계좌 잔액을 거래 / 이체 내역에서 처음부터 재계산.
중간에 실패한 작업이 있어도 다음 동기화에서 원장과 일치.

잔액 = Σ수입 − Σ지출 + Σ(완료된 입금 이체) − Σ(완료된 출금 이체)

이체 동반 거래 (special_category = transfer)는 이체 합계로 이미 반영되므로
거래 합계에서 제외.
"""

import logging
from decimal import Decimal

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import ZERO
from core.ledger import LedgerStore, TransferRepository
from core.types import (
    AccountAffiliation,
    AccountCategory,
    SpecialCategory,
    TransactionDirection,
    TransferEndpoint,
    TransferStatus,
)

logger = logging.getLogger(__name__)


class BalanceSynchronizer:
    """잔액 동기화

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self.store = LedgerStore(db)
        self.transfers = TransferRepository(db)

    async def sync_main_account_balance(self, user_id: str) -> Decimal | None:
        """MAIN 계좌 잔액 재계산

        Returns:
            새 잔액 (계좌 없으면 None)
        """
        return await self._sync(user_id, AccountCategory.MAIN)

    async def sync_current_account_balance(self, user_id: str) -> Decimal | None:
        """CURRENT 계좌 잔액 재계산

        Returns:
            새 잔액 (계좌 없으면 None)
        """
        return await self._sync(user_id, AccountCategory.CURRENT)

    async def sync_all(self, user_id: str) -> dict[AccountCategory, Decimal | None]:
        """MAIN, CURRENT 모두 재계산"""
        async with self.db.transaction():
            return {
                AccountCategory.MAIN: await self.sync_main_account_balance(user_id),
                AccountCategory.CURRENT: await self.sync_current_account_balance(
                    user_id
                ),
            }

    async def compute_balance(self, user_id: str, category: AccountCategory) -> Decimal:
        """원장 기준 잔액 계산 (저장하지 않음)"""
        totals = await self.store.sum_transactions(
            user_id,
            AccountAffiliation(category.value),
            exclude_special_category=SpecialCategory.TRANSFER,
        )

        endpoint = TransferEndpoint(category.value)
        inflow = ZERO
        outflow = ZERO
        routes = await self.transfers.sum_by_route(user_id)
        for (from_account, to_account, status), amount in routes.items():
            if status != TransferStatus.COMPLETED:
                continue
            if to_account == endpoint:
                inflow += amount
            if from_account == endpoint:
                outflow += amount

        return (
            totals[TransactionDirection.INCOME]
            - totals[TransactionDirection.EXPENSE]
            + inflow
            - outflow
        )

    async def _sync(self, user_id: str, category: AccountCategory) -> Decimal | None:
        async with self.db.transaction():
            account = await self.store.get_account(user_id, category)
            if account is None:
                logger.debug(
                    f"Sync skipped, no {category.value} account",
                    extra={"user_id": user_id},
                )
                return None

            balance = await self.compute_balance(user_id, category)

            # 변경 없으면 쓰기 생략 (version 유지)
            if balance != account.balance:
                await self.store.save_balance(account.account_id, balance)
                logger.info(
                    f"Balance synced: {category.value}",
                    extra={
                        "user_id": user_id,
                        "previous": str(account.balance),
                        "balance": str(balance),
                    },
                )

            return balance
