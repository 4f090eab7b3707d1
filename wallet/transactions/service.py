"""
거래 서비스

일반 수입 / 지출 기록 및 조회.
이체 동반 거래와 특수 항목 거래는 TransferEngine이 기록.
"""

import logging
from datetime import datetime
from decimal import Decimal

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults, ZERO
from core.errors import InvalidAmountError
from core.ledger import LedgerStore, LedgerTransaction
from core.types import (
    AccountAffiliation,
    AccountCategory,
    EntityType,
    TransactionDirection,
)
from wallet.accounts import AccountService
from wallet.balance import BalanceSynchronizer

logger = logging.getLogger(__name__)


class TransactionService:
    """거래 서비스

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self.store = LedgerStore(db)
        self.accounts = AccountService(db)
        self.synchronizer = BalanceSynchronizer(db)

    async def record_transaction(
        self,
        user_id: str,
        account: AccountCategory,
        direction: TransactionDirection,
        amount: Decimal,
        category: str,
        description: str = "",
        date: datetime | None = None,
    ) -> LedgerTransaction:
        """수입 / 지출 기록 후 해당 계좌 잔액 동기화

        Args:
            user_id: 사용자 ID
            account: main 또는 current
            direction: income 또는 expense
            amount: 금액 (양수)
            category: 카테고리 라벨
            description: 설명
            date: 거래 일시 (None이면 현재)

        Returns:
            저장된 거래

        Raises:
            InvalidAmountError: 금액이 0 이하이거나 유한하지 않음
        """
        if not amount.is_finite() or amount <= ZERO:
            raise InvalidAmountError(amount)

        async with self.db.transaction():
            if account == AccountCategory.MAIN:
                await self.accounts.ensure_main_account(user_id)
            else:
                await self.accounts.ensure_current_account(user_id)

            tx = await self.store.insert_transaction(
                user_id=user_id,
                amount=amount,
                direction=direction,
                account=AccountAffiliation(account.value),
                category=category,
                description=description,
                date=date,
            )

            if account == AccountCategory.MAIN:
                await self.synchronizer.sync_main_account_balance(user_id)
            else:
                await self.synchronizer.sync_current_account_balance(user_id)

        logger.info(
            f"Transaction recorded: {tx.transaction_id}",
            extra={
                "user_id": user_id,
                "account": account.value,
                "direction": direction.value,
                "amount": str(amount),
            },
        )
        return tx

    async def get_visible_transactions(
        self,
        user_id: str,
        limit: int = Defaults.HISTORY_LIMIT,
        offset: int = 0,
    ) -> list[LedgerTransaction]:
        """CURRENT 계좌의 노출 거래 (최신순)"""
        return await self.store.list_transactions(
            user_id,
            account=AccountAffiliation.CURRENT,
            visible=True,
            limit=limit,
            offset=offset,
        )

    async def get_special_transactions(
        self,
        user_id: str,
        entity_type: EntityType,
        limit: int = Defaults.HISTORY_LIMIT,
        offset: int = 0,
    ) -> list[LedgerTransaction]:
        """특수 항목 기여 거래 (MAIN 계좌, 숨김, 최신순)"""
        return await self.store.list_transactions(
            user_id,
            account=AccountAffiliation.MAIN,
            visible=False,
            special_category=entity_type.special_category,
            limit=limit,
            offset=offset,
        )
