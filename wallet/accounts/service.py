"""
계좌 서비스

MAIN / CURRENT 계좌 생성 (get-or-create) 및 조회.
"""

import logging
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults
from core.errors import AccountsNotFoundError
from core.ledger import Account, LedgerStore
from core.types import AccountCategory
from wallet.balance import BalanceSynchronizer

logger = logging.getLogger(__name__)

ACCOUNT_NAMES: dict[AccountCategory, str] = {
    AccountCategory.MAIN: Defaults.MAIN_ACCOUNT_NAME,
    AccountCategory.CURRENT: Defaults.CURRENT_ACCOUNT_NAME,
}


class AccountService:
    """계좌 서비스

    Args:
        db: SQLite 어댑터
        currency: 요약에 표시할 통화 코드
    """

    def __init__(self, db: SQLiteAdapter, currency: str = Defaults.CURRENCY):
        self.db = db
        self.currency = currency
        self.store = LedgerStore(db)
        self.synchronizer = BalanceSynchronizer(db)

    async def ensure_main_account(self, user_id: str) -> str:
        """MAIN 계좌 보장 (없으면 생성)

        Returns:
            계좌 ID
        """
        account = await self._ensure(user_id, AccountCategory.MAIN)
        return account.account_id

    async def ensure_current_account(self, user_id: str) -> str:
        """CURRENT 계좌 보장 (없으면 생성)

        Returns:
            계좌 ID
        """
        account = await self._ensure(user_id, AccountCategory.CURRENT)
        return account.account_id

    async def get_main_account(self, user_id: str) -> Account | None:
        return await self.store.get_account(user_id, AccountCategory.MAIN)

    async def get_current_account(self, user_id: str) -> Account | None:
        return await self.store.get_account(user_id, AccountCategory.CURRENT)

    async def get_synced_account(
        self,
        user_id: str,
        category: AccountCategory,
    ) -> Account:
        """계좌 보장 + 잔액 동기화 후 조회"""
        async with self.db.transaction():
            await self._ensure(user_id, category)
            if category == AccountCategory.MAIN:
                await self.synchronizer.sync_main_account_balance(user_id)
            else:
                await self.synchronizer.sync_current_account_balance(user_id)

            account = await self.store.get_account(user_id, category)
            if account is None:
                raise AccountsNotFoundError(user_id)
            return account

    async def get_summary(self, user_id: str) -> dict[str, Any]:
        """두 계좌 요약

        Returns:
            {"main": {...}, "current": {...}, "total": "...", "currency": "..."}
        """
        async with self.db.transaction():
            main = await self.get_synced_account(user_id, AccountCategory.MAIN)
            current = await self.get_synced_account(user_id, AccountCategory.CURRENT)

        return {
            "user_id": user_id,
            "main": main.to_dict(),
            "current": current.to_dict(),
            "total": str(main.balance + current.balance),
            "currency": self.currency,
        }

    async def _ensure(self, user_id: str, category: AccountCategory) -> Account:
        async with self.db.transaction():
            account = await self.store.get_account(user_id, category)
            if account is not None:
                return account
            return await self.store.create_account(
                user_id, category, ACCOUNT_NAMES[category]
            )
