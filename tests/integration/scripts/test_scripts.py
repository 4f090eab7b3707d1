"""운영 스크립트 통합 테스트

settings.yaml의 database.path가 지정된 DB를 대상으로 실행되는지 확인.
"""

from decimal import Decimal
from pathlib import Path

import pytest

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.config.loader import get_settings
from core.ledger import LedgerStore
from core.types import AccountCategory, TransactionDirection
from scripts import month_end_rollover, resync_balances
from wallet.accounts import AccountService
from wallet.transactions import TransactionService


@pytest.fixture
def custom_db_path(tmp_path: Path) -> Path:
    """database.path를 지정한 settings.yaml 로드 후 대상 DB 경로 반환"""
    custom = tmp_path / "custom" / "wallet.db"
    settings_file = tmp_path / "settings.yaml"
    settings_file.write_text(
        f"mode: development\ndatabase:\n  path: {custom.as_posix()}\n",
        encoding="utf-8",
    )
    get_settings(settings_file)
    return custom


async def _seed(db_path: Path, user_id: str, main: Decimal, current: Decimal) -> None:
    async with SQLiteAdapter(db_path) as db:
        await init_schema(db)
        transactions = TransactionService(db)
        accounts = AccountService(db)
        await accounts.ensure_main_account(user_id)
        await accounts.ensure_current_account(user_id)

        for category, amount in (
            (AccountCategory.MAIN, main),
            (AccountCategory.CURRENT, current),
        ):
            await transactions.record_transaction(
                user_id=user_id,
                account=category,
                direction=TransactionDirection.INCOME,
                amount=amount,
                category="Opening Balance",
            )


async def _balance(db_path: Path, user_id: str, category: AccountCategory) -> Decimal:
    async with SQLiteAdapter(db_path) as db:
        account = await LedgerStore(db).get_account(user_id, category)
        assert account is not None
        return account.balance


class TestMonthEndRolloverScript:
    """월말 정산 스크립트"""

    @pytest.mark.asyncio
    async def test_uses_database_path_override(self, custom_db_path: Path) -> None:
        """mode 인자와 무관하게 database.path의 DB를 정산"""
        await _seed(custom_db_path, "u1", Decimal("1000"), Decimal("250"))

        exit_code = await month_end_rollover.main("production")

        assert exit_code == 0
        assert await _balance(custom_db_path, "u1", AccountCategory.CURRENT) == Decimal("0")
        assert await _balance(custom_db_path, "u1", AccountCategory.MAIN) == Decimal("1250")

    @pytest.mark.asyncio
    async def test_missing_db_returns_error(self, custom_db_path: Path) -> None:
        assert custom_db_path.exists() is False

        assert await month_end_rollover.main() == 1


class TestResyncBalancesScript:
    """잔액 재동기화 스크립트"""

    @pytest.mark.asyncio
    async def test_heals_drift_in_override_db(self, custom_db_path: Path) -> None:
        await _seed(custom_db_path, "u1", Decimal("400"), Decimal("60"))

        async with SQLiteAdapter(custom_db_path) as db:
            store = LedgerStore(db)
            account = await store.get_account("u1", AccountCategory.MAIN)
            assert account is not None
            async with db.transaction():
                await store.save_balance(account.account_id, Decimal("999"))

        await resync_balances.main("production")

        assert await _balance(custom_db_path, "u1", AccountCategory.MAIN) == Decimal("400")

    @pytest.mark.asyncio
    async def test_dry_run_keeps_drift(self, custom_db_path: Path) -> None:
        await _seed(custom_db_path, "u1", Decimal("400"), Decimal("60"))

        async with SQLiteAdapter(custom_db_path) as db:
            store = LedgerStore(db)
            account = await store.get_account("u1", AccountCategory.CURRENT)
            assert account is not None
            async with db.transaction():
                await store.save_balance(account.account_id, Decimal("1"))

        await resync_balances.main(dry_run=True)

        assert await _balance(custom_db_path, "u1", AccountCategory.CURRENT) == Decimal("1")
