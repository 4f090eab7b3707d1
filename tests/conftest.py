"""
pytest 공통 fixture 정의

임시 SQLite DB, 서비스 인스턴스, 초기 잔액 설정 헬퍼.
"""

from decimal import Decimal
from pathlib import Path
from typing import AsyncGenerator, Awaitable, Callable

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.config.loader import Settings
from core.types import AccountCategory, TransactionDirection
from wallet.accounts import AccountService
from wallet.transactions import TransactionService

SeedBalances = Callable[[str, Decimal, Decimal], Awaitable[None]]


@pytest.fixture(autouse=True)
def reset_settings() -> None:
    """테스트 간 Settings 싱글턴 격리"""
    Settings.reset()
    yield
    Settings.reset()


@pytest.fixture
def temp_settings_file(tmp_path: Path) -> Path:
    """테스트용 settings.yaml 파일 생성"""
    content = """mode: production

database:
  path: null

ledger:
  withdraw_destination: main
  currency: EUR

web:
  host: 0.0.0.0
  port: 9000
"""
    path = tmp_path / "settings.yaml"
    path.write_text(content, encoding="utf-8")
    return path


@pytest_asyncio.fixture
async def db(tmp_path: Path) -> AsyncGenerator[SQLiteAdapter, None]:
    """스키마가 초기화된 임시 DB"""
    adapter = SQLiteAdapter(tmp_path / "test_smartwallet.db")
    await adapter.connect()
    await init_schema(adapter)
    yield adapter
    await adapter.close()


@pytest.fixture
def account_service(db: SQLiteAdapter) -> AccountService:
    return AccountService(db)


@pytest.fixture
def transaction_service(db: SQLiteAdapter) -> TransactionService:
    return TransactionService(db)


@pytest.fixture
def seed_balances(
    account_service: AccountService,
    transaction_service: TransactionService,
) -> SeedBalances:
    """계좌 생성 후 수입 / 지출 거래로 초기 잔액 설정

    사용 예시:
        await seed_balances("user-1", Decimal("5000"), Decimal("-300"))
    """

    async def _seed(user_id: str, main: Decimal, current: Decimal) -> None:
        await account_service.ensure_main_account(user_id)
        await account_service.ensure_current_account(user_id)

        for category, amount in (
            (AccountCategory.MAIN, main),
            (AccountCategory.CURRENT, current),
        ):
            if amount == 0:
                continue
            direction = (
                TransactionDirection.INCOME if amount > 0 else TransactionDirection.EXPENSE
            )
            await transaction_service.record_transaction(
                user_id=user_id,
                account=category,
                direction=direction,
                amount=abs(amount),
                category="Opening Balance",
                description="seed",
            )

    return _seed
