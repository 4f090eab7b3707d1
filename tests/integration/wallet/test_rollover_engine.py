"""RolloverEngine 통합 테스트"""

from decimal import Decimal

import pytest

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.errors import AccountsNotFoundError
from core.ledger import LedgerStore
from core.types import (
    AccountCategory,
    SpecialCategory,
    TransactionDirection,
    TransferEndpoint,
    TransferKind,
    TransferType,
)
from wallet.accounts import AccountService
from wallet.rollover import RolloverEngine
from wallet.transfer import TransferEngine


@pytest.fixture
def rollover(db: SQLiteAdapter) -> RolloverEngine:
    return RolloverEngine(db)


async def _balances(service: AccountService, user_id: str) -> tuple[Decimal, Decimal]:
    main = await service.get_main_account(user_id)
    current = await service.get_current_account(user_id)
    assert main is not None and current is not None
    return main.balance, current.balance


class TestMonthEndRollover:
    """단일 사용자 정산"""

    @pytest.mark.asyncio
    async def test_surplus_moves_to_main(
        self,
        db: SQLiteAdapter,
        rollover: RolloverEngine,
        account_service: AccountService,
        seed_balances,
    ) -> None:
        """Main 4700 / Current 300 → Main 5000 / Current 0"""
        await seed_balances("u1", Decimal("4700"), Decimal("300"))

        result = await rollover.perform_month_end_rollover("u1")

        assert result.status == "success"
        assert result.message == "Surplus transferred to Main Account."
        assert result.amount == Decimal("300")
        assert await _balances(account_service, "u1") == (Decimal("5000"), Decimal("0"))

        history = await TransferEngine(db).get_transfer_history("u1")
        assert len(history) == 1
        assert history[0].transfer_type == TransferType.DEPOSIT
        assert history[0].from_account == TransferEndpoint.CURRENT
        assert history[0].to_account == TransferEndpoint.MAIN
        assert history[0].description.startswith("Month-end Rollover: Surplus from ")

        companions = await LedgerStore(db).list_transactions(
            "u1", special_category=SpecialCategory.TRANSFER
        )
        assert len(companions) == 1
        assert companions[0].transfer_kind == TransferKind.ROLLOVER_SURPLUS
        assert companions[0].direction == TransactionDirection.EXPENSE
        assert companions[0].description.startswith("Rollover Surplus: ")

    @pytest.mark.asyncio
    async def test_deficit_covered_by_main(
        self,
        db: SQLiteAdapter,
        rollover: RolloverEngine,
        account_service: AccountService,
        seed_balances,
    ) -> None:
        """Main 5000 / Current -200 → Main 4800 / Current 0, 반환 금액 음수"""
        await seed_balances("u1", Decimal("5000"), Decimal("-200"))

        result = await rollover.perform_month_end_rollover("u1")

        assert result.message == "Deficit covered by Main Account."
        assert result.amount == Decimal("-200")
        assert await _balances(account_service, "u1") == (Decimal("4800"), Decimal("0"))

        history = await TransferEngine(db).get_transfer_history("u1")
        assert history[0].transfer_type == TransferType.BORROW
        assert history[0].amount == Decimal("200")
        assert history[0].description.startswith(
            "Month-end Rollover: Deficit coverage for "
        )

        companions = await LedgerStore(db).list_transactions(
            "u1", special_category=SpecialCategory.TRANSFER
        )
        assert companions[0].transfer_kind == TransferKind.ROLLOVER_DEFICIT
        assert companions[0].direction == TransactionDirection.INCOME

    @pytest.mark.asyncio
    async def test_deficit_may_drive_main_negative(
        self,
        rollover: RolloverEngine,
        account_service: AccountService,
        seed_balances,
    ) -> None:
        """정산은 MAIN 잔액을 검사하지 않음"""
        await seed_balances("u1", Decimal("50"), Decimal("-200"))

        await rollover.perform_month_end_rollover("u1")

        assert await _balances(account_service, "u1") == (Decimal("-150"), Decimal("0"))

    @pytest.mark.asyncio
    async def test_zero_balance_records_timestamp_only(
        self,
        db: SQLiteAdapter,
        rollover: RolloverEngine,
        account_service: AccountService,
        seed_balances,
    ) -> None:
        await seed_balances("u1", Decimal("100"), Decimal("0"))

        result = await rollover.perform_month_end_rollover("u1")

        assert result.message == "Balance was 0, no transfer needed."
        assert result.amount == Decimal("0")
        assert await TransferEngine(db).get_transfer_history("u1") == []

        current = await account_service.get_current_account("u1")
        assert current is not None
        assert current.last_rollover_at is not None

    @pytest.mark.asyncio
    async def test_sets_last_rollover_at(
        self,
        rollover: RolloverEngine,
        account_service: AccountService,
        seed_balances,
    ) -> None:
        await seed_balances("u1", Decimal("0"), Decimal("10"))

        await rollover.perform_month_end_rollover("u1")

        current = await account_service.get_current_account("u1")
        assert current is not None
        assert current.last_rollover_at is not None

    @pytest.mark.asyncio
    async def test_second_run_is_zero(
        self,
        rollover: RolloverEngine,
        seed_balances,
    ) -> None:
        """정산 직후 재실행하면 잔액 0 경로"""
        await seed_balances("u1", Decimal("0"), Decimal("10"))

        await rollover.perform_month_end_rollover("u1")
        again = await rollover.perform_month_end_rollover("u1")

        assert again.amount == Decimal("0")

    @pytest.mark.asyncio
    async def test_missing_accounts(
        self,
        rollover: RolloverEngine,
        account_service: AccountService,
    ) -> None:
        with pytest.raises(AccountsNotFoundError):
            await rollover.perform_month_end_rollover("ghost")

        await account_service.ensure_current_account("half")
        with pytest.raises(AccountsNotFoundError):
            await rollover.perform_month_end_rollover("half")

    @pytest.mark.asyncio
    async def test_current_vanishing_during_sync(
        self,
        rollover: RolloverEngine,
        seed_balances,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """동기화 결과가 없으면 AccountsNotFoundError (정산 기록 없음)"""
        await seed_balances("u1", Decimal("100"), Decimal("50"))

        async def no_account(user_id: str) -> None:
            return None

        monkeypatch.setattr(
            rollover.synchronizer, "sync_current_account_balance", no_account
        )

        with pytest.raises(AccountsNotFoundError):
            await rollover.perform_month_end_rollover("u1")

        current = await LedgerStore(rollover.db).get_account(
            "u1", AccountCategory.CURRENT
        )
        assert current is not None
        assert current.last_rollover_at is None


class TestRolloverBatch:
    """전체 사용자 정산"""

    @pytest.mark.asyncio
    async def test_failure_does_not_stop_batch(
        self,
        rollover: RolloverEngine,
        account_service: AccountService,
        seed_balances,
    ) -> None:
        await seed_balances("alice", Decimal("100"), Decimal("40"))
        await seed_balances("bob", Decimal("100"), Decimal("-40"))
        # MAIN 없는 사용자
        await account_service.ensure_current_account("carol")

        batch = await rollover.perform_rollover_for_all_users()

        assert batch.processed == 2
        assert batch.failed == 1
        assert set(batch.results) == {"alice", "bob"}
        assert "carol" in batch.errors
        assert batch.results["alice"].amount == Decimal("40")
        assert batch.results["bob"].amount == Decimal("-40")

        assert await _balances(account_service, "alice") == (Decimal("140"), Decimal("0"))
        assert await _balances(account_service, "bob") == (Decimal("60"), Decimal("0"))

    @pytest.mark.asyncio
    async def test_no_users(self, rollover: RolloverEngine) -> None:
        batch = await rollover.perform_rollover_for_all_users()

        assert batch.processed == 0
        assert batch.failed == 0
