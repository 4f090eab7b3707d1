"""
이체 엔진

MAIN / CURRENT 계좌와 특수 항목 간 자금 이동을 담당하는 유일한 컴포넌트.

모든 작업은 하나의 DB 트랜잭션으로 실행:
    1. 금액 / 계좌 / 항목 검증 (잔액은 동기화 직후 값 기준)
    2. Transfer + 동반 Transaction 기록 (또는 특수 거래)
    3. 특수 항목 반영
    4. 관련 계좌 잔액 재동기화
중간 실패 시 전체 롤백.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults, TransactionLabels, ZERO
from core.errors import (
    AccountsNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
)
from core.ledger import LedgerStore, Transfer, TransferRepository
from core.types import (
    AccountAffiliation,
    AccountCategory,
    EntityType,
    SpecialCategory,
    TransactionDirection,
    TransferEndpoint,
    TransferKind,
    TransferType,
)
from wallet.balance import BalanceSynchronizer
from wallet.special import SpecialEntityHandler, build_handlers

logger = logging.getLogger(__name__)

CONTRIBUTION_LABELS: dict[EntityType, str] = {
    EntityType.DEBT: TransactionLabels.DEBT,
    EntityType.INVESTMENT: TransactionLabels.INVESTMENT,
    EntityType.GOAL: TransactionLabels.GOAL,
}


@dataclass(frozen=True)
class CompanionEntry:
    """이체 동반 거래 정의

    Attributes:
        account: 거래가 기록될 계좌
        direction: income 또는 expense
        kind: 이체 태그
        description: 거래 설명
    """

    account: AccountCategory
    direction: TransactionDirection
    kind: TransferKind
    description: str


@dataclass(frozen=True)
class ContributionResult:
    """특수 항목 기여 결과"""

    success: bool
    message: str


class TransferEngine:
    """이체 엔진

    Args:
        db: SQLite 어댑터
        withdraw_destination: 특수 항목 인출 시 입금 계좌
        handlers: 항목 종류별 Handler (None이면 기본 구성)
    """

    def __init__(
        self,
        db: SQLiteAdapter,
        withdraw_destination: AccountCategory = AccountCategory.CURRENT,
        handlers: dict[EntityType, SpecialEntityHandler] | None = None,
    ):
        self.db = db
        self.withdraw_destination = withdraw_destination
        self.store = LedgerStore(db)
        self.transfers = TransferRepository(db)
        self.synchronizer = BalanceSynchronizer(db)
        self.handlers = handlers if handlers is not None else build_handlers(db)

    # =========================================================================
    # 계좌 간 이체
    # =========================================================================

    async def borrow_from_main(
        self,
        user_id: str,
        amount: Decimal,
        description: str = "",
    ) -> Transfer:
        """MAIN → CURRENT 차입

        Raises:
            InvalidAmountError: 금액이 0 이하
            AccountsNotFoundError: 계좌 없음
            InsufficientFundsError: MAIN 잔액 부족
        """
        self._validate_amount(amount)

        async with self.db.transaction():
            main_balance, _ = await self._synced_balances(user_id)
            if main_balance < amount:
                raise InsufficientFundsError("main", main_balance, amount)

            return await self.execute_transfer(
                user_id=user_id,
                from_account=TransferEndpoint.MAIN,
                to_account=TransferEndpoint.CURRENT,
                amount=amount,
                transfer_type=TransferType.BORROW,
                description=description,
                companion=CompanionEntry(
                    account=AccountCategory.CURRENT,
                    direction=TransactionDirection.INCOME,
                    kind=TransferKind.BORROW,
                    description=f"Borrowed: {description}",
                ),
            )

    async def repay_to_main(
        self,
        user_id: str,
        amount: Decimal,
        description: str = "",
    ) -> Transfer:
        """CURRENT → MAIN 상환

        Raises:
            InvalidAmountError: 금액이 0 이하
            AccountsNotFoundError: 계좌 없음
            InsufficientFundsError: CURRENT 잔액 부족
        """
        self._validate_amount(amount)

        async with self.db.transaction():
            _, current_balance = await self._synced_balances(user_id)
            if current_balance < amount:
                raise InsufficientFundsError("current", current_balance, amount)

            return await self.execute_transfer(
                user_id=user_id,
                from_account=TransferEndpoint.CURRENT,
                to_account=TransferEndpoint.MAIN,
                amount=amount,
                transfer_type=TransferType.REPAY,
                description=description,
                companion=CompanionEntry(
                    account=AccountCategory.CURRENT,
                    direction=TransactionDirection.EXPENSE,
                    kind=TransferKind.REPAY,
                    description=f"Repayment: {description}",
                ),
            )

    # =========================================================================
    # 특수 항목
    # =========================================================================

    async def withdraw_from_special(
        self,
        user_id: str,
        entity_type: EntityType,
        entity_id: str,
        amount: Decimal,
        description: str = "",
    ) -> Transfer:
        """특수 항목 → 인출 계좌 (기본 CURRENT)

        investment / goal은 항목 잔액 부족 시 실패.
        debt는 잔액 검사 없이 부채 증가.

        Raises:
            InvalidAmountError: 금액이 0 이하
            AccountsNotFoundError: 계좌 없음
            EntityNotFoundError: 항목 없음
            InsufficientFundsError: 항목 잔액 부족
        """
        self._validate_amount(amount)
        handler = self.handlers[entity_type]
        destination = self.withdraw_destination

        async with self.db.transaction():
            await self._synced_balances(user_id)

            entity = await handler.require(user_id, entity_id)
            await handler.apply_withdrawal(entity, amount)

            return await self.execute_transfer(
                user_id=user_id,
                from_account=entity_type.endpoint,
                to_account=TransferEndpoint(destination.value),
                amount=amount,
                transfer_type=TransferType.WITHDRAW,
                description=description,
                linked_entity_id=entity_id,
                companion=CompanionEntry(
                    account=destination,
                    direction=TransactionDirection.INCOME,
                    kind=TransferKind.WITHDRAW,
                    description=f"Withdrawal: {description}",
                ),
            )

    async def process_special_contribution(
        self,
        user_id: str,
        entity_type: EntityType,
        entity_id: str,
        amount: Decimal,
        description: str = "",
    ) -> ContributionResult:
        """MAIN → 특수 항목 기여

        MAIN 계좌에 숨김 지출 거래를 남기고 항목에 반영.

        Raises:
            InvalidAmountError: 금액이 0 이하
            AccountsNotFoundError: 계좌 없음
            EntityNotFoundError: 항목 없음
            InsufficientFundsError: MAIN 잔액 부족
        """
        self._validate_amount(amount)
        handler = self.handlers[entity_type]

        async with self.db.transaction():
            main_balance, _ = await self._synced_balances(user_id)
            if main_balance < amount:
                raise InsufficientFundsError("main", main_balance, amount)

            entity = await handler.require(user_id, entity_id)

            await self.store.insert_transaction(
                user_id=user_id,
                amount=amount,
                direction=TransactionDirection.EXPENSE,
                account=AccountAffiliation.MAIN,
                category=CONTRIBUTION_LABELS[entity_type],
                description=description,
                is_visible=False,
                special_category=entity_type.special_category,
                linked_entity_id=entity_id,
            )
            await handler.apply_contribution(entity, amount, note=description)
            await self.synchronizer.sync_main_account_balance(user_id)

        logger.info(
            f"Contribution processed: {entity_type.value} {entity_id}",
            extra={"user_id": user_id, "amount": str(amount)},
        )
        return ContributionResult(
            success=True,
            message="Contribution processed successfully",
        )

    # =========================================================================
    # 조회
    # =========================================================================

    async def get_transfer_history(
        self,
        user_id: str,
        transfer_type: TransferType | None = None,
        limit: int = Defaults.HISTORY_LIMIT,
        offset: int = 0,
    ) -> list[Transfer]:
        """이체 내역 (최신순)"""
        return await self.transfers.get_history(
            user_id,
            transfer_type=transfer_type,
            limit=limit,
            offset=offset,
        )

    # =========================================================================
    # 공통
    # =========================================================================

    async def execute_transfer(
        self,
        user_id: str,
        from_account: TransferEndpoint,
        to_account: TransferEndpoint,
        amount: Decimal,
        transfer_type: TransferType,
        description: str,
        companion: CompanionEntry,
        linked_entity_id: str | None = None,
        date: datetime | None = None,
    ) -> Transfer:
        """Transfer + 동반 거래 기록 후 MAIN / CURRENT 재동기화

        검증은 호출자 책임. 호출자의 트랜잭션에 합류.
        """
        async with self.db.transaction():
            transfer = await self.transfers.create(
                user_id=user_id,
                from_account=from_account,
                to_account=to_account,
                amount=amount,
                transfer_type=transfer_type,
                description=description,
                linked_entity_id=linked_entity_id,
                date=date,
            )

            await self.store.insert_transaction(
                user_id=user_id,
                amount=amount,
                direction=companion.direction,
                account=AccountAffiliation(companion.account.value),
                category=TransactionLabels.TRANSFER,
                description=companion.description,
                date=transfer.date,
                special_category=SpecialCategory.TRANSFER,
                transfer_kind=companion.kind,
                transfer_id=transfer.transfer_id,
                linked_entity_id=linked_entity_id,
            )

            await self.synchronizer.sync_main_account_balance(user_id)
            await self.synchronizer.sync_current_account_balance(user_id)

        return transfer

    async def _synced_balances(self, user_id: str) -> tuple[Decimal, Decimal]:
        """두 계좌 존재 확인 후 동기화된 (MAIN, CURRENT) 잔액

        Raises:
            AccountsNotFoundError: 한쪽이라도 없음
        """
        main_balance = await self.synchronizer.sync_main_account_balance(user_id)
        current_balance = await self.synchronizer.sync_current_account_balance(
            user_id
        )
        if main_balance is None or current_balance is None:
            raise AccountsNotFoundError(user_id)
        return main_balance, current_balance

    @staticmethod
    def _validate_amount(amount: Decimal) -> None:
        if not amount.is_finite() or amount <= ZERO:
            raise InvalidAmountError(amount)
