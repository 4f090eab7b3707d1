"""
Ledger 저장소

계좌 / 거래 저장 및 조회.
비즈니스 규칙 없음. 모든 쿼리는 user_id로 필터링.
커밋은 호출자의 트랜잭션 (SQLiteAdapter.transaction) 담당.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from core.constants import ZERO
from core.errors import StorageError
from core.ledger.models import Account, LedgerTransaction
from core.types import (
    AccountAffiliation,
    AccountCategory,
    SpecialCategory,
    TransactionDirection,
    TransferKind,
)

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class LedgerStore:
    """Ledger 저장소

    account, ledger_transaction 테이블을 읽고 쓰는 클래스.

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    # =========================================================================
    # 계좌
    # =========================================================================

    async def get_account(
        self,
        user_id: str,
        category: AccountCategory,
    ) -> Account | None:
        """사용자 계좌 조회

        Args:
            user_id: 사용자 ID
            category: main 또는 current

        Returns:
            Account 또는 None
        """
        row = await self.db.fetchone_dict(
            "SELECT * FROM account WHERE user_id = ? AND category = ?",
            (user_id, category.value),
        )
        return Account.from_row(row) if row else None

    async def create_account(
        self,
        user_id: str,
        category: AccountCategory,
        name: str,
    ) -> Account:
        """계좌 생성 (이미 있으면 기존 계좌 반환)

        Args:
            user_id: 사용자 ID
            category: main 또는 current
            name: 표시 이름

        Returns:
            생성되거나 기존에 있는 Account
        """
        account_id = f"acc-{uuid.uuid4().hex[:12]}"
        now = _now().isoformat()

        # INSERT OR IGNORE - UNIQUE(user_id, category) 충돌 시 무시
        await self.db.execute(
            """
            INSERT OR IGNORE INTO account (
                account_id, user_id, category, name,
                balance, version, created_at, updated_at
            ) VALUES (?, ?, ?, ?, '0', 0, ?, ?)
            """,
            (account_id, user_id, category.value, name, now, now),
        )

        account = await self.get_account(user_id, category)
        if account is None:
            raise StorageError(f"계좌 생성 후 조회 실패: {user_id} {category.value}")

        if account.account_id == account_id:
            logger.info(
                f"Account created: {account_id}",
                extra={"user_id": user_id, "category": category.value},
            )

        return account

    async def save_balance(self, account_id: str, balance: Decimal) -> None:
        """계좌 잔액 저장 (version 증가)

        Args:
            account_id: 계좌 ID
            balance: 새 잔액
        """
        await self.db.execute(
            """
            UPDATE account
            SET balance = ?, version = version + 1, updated_at = ?
            WHERE account_id = ?
            """,
            (str(balance), _now().isoformat(), account_id),
        )

    async def mark_rollover(self, account_id: str, at: datetime) -> None:
        """마지막 월말 정산 시각 기록"""
        await self.db.execute(
            """
            UPDATE account
            SET last_rollover_at = ?, updated_at = ?
            WHERE account_id = ?
            """,
            (at.isoformat(), _now().isoformat(), account_id),
        )

    async def list_users_with_accounts(self) -> list[str]:
        """계좌를 보유한 사용자 목록"""
        rows = await self.db.fetchall(
            "SELECT DISTINCT user_id FROM account ORDER BY user_id"
        )
        return [row[0] for row in rows]

    # =========================================================================
    # 거래
    # =========================================================================

    async def insert_transaction(
        self,
        user_id: str,
        amount: Decimal,
        direction: TransactionDirection,
        account: AccountAffiliation,
        category: str,
        description: str,
        date: datetime | None = None,
        is_visible: bool = True,
        special_category: SpecialCategory | None = None,
        transfer_kind: TransferKind | None = None,
        transfer_id: str | None = None,
        linked_entity_id: str | None = None,
    ) -> LedgerTransaction:
        """거래 저장

        Args:
            user_id: 사용자 ID
            amount: 금액 (양수)
            direction: income 또는 expense
            account: 소속 계좌
            category: 카테고리 라벨
            description: 설명
            date: 거래 일시 (None이면 현재)
            is_visible: 일상 거래 목록 노출 여부
            special_category: 특수 거래 분류
            transfer_kind: 이체 태그
            transfer_id: 연결된 이체 ID
            linked_entity_id: 연결된 특수 항목 ID

        Returns:
            저장된 LedgerTransaction
        """
        now = _now()
        tx = LedgerTransaction(
            transaction_id=f"tx-{uuid.uuid4().hex[:12]}",
            user_id=user_id,
            amount=amount,
            direction=direction,
            account=account,
            category=category,
            description=description,
            date=date or now,
            is_visible=is_visible,
            created_at=now,
            special_category=special_category,
            transfer_kind=transfer_kind,
            transfer_id=transfer_id,
            linked_entity_id=linked_entity_id,
        )

        await self.db.execute(
            """
            INSERT INTO ledger_transaction (
                transaction_id, user_id, amount, direction, account,
                category, description, tx_date, is_visible,
                special_category, transfer_kind, transfer_id, linked_entity_id,
                created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                tx.transaction_id,
                tx.user_id,
                str(tx.amount),
                tx.direction.value,
                tx.account.value,
                tx.category,
                tx.description,
                tx.date.isoformat(),
                1 if tx.is_visible else 0,
                tx.special_category.value if tx.special_category else None,
                tx.transfer_kind.value if tx.transfer_kind else None,
                tx.transfer_id,
                tx.linked_entity_id,
                tx.created_at.isoformat(),
            ),
        )

        logger.debug(f"Saved transaction: {tx.transaction_id}")
        return tx

    async def list_transactions(
        self,
        user_id: str,
        account: AccountAffiliation | None = None,
        visible: bool | None = None,
        special_category: SpecialCategory | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[LedgerTransaction]:
        """거래 목록 조회 (최신순)

        Args:
            user_id: 사용자 ID
            account: 계좌 필터
            visible: 노출 여부 필터
            special_category: 특수 분류 필터
            start: 시작 일시 (포함)
            end: 종료 일시 (미포함)
            limit: 조회 개수
            offset: 시작 위치

        Returns:
            LedgerTransaction 목록
        """
        sql = "SELECT * FROM ledger_transaction WHERE user_id = ?"
        params: list[Any] = [user_id]

        if account is not None:
            sql += " AND account = ?"
            params.append(account.value)

        if visible is not None:
            sql += " AND is_visible = ?"
            params.append(1 if visible else 0)

        if special_category is not None:
            sql += " AND special_category = ?"
            params.append(special_category.value)

        if start is not None:
            sql += " AND tx_date >= ?"
            params.append(start.isoformat())

        if end is not None:
            sql += " AND tx_date < ?"
            params.append(end.isoformat())

        sql += " ORDER BY tx_date DESC, rowid DESC LIMIT ? OFFSET ?"
        params.extend([limit, offset])

        rows = await self.db.fetchall_dict(sql, tuple(params))
        return [LedgerTransaction.from_row(row) for row in rows]

    async def sum_transactions(
        self,
        user_id: str,
        account: AccountAffiliation,
        special_category: SpecialCategory | None = None,
        exclude_special_category: SpecialCategory | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> dict[TransactionDirection, Decimal]:
        """방향별 거래 합계

        SQLite SUM은 REAL로 계산되므로 Decimal로 직접 합산.

        Args:
            user_id: 사용자 ID
            account: 계좌
            special_category: 이 분류만 포함
            exclude_special_category: 이 분류는 제외 (NULL은 포함)
            start: 시작 일시 (포함)
            end: 종료 일시 (미포함)

        Returns:
            {INCOME: 합계, EXPENSE: 합계}
        """
        sql = """
            SELECT direction, amount FROM ledger_transaction
            WHERE user_id = ? AND account = ?
        """
        params: list[Any] = [user_id, account.value]

        if special_category is not None:
            sql += " AND special_category = ?"
            params.append(special_category.value)

        if exclude_special_category is not None:
            sql += " AND (special_category IS NULL OR special_category != ?)"
            params.append(exclude_special_category.value)

        if start is not None:
            sql += " AND tx_date >= ?"
            params.append(start.isoformat())

        if end is not None:
            sql += " AND tx_date < ?"
            params.append(end.isoformat())

        rows = await self.db.fetchall(sql, tuple(params))

        totals = {direction: ZERO for direction in TransactionDirection}
        for direction, amount in rows:
            key = TransactionDirection(direction)
            totals[key] = totals[key] + Decimal(str(amount))

        return totals
