"""
Ledger 스키마 초기화

Web/스크립트 시작 시 자동으로 Ledger 테이블과 특수 항목 테이블 생성.
CREATE IF NOT EXISTS 패턴으로 안전하게 동작.

금액은 모두 TEXT(Decimal 문자열)로 저장.
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


async def init_ledger_schema(db: "SQLiteAdapter") -> None:
    """Ledger 스키마 초기화

    이미 존재하는 경우 안전하게 건너뜀 (IF NOT EXISTS).

    Args:
        db: SQLiteAdapter 인스턴스
    """
    await _create_ledger_tables(db)
    await _create_special_tables(db)
    await _create_indexes(db)
    logger.info("Ledger 스키마 초기화 완료")


async def _create_ledger_tables(db: "SQLiteAdapter") -> None:
    """계좌 / 거래 / 이체 테이블 생성"""

    # account 테이블 (사용자별 main, current 각 1개)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS account (
            account_id       TEXT PRIMARY KEY,
            user_id          TEXT NOT NULL,
            category         TEXT NOT NULL,
            name             TEXT NOT NULL,
            balance          TEXT NOT NULL DEFAULT '0',
            version          INTEGER NOT NULL DEFAULT 0,
            last_rollover_at TEXT,
            created_at       TEXT NOT NULL,
            updated_at       TEXT NOT NULL,
            UNIQUE(user_id, category)
        )
    """)

    # ledger_transaction 테이블 (append-only)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS ledger_transaction (
            transaction_id   TEXT PRIMARY KEY,
            user_id          TEXT NOT NULL,
            amount           TEXT NOT NULL,
            direction        TEXT NOT NULL,
            account          TEXT NOT NULL,
            category         TEXT NOT NULL,
            description      TEXT NOT NULL DEFAULT '',
            tx_date          TEXT NOT NULL,
            is_visible       INTEGER NOT NULL DEFAULT 1,
            special_category TEXT,
            transfer_kind    TEXT,
            transfer_id      TEXT,
            linked_entity_id TEXT,
            created_at       TEXT NOT NULL
        )
    """)

    # transfer 테이블
    await db.execute("""
        CREATE TABLE IF NOT EXISTS transfer (
            transfer_id      TEXT PRIMARY KEY,
            user_id          TEXT NOT NULL,
            from_account     TEXT NOT NULL,
            to_account       TEXT NOT NULL,
            amount           TEXT NOT NULL,
            transfer_type    TEXT NOT NULL,
            linked_entity_id TEXT,
            status           TEXT NOT NULL DEFAULT 'completed',
            transfer_date    TEXT NOT NULL,
            description      TEXT NOT NULL DEFAULT '',
            created_at       TEXT NOT NULL
        )
    """)


async def _create_special_tables(db: "SQLiteAdapter") -> None:
    """특수 항목 (Debt / Investment / SavingsGoal) 테이블 생성"""

    await db.execute("""
        CREATE TABLE IF NOT EXISTS debt (
            debt_id          TEXT PRIMARY KEY,
            user_id          TEXT NOT NULL,
            name             TEXT NOT NULL,
            debt_type        TEXT NOT NULL DEFAULT 'other',
            original_amount  TEXT NOT NULL,
            current_balance  TEXT NOT NULL,
            interest_rate    TEXT NOT NULL DEFAULT '0',
            minimum_payment  TEXT NOT NULL DEFAULT '0',
            due_date         TEXT,
            created_at       TEXT NOT NULL,
            updated_at       TEXT NOT NULL
        )
    """)

    await db.execute("""
        CREATE TABLE IF NOT EXISTS debt_payment (
            id               INTEGER PRIMARY KEY AUTOINCREMENT,
            debt_id          TEXT NOT NULL,
            amount           TEXT NOT NULL,
            payment_date     TEXT NOT NULL,
            principal_paid   TEXT NOT NULL,
            interest_paid    TEXT NOT NULL,
            FOREIGN KEY (debt_id) REFERENCES debt(debt_id)
        )
    """)

    await db.execute("""
        CREATE TABLE IF NOT EXISTS investment (
            investment_id    TEXT PRIMARY KEY,
            user_id          TEXT NOT NULL,
            name             TEXT NOT NULL,
            investment_type  TEXT NOT NULL DEFAULT 'other',
            symbol           TEXT,
            initial_amount   TEXT NOT NULL,
            current_value    TEXT NOT NULL,
            rate_per_annum   TEXT NOT NULL DEFAULT '0',
            purchase_date    TEXT,
            notes            TEXT,
            created_at       TEXT NOT NULL,
            updated_at       TEXT NOT NULL
        )
    """)

    await db.execute("""
        CREATE TABLE IF NOT EXISTS savings_goal (
            goal_id          TEXT PRIMARY KEY,
            user_id          TEXT NOT NULL,
            title            TEXT NOT NULL,
            target_amount    TEXT NOT NULL,
            current_amount   TEXT NOT NULL DEFAULT '0',
            deadline         TEXT,
            status           TEXT NOT NULL DEFAULT 'in-progress',
            created_at       TEXT NOT NULL,
            updated_at       TEXT NOT NULL
        )
    """)

    await db.execute("""
        CREATE TABLE IF NOT EXISTS goal_contribution (
            id               INTEGER PRIMARY KEY AUTOINCREMENT,
            goal_id          TEXT NOT NULL,
            amount           TEXT NOT NULL,
            contribution_date TEXT NOT NULL,
            note             TEXT,
            FOREIGN KEY (goal_id) REFERENCES savings_goal(goal_id)
        )
    """)


async def _create_indexes(db: "SQLiteAdapter") -> None:
    """인덱스 생성"""

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_ledger_transaction_user_account
        ON ledger_transaction(user_id, account, tx_date)
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_ledger_transaction_special
        ON ledger_transaction(user_id, special_category)
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_transfer_user_date
        ON transfer(user_id, transfer_date)
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_transfer_user_status
        ON transfer(user_id, status)
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_debt_user
        ON debt(user_id)
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_investment_user
        ON investment(user_id)
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_savings_goal_user
        ON savings_goal(user_id, status)
    """)
