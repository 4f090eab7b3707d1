"""
Transfer Repository

transfer 테이블 CRUD 처리.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from core.constants import ZERO
from core.ledger.models import Transfer
from core.types import TransferEndpoint, TransferStatus, TransferType

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)

RouteKey = tuple[TransferEndpoint, TransferEndpoint, TransferStatus]


class TransferRepository:
    """Transfer Repository

    transfer 테이블 CRUD 처리.

    Args:
        db: SQLiteAdapter 인스턴스
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def create(
        self,
        user_id: str,
        from_account: TransferEndpoint,
        to_account: TransferEndpoint,
        amount: Decimal,
        transfer_type: TransferType,
        description: str,
        linked_entity_id: str | None = None,
        status: TransferStatus = TransferStatus.COMPLETED,
        date: datetime | None = None,
    ) -> Transfer:
        """새 이체 생성

        Args:
            user_id: 사용자 ID
            from_account: 출발지
            to_account: 도착지
            amount: 금액 (양수)
            transfer_type: 이체 유형
            description: 설명
            linked_entity_id: 연결된 특수 항목 ID
            status: 상태 (기본 COMPLETED)
            date: 이체 시각 (None이면 현재)

        Returns:
            생성된 Transfer 객체
        """
        now = datetime.now(timezone.utc)
        transfer = Transfer(
            transfer_id=f"tf-{uuid.uuid4().hex[:12]}",
            user_id=user_id,
            from_account=from_account,
            to_account=to_account,
            amount=amount,
            transfer_type=transfer_type,
            status=status,
            date=date or now,
            description=description,
            created_at=now,
            linked_entity_id=linked_entity_id,
        )

        await self.db.execute(
            """
            INSERT INTO transfer (
                transfer_id, user_id, from_account, to_account,
                amount, transfer_type, linked_entity_id, status,
                transfer_date, description, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                transfer.transfer_id,
                transfer.user_id,
                transfer.from_account.value,
                transfer.to_account.value,
                str(transfer.amount),
                transfer.transfer_type.value,
                transfer.linked_entity_id,
                transfer.status.value,
                transfer.date.isoformat(),
                transfer.description,
                transfer.created_at.isoformat(),
            ),
        )

        logger.info(
            f"Transfer created: {transfer.transfer_id}",
            extra={
                "user_id": user_id,
                "transfer_type": transfer_type.value,
                "amount": str(amount),
            },
        )

        return transfer

    async def get(self, user_id: str, transfer_id: str) -> Transfer | None:
        """이체 조회

        Args:
            user_id: 사용자 ID
            transfer_id: 이체 ID

        Returns:
            Transfer 객체 또는 None
        """
        row = await self.db.fetchone_dict(
            "SELECT * FROM transfer WHERE user_id = ? AND transfer_id = ?",
            (user_id, transfer_id),
        )
        return Transfer.from_row(row) if row else None

    async def get_history(
        self,
        user_id: str,
        transfer_type: TransferType | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Transfer]:
        """이체 내역 조회 (최신순)

        Args:
            user_id: 사용자 ID
            transfer_type: 이체 유형 필터 (선택)
            limit: 조회 개수
            offset: 시작 위치

        Returns:
            Transfer 목록
        """
        query = "SELECT * FROM transfer WHERE user_id = ?"
        params: list[Any] = [user_id]

        if transfer_type:
            query += " AND transfer_type = ?"
            params.append(transfer_type.value)

        query += " ORDER BY transfer_date DESC, rowid DESC LIMIT ? OFFSET ?"
        params.extend([limit, offset])

        rows = await self.db.fetchall_dict(query, tuple(params))
        return [Transfer.from_row(row) for row in rows]

    async def sum_by_route(self, user_id: str) -> dict[RouteKey, Decimal]:
        """(출발지, 도착지, 상태)별 이체 합계

        Args:
            user_id: 사용자 ID

        Returns:
            {(from, to, status): 합계}
        """
        rows = await self.db.fetchall(
            """
            SELECT from_account, to_account, status, amount
            FROM transfer
            WHERE user_id = ?
            """,
            (user_id,),
        )

        totals: dict[RouteKey, Decimal] = {}
        for from_account, to_account, status, amount in rows:
            key = (
                TransferEndpoint(from_account),
                TransferEndpoint(to_account),
                TransferStatus(status),
            )
            totals[key] = totals.get(key, ZERO) + Decimal(str(amount))

        return totals
