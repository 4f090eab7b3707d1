"""
Ledger 레코드 정의

Account, LedgerTransaction, Transfer 데이터클래스.
DB 행(dict)과의 변환 담당.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from core.types import (
    AccountAffiliation,
    AccountCategory,
    SpecialCategory,
    TransactionDirection,
    TransferEndpoint,
    TransferKind,
    TransferStatus,
    TransferType,
)


def _parse_ts(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


@dataclass
class Account:
    """계좌

    balance는 파생값. BalanceSynchronizer가 거래/이체 내역에서 재계산.

    Attributes:
        account_id: 계좌 ID
        user_id: 소유 사용자
        category: main 또는 current
        name: 표시 이름
        balance: 잔액 (음수 가능)
        version: 잔액 저장 횟수
        created_at: 생성 시각
        updated_at: 수정 시각
        last_rollover_at: 마지막 월말 정산 시각
    """

    account_id: str
    user_id: str
    category: AccountCategory
    name: str
    balance: Decimal
    version: int
    created_at: datetime
    updated_at: datetime
    last_rollover_at: datetime | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Account":
        """DB 행에서 생성"""
        return cls(
            account_id=row["account_id"],
            user_id=row["user_id"],
            category=AccountCategory(row["category"]),
            name=row["name"],
            balance=Decimal(str(row["balance"])),
            version=int(row["version"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
            last_rollover_at=_parse_ts(row.get("last_rollover_at")),
        )

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환"""
        return {
            "account_id": self.account_id,
            "user_id": self.user_id,
            "category": self.category.value,
            "name": self.name,
            "balance": str(self.balance),
            "version": self.version,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "last_rollover_at": (
                self.last_rollover_at.isoformat() if self.last_rollover_at else None
            ),
        }


@dataclass
class LedgerTransaction:
    """거래 (append-only)

    amount는 항상 양수. 방향은 direction으로 구분.
    """

    transaction_id: str
    user_id: str
    amount: Decimal
    direction: TransactionDirection
    account: AccountAffiliation
    category: str
    description: str
    date: datetime
    is_visible: bool
    created_at: datetime
    special_category: SpecialCategory | None = None
    transfer_kind: TransferKind | None = None
    transfer_id: str | None = None
    linked_entity_id: str | None = None

    @property
    def signed_amount(self) -> Decimal:
        """부호 포함 금액 (expense는 음수)"""
        if self.direction == TransactionDirection.EXPENSE:
            return -self.amount
        return self.amount

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "LedgerTransaction":
        """DB 행에서 생성"""
        return cls(
            transaction_id=row["transaction_id"],
            user_id=row["user_id"],
            amount=Decimal(str(row["amount"])),
            direction=TransactionDirection(row["direction"]),
            account=AccountAffiliation(row["account"]),
            category=row["category"],
            description=row["description"],
            date=datetime.fromisoformat(row["tx_date"]),
            is_visible=bool(row["is_visible"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            special_category=(
                SpecialCategory(row["special_category"])
                if row.get("special_category")
                else None
            ),
            transfer_kind=(
                TransferKind(row["transfer_kind"])
                if row.get("transfer_kind")
                else None
            ),
            transfer_id=row.get("transfer_id"),
            linked_entity_id=row.get("linked_entity_id"),
        )

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환"""
        return {
            "transaction_id": self.transaction_id,
            "user_id": self.user_id,
            "amount": str(self.amount),
            "direction": self.direction.value,
            "account": self.account.value,
            "category": self.category,
            "description": self.description,
            "date": self.date.isoformat(),
            "is_visible": self.is_visible,
            "special_category": (
                self.special_category.value if self.special_category else None
            ),
            "transfer_kind": self.transfer_kind.value if self.transfer_kind else None,
            "transfer_id": self.transfer_id,
            "linked_entity_id": self.linked_entity_id,
            "created_at": self.created_at.isoformat(),
        }


@dataclass
class Transfer:
    """이체 정보

    Attributes:
        transfer_id: 이체 ID
        user_id: 소유 사용자
        from_account: 출발지
        to_account: 도착지
        amount: 금액 (양수)
        transfer_type: 이체 유형
        status: 상태 (현재 COMPLETED만 생성)
        date: 이체 시각
        description: 설명
        created_at: 생성 시각
        linked_entity_id: 연결된 특수 항목 ID
    """

    transfer_id: str
    user_id: str
    from_account: TransferEndpoint
    to_account: TransferEndpoint
    amount: Decimal
    transfer_type: TransferType
    status: TransferStatus
    date: datetime
    description: str
    created_at: datetime
    linked_entity_id: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Transfer":
        """DB 행에서 생성"""
        return cls(
            transfer_id=row["transfer_id"],
            user_id=row["user_id"],
            from_account=TransferEndpoint(row["from_account"]),
            to_account=TransferEndpoint(row["to_account"]),
            amount=Decimal(str(row["amount"])),
            transfer_type=TransferType(row["transfer_type"]),
            status=TransferStatus(row["status"]),
            date=datetime.fromisoformat(row["transfer_date"]),
            description=row["description"],
            created_at=datetime.fromisoformat(row["created_at"]),
            linked_entity_id=row.get("linked_entity_id"),
        )

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환"""
        return {
            "transfer_id": self.transfer_id,
            "user_id": self.user_id,
            "from_account": self.from_account.value,
            "to_account": self.to_account.value,
            "amount": str(self.amount),
            "transfer_type": self.transfer_type.value,
            "status": self.status.value,
            "date": self.date.isoformat(),
            "description": self.description,
            "linked_entity_id": self.linked_entity_id,
            "created_at": self.created_at.isoformat(),
        }
