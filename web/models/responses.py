"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화. 금액은 문자열.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.ledger import Account, LedgerTransaction, Transfer


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    mode: str = Field(..., description="실행 모드 (production/development)")
    version: str = Field(..., description="버전")


class ErrorResponse(BaseModel):
    """에러 응답"""

    error: str
    code: str


class AccountResponse(BaseModel):
    """계좌 응답"""

    account_id: str
    user_id: str
    category: str
    name: str
    balance: str
    version: int
    created_at: str
    updated_at: str
    last_rollover_at: str | None = None

    @classmethod
    def from_account(cls, account: Account) -> "AccountResponse":
        return cls(**account.to_dict())


class AccountSummaryResponse(BaseModel):
    """두 계좌 요약 응답"""

    user_id: str
    main: AccountResponse
    current: AccountResponse
    total: str
    currency: str


class TransferResponse(BaseModel):
    """이체 응답"""

    transfer_id: str
    user_id: str
    from_account: str
    to_account: str
    amount: str
    transfer_type: str
    status: str
    date: str
    description: str
    linked_entity_id: str | None = None
    created_at: str

    @classmethod
    def from_transfer(cls, transfer: Transfer) -> "TransferResponse":
        return cls(**transfer.to_dict())


class TransferHistoryResponse(BaseModel):
    """이체 내역 응답"""

    transfers: list[TransferResponse]
    total: int
    limit: int
    offset: int


class TransactionResponse(BaseModel):
    """거래 응답"""

    transaction_id: str
    user_id: str
    amount: str
    direction: str
    account: str
    category: str
    description: str
    date: str
    is_visible: bool
    special_category: str | None = None
    transfer_kind: str | None = None
    transfer_id: str | None = None
    linked_entity_id: str | None = None
    created_at: str

    @classmethod
    def from_transaction(cls, tx: LedgerTransaction) -> "TransactionResponse":
        return cls(**tx.to_dict())


class TransactionListResponse(BaseModel):
    """거래 목록 응답"""

    transactions: list[TransactionResponse]
    total: int
    limit: int
    offset: int


class ContributionResponse(BaseModel):
    """기여 결과 응답"""

    success: bool
    message: str


class RolloverResponse(BaseModel):
    """월말 정산 응답 (부족분 정산이면 amount 음수)"""

    status: str
    message: str
    amount: str


class SpecialEntityResponse(BaseModel):
    """특수 항목 응답"""

    entity_type: str
    entity: dict[str, Any]
