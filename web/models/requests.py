"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증.
금액은 숫자 또는 문자열 모두 허용 (Decimal 변환). 양수 검증은 서비스 계층 담당.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from core.types import (
    AccountCategory,
    DebtType,
    EntityType,
    InvestmentType,
    TransactionDirection,
)


class TransferRequest(BaseModel):
    """MAIN ↔ CURRENT 이체 요청"""

    user_id: str = Field(..., min_length=1, description="사용자 ID")
    amount: Decimal = Field(..., description="금액")
    description: str = Field(default="", description="설명")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"user_id": "user-1", "amount": "500", "description": "Groceries"},
            ]
        }
    }


class SpecialTransferRequest(BaseModel):
    """특수 항목 인출 / 기여 요청"""

    user_id: str = Field(..., min_length=1, description="사용자 ID")
    entity_type: EntityType = Field(..., description="항목 종류 (debt/investment/goal)")
    entity_id: str = Field(..., min_length=1, description="항목 ID")
    amount: Decimal = Field(..., description="금액")
    description: str = Field(default="", description="설명")


class RolloverRequest(BaseModel):
    """월말 정산 요청"""

    user_id: str = Field(..., min_length=1, description="사용자 ID")


class TransactionCreateRequest(BaseModel):
    """수입 / 지출 기록 요청"""

    user_id: str = Field(..., min_length=1, description="사용자 ID")
    account: AccountCategory = Field(
        default=AccountCategory.CURRENT, description="계좌 (main/current)"
    )
    direction: TransactionDirection = Field(..., description="income 또는 expense")
    amount: Decimal = Field(..., description="금액")
    category: str = Field(..., min_length=1, description="카테고리")
    description: str = Field(default="", description="설명")
    date: datetime | None = Field(default=None, description="거래 일시")


class DebtCreateRequest(BaseModel):
    """부채 생성 요청"""

    user_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    debt_type: DebtType = Field(default=DebtType.OTHER)
    original_amount: Decimal = Field(..., ge=0)
    current_balance: Decimal | None = Field(default=None, ge=0)
    interest_rate: Decimal = Field(default=Decimal("0"), ge=0)
    minimum_payment: Decimal = Field(default=Decimal("0"), ge=0)
    due_date: datetime | None = None


class InvestmentCreateRequest(BaseModel):
    """투자 생성 요청"""

    user_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    investment_type: InvestmentType = Field(default=InvestmentType.OTHER)
    initial_amount: Decimal = Field(..., ge=0)
    current_value: Decimal | None = Field(default=None, ge=0)
    rate_per_annum: Decimal = Field(default=Decimal("0"))
    symbol: str | None = None
    purchase_date: datetime | None = None
    notes: str | None = None


class GoalCreateRequest(BaseModel):
    """저축 목표 생성 요청"""

    user_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    target_amount: Decimal = Field(..., gt=0)
    current_amount: Decimal = Field(default=Decimal("0"), ge=0)
    deadline: datetime | None = None
