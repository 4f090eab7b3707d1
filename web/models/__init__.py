"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    DebtCreateRequest,
    GoalCreateRequest,
    InvestmentCreateRequest,
    RolloverRequest,
    SpecialTransferRequest,
    TransactionCreateRequest,
    TransferRequest,
)
from web.models.responses import (
    AccountResponse,
    AccountSummaryResponse,
    ContributionResponse,
    ErrorResponse,
    HealthResponse,
    RolloverResponse,
    SpecialEntityResponse,
    TransactionListResponse,
    TransactionResponse,
    TransferHistoryResponse,
    TransferResponse,
)

__all__ = [
    # Requests
    "TransferRequest",
    "SpecialTransferRequest",
    "RolloverRequest",
    "TransactionCreateRequest",
    "DebtCreateRequest",
    "InvestmentCreateRequest",
    "GoalCreateRequest",
    # Responses
    "HealthResponse",
    "ErrorResponse",
    "AccountResponse",
    "AccountSummaryResponse",
    "TransferResponse",
    "TransferHistoryResponse",
    "TransactionResponse",
    "TransactionListResponse",
    "ContributionResponse",
    "RolloverResponse",
    "SpecialEntityResponse",
]
