"""
거래 API 라우터

POST /api/transactions                                   - 수입 / 지출 기록
GET  /api/transactions/{user_id}                         - CURRENT 노출 거래
GET  /api/transactions/{user_id}/special/{entity_type}   - 특수 항목 숨김 거래
"""

from fastapi import APIRouter, Depends, Query

from core.types import EntityType
from wallet.transactions import TransactionService
from web.dependencies import get_transaction_service
from web.models.requests import TransactionCreateRequest
from web.models.responses import TransactionListResponse, TransactionResponse

router = APIRouter(prefix="/api/transactions", tags=["Transactions"])


@router.post("", response_model=TransactionResponse)
async def record_transaction(
    request: TransactionCreateRequest,
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    """수입 / 지출 기록 (계좌 잔액 동기화 포함)"""
    tx = await service.record_transaction(
        user_id=request.user_id,
        account=request.account,
        direction=request.direction,
        amount=request.amount,
        category=request.category,
        description=request.description,
        date=request.date,
    )
    return TransactionResponse.from_transaction(tx)


@router.get("/{user_id}", response_model=TransactionListResponse)
async def get_visible_transactions(
    user_id: str,
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionListResponse:
    """CURRENT 계좌 노출 거래 (최신순)"""
    transactions = await service.get_visible_transactions(user_id, limit, offset)
    return TransactionListResponse(
        transactions=[TransactionResponse.from_transaction(t) for t in transactions],
        total=len(transactions),
        limit=limit,
        offset=offset,
    )


@router.get("/{user_id}/special/{entity_type}", response_model=TransactionListResponse)
async def get_special_transactions(
    user_id: str,
    entity_type: EntityType,
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionListResponse:
    """특수 항목 기여 거래 (MAIN 계좌 숨김 거래)"""
    transactions = await service.get_special_transactions(
        user_id, entity_type, limit, offset
    )
    return TransactionListResponse(
        transactions=[TransactionResponse.from_transaction(t) for t in transactions],
        total=len(transactions),
        limit=limit,
        offset=offset,
    )
