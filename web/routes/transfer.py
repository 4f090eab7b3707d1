"""
이체 API 라우터

POST /api/transfers/borrow      - MAIN → CURRENT
POST /api/transfers/repay       - CURRENT → MAIN
POST /api/transfers/withdraw    - 특수 항목 → 인출 계좌
POST /api/transfers/contribute  - MAIN → 특수 항목
GET  /api/transfers/{user_id}   - 이체 내역 (최신순)
"""

import logging

from fastapi import APIRouter, Depends, Query

from core.types import TransferType
from wallet.transfer import TransferEngine
from web.dependencies import get_transfer_engine
from web.models.requests import SpecialTransferRequest, TransferRequest
from web.models.responses import (
    ContributionResponse,
    TransferHistoryResponse,
    TransferResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/transfers", tags=["Transfer"])


@router.post("/borrow", response_model=TransferResponse)
async def borrow_from_main(
    request: TransferRequest,
    engine: TransferEngine = Depends(get_transfer_engine),
) -> TransferResponse:
    """MAIN에서 CURRENT로 차입"""
    transfer = await engine.borrow_from_main(
        request.user_id, request.amount, request.description
    )
    return TransferResponse.from_transfer(transfer)


@router.post("/repay", response_model=TransferResponse)
async def repay_to_main(
    request: TransferRequest,
    engine: TransferEngine = Depends(get_transfer_engine),
) -> TransferResponse:
    """CURRENT에서 MAIN으로 상환"""
    transfer = await engine.repay_to_main(
        request.user_id, request.amount, request.description
    )
    return TransferResponse.from_transfer(transfer)


@router.post("/withdraw", response_model=TransferResponse)
async def withdraw_from_special(
    request: SpecialTransferRequest,
    engine: TransferEngine = Depends(get_transfer_engine),
) -> TransferResponse:
    """특수 항목에서 인출"""
    transfer = await engine.withdraw_from_special(
        request.user_id,
        request.entity_type,
        request.entity_id,
        request.amount,
        request.description,
    )
    return TransferResponse.from_transfer(transfer)


@router.post("/contribute", response_model=ContributionResponse)
async def contribute_to_special(
    request: SpecialTransferRequest,
    engine: TransferEngine = Depends(get_transfer_engine),
) -> ContributionResponse:
    """MAIN에서 특수 항목으로 기여"""
    result = await engine.process_special_contribution(
        request.user_id,
        request.entity_type,
        request.entity_id,
        request.amount,
        request.description,
    )
    return ContributionResponse(success=result.success, message=result.message)


@router.get("/{user_id}", response_model=TransferHistoryResponse)
async def get_transfer_history(
    user_id: str,
    transfer_type: TransferType | None = Query(default=None, description="이체 유형"),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    engine: TransferEngine = Depends(get_transfer_engine),
) -> TransferHistoryResponse:
    """이체 내역 조회 (최신순)"""
    transfers = await engine.get_transfer_history(
        user_id,
        transfer_type=transfer_type,
        limit=limit,
        offset=offset,
    )
    return TransferHistoryResponse(
        transfers=[TransferResponse.from_transfer(t) for t in transfers],
        total=len(transfers),
        limit=limit,
        offset=offset,
    )
