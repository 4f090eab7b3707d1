"""
계좌 API 라우터

GET  /api/accounts/main/{user_id}     - MAIN 계좌 (생성 + 동기화)
GET  /api/accounts/current/{user_id}  - CURRENT 계좌 (생성 + 동기화)
GET  /api/accounts/summary/{user_id}  - 두 계좌 요약
POST /api/accounts/rollover           - 월말 정산
"""

from fastapi import APIRouter, Depends

from core.types import AccountCategory
from wallet.accounts import AccountService
from wallet.rollover import RolloverEngine
from web.dependencies import get_account_service, get_rollover_engine
from web.models.requests import RolloverRequest
from web.models.responses import (
    AccountResponse,
    AccountSummaryResponse,
    RolloverResponse,
)

router = APIRouter(prefix="/api/accounts", tags=["Accounts"])


@router.get("/main/{user_id}", response_model=AccountResponse)
async def get_main_account(
    user_id: str,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """MAIN 계좌 조회 (없으면 생성)"""
    account = await service.get_synced_account(user_id, AccountCategory.MAIN)
    return AccountResponse.from_account(account)


@router.get("/current/{user_id}", response_model=AccountResponse)
async def get_current_account(
    user_id: str,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """CURRENT 계좌 조회 (없으면 생성)"""
    account = await service.get_synced_account(user_id, AccountCategory.CURRENT)
    return AccountResponse.from_account(account)


@router.get("/summary/{user_id}", response_model=AccountSummaryResponse)
async def get_account_summary(
    user_id: str,
    service: AccountService = Depends(get_account_service),
) -> AccountSummaryResponse:
    """두 계좌 요약"""
    summary = await service.get_summary(user_id)
    return AccountSummaryResponse(**summary)


@router.post("/rollover", response_model=RolloverResponse)
async def perform_rollover(
    request: RolloverRequest,
    engine: RolloverEngine = Depends(get_rollover_engine),
) -> RolloverResponse:
    """월말 정산 실행

    CURRENT 잔액을 MAIN으로 정산. 부족분 정산이면 amount 음수.
    """
    result = await engine.perform_month_end_rollover(request.user_id)
    return RolloverResponse(
        status=result.status,
        message=result.message,
        amount=str(result.amount),
    )
