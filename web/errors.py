"""
예외 → HTTP 응답 변환

잔액 부족 / 계좌 없음 / 잘못된 금액 → 400
항목 없음 → 404
저장소 실패 → 500
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from core.errors import (
    AccountsNotFoundError,
    EntityNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
    LedgerError,
    StorageError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[type[LedgerError], int] = {
    InsufficientFundsError: 400,
    AccountsNotFoundError: 400,
    InvalidAmountError: 400,
    EntityNotFoundError: 404,
    StorageError: 500,
}


def status_for(exc: LedgerError) -> int:
    """예외 클래스 계층에서 상태 코드 탐색 (미등록은 500)"""
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 500


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    status_code = status_for(exc)

    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc}")

    return JSONResponse(
        status_code=status_code,
        content={"error": str(exc), "code": type(exc).__name__},
    )


def register_error_handlers(app: FastAPI) -> None:
    """앱에 예외 핸들러 등록"""
    app.add_exception_handler(LedgerError, ledger_error_handler)
