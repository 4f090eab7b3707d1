"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
DB 연결은 lifespan에서 하나만 열어 app.state에 보관.
쓰기 트랜잭션 직렬화가 연결 단위이므로 요청마다 새 연결을 열지 않음.
"""

from fastapi import Depends, Request

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings, get_settings
from core.types import EntityType
from wallet.accounts import AccountService
from wallet.rollover import RolloverEngine
from wallet.special import SpecialEntityHandler, build_handlers
from wallet.transactions import TransactionService
from wallet.transfer import TransferEngine


def get_app_settings() -> Settings:
    """애플리케이션 설정 반환"""
    return get_settings()


def get_db(request: Request) -> SQLiteAdapter:
    """공유 DB 어댑터 반환"""
    return request.app.state.db


def get_account_service(
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> AccountService:
    return AccountService(db, currency=settings.currency)


def get_transaction_service(
    db: SQLiteAdapter = Depends(get_db),
) -> TransactionService:
    return TransactionService(db)


def get_special_handlers(
    db: SQLiteAdapter = Depends(get_db),
) -> dict[EntityType, SpecialEntityHandler]:
    return build_handlers(db)


def get_transfer_engine(
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    handlers: dict[EntityType, SpecialEntityHandler] = Depends(get_special_handlers),
) -> TransferEngine:
    """설정의 인출 계좌를 반영한 TransferEngine"""
    return TransferEngine(
        db,
        withdraw_destination=settings.withdraw_destination,
        handlers=handlers,
    )


def get_rollover_engine(
    db: SQLiteAdapter = Depends(get_db),
    engine: TransferEngine = Depends(get_transfer_engine),
) -> RolloverEngine:
    return RolloverEngine(db, transfer_engine=engine)
