"""
FastAPI 애플리케이션

라우터 등록 및 앱 설정.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config.loader import get_settings
from core.constants import Defaults
from core.logging import setup_logging

# 로깅 설정 (콘솔 + 파일)
setup_logging("web")

from web.errors import register_error_handlers
from web.routes import accounts, health, special, transactions, transfer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리

    시작 시 DB 연결 + 스키마 초기화, 종료 시 연결 종료.
    """
    from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema

    settings = get_settings()

    db = SQLiteAdapter(settings.db_path)
    await db.connect()
    await init_schema(db)
    app.state.db = db
    logger.info(f"Web 시작: mode={settings.mode.value}, db={settings.db_path}")

    yield

    await db.close()
    logger.info("Web: DB 연결 종료 완료")


app = FastAPI(
    title="SmartWallet API",
    description="MAIN / CURRENT 이중 계좌 잔액 및 이체 관리 API",
    version=Defaults.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS 설정 (개발용)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# =========================================================================
# API 라우터 등록
# =========================================================================

app.include_router(health.router)
app.include_router(accounts.router)
app.include_router(transfer.router)
app.include_router(transactions.router)
app.include_router(special.router)
