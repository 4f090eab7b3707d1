"""
월말 정산 실행

외부 스케줄러 (cron 등)에서 월 1회 호출.
같은 달 중복 실행 방지는 스케줄러 책임.

사용법:
    python scripts/month_end_rollover.py --mode production
    python scripts/month_end_rollover.py --mode development --user user-1
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# 프로젝트 루트 추가
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.config.loader import get_settings
from core.logging import setup_logging
from wallet.rollover import RolloverEngine
from wallet.transfer import TransferEngine

logger = logging.getLogger(__name__)


async def main(mode: str | None = None, user_id: str | None = None) -> int:
    """정산 실행

    settings.yaml의 database.path가 있으면 mode 기본 경로보다 우선.

    Returns:
        종료 코드 (실패 사용자가 있으면 1)
    """
    settings = get_settings()
    db_path = settings.db_path_for(mode)
    logger.info("=== 월말 정산 시작 ===")
    logger.info(f"Mode: {mode or settings.mode.value}, DB: {db_path}")

    if not db_path.exists():
        logger.error(f"DB 파일이 존재하지 않습니다: {db_path}")
        return 1

    async with SQLiteAdapter(db_path) as db:
        await init_schema(db)

        engine = RolloverEngine(
            db,
            transfer_engine=TransferEngine(
                db, withdraw_destination=settings.withdraw_destination
            ),
        )

        if user_id:
            result = await engine.perform_month_end_rollover(user_id)
            logger.info(f"{user_id}: {result.message} (amount={result.amount})")
            return 0

        batch = await engine.perform_rollover_for_all_users()
        for uid, result in batch.results.items():
            logger.info(f"{uid}: {result.message} (amount={result.amount})")
        for uid, error in batch.errors.items():
            logger.error(f"{uid}: {error}")

        logger.info(f"=== 정산 완료: 성공 {batch.processed}, 실패 {batch.failed} ===")
        return 1 if batch.failed else 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="SmartWallet 월말 정산")
    parser.add_argument(
        "--mode",
        choices=["development", "production"],
        default=None,
        help="실행 모드 (기본: settings.yaml의 mode)",
    )
    parser.add_argument(
        "--user",
        default=None,
        help="특정 사용자만 정산 (기본: 전체)",
    )

    args = parser.parse_args()
    setup_logging("scripts")
    sys.exit(asyncio.run(main(args.mode, args.user)))
