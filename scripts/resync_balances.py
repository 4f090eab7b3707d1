"""
계좌 잔액 재동기화

중단된 작업 등으로 저장된 잔액이 원장과 어긋났을 때 실행.
모든 사용자 (또는 지정 사용자)의 MAIN / CURRENT 잔액을 재계산.

사용법:
    python scripts/resync_balances.py --mode production
    python scripts/resync_balances.py --mode development --dry-run
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# 프로젝트 루트 추가
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import get_settings
from core.ledger import LedgerStore
from core.logging import setup_logging
from core.types import AccountCategory
from wallet.balance import BalanceSynchronizer

logger = logging.getLogger(__name__)


async def main(
    mode: str | None = None,
    user_id: str | None = None,
    dry_run: bool = False,
) -> None:
    """재동기화 실행"""
    settings = get_settings()
    db_path = settings.db_path_for(mode)
    logger.info("=== 잔액 재동기화 시작 ===")
    logger.info(f"Mode: {mode or settings.mode.value}, DB: {db_path}, Dry Run: {dry_run}")

    if not db_path.exists():
        logger.error(f"DB 파일이 존재하지 않습니다: {db_path}")
        return

    async with SQLiteAdapter(db_path) as db:
        store = LedgerStore(db)
        synchronizer = BalanceSynchronizer(db)

        user_ids = [user_id] if user_id else await store.list_users_with_accounts()
        drifted = 0

        for uid in user_ids:
            for category in AccountCategory:
                account = await store.get_account(uid, category)
                if account is None:
                    continue

                expected = await synchronizer.compute_balance(uid, category)
                if expected == account.balance:
                    continue

                drifted += 1
                logger.warning(
                    f"{uid} {category.value}: stored={account.balance}, "
                    f"ledger={expected}"
                )

            if not dry_run:
                await synchronizer.sync_all(uid)

        logger.info(f"=== 완료: 사용자 {len(user_ids)}, 불일치 계좌 {drifted} ===")
        if dry_run:
            logger.info("(Dry Run - 실제 저장되지 않음)")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="SmartWallet 잔액 재동기화")
    parser.add_argument(
        "--mode",
        choices=["development", "production"],
        default=None,
        help="실행 모드 (기본: settings.yaml의 mode)",
    )
    parser.add_argument("--user", default=None, help="특정 사용자만 (기본: 전체)")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="불일치만 보고하고 저장하지 않음",
    )

    args = parser.parse_args()
    setup_logging("scripts")
    asyncio.run(main(args.mode, args.user, args.dry_run))
