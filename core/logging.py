"""
SmartWallet 로그 출력 설정

API 서버 (web)와 운영 스크립트 (scripts)가 시작할 때 한 번 호출.
표준 출력과 일 단위로 교체되는 파일에 같은 형식으로 기록.

    from core.logging import setup_logging
    setup_logging("scripts")
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.constants import Paths

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_RETENTION_DAYS = 7

PROCESS_LOG_DIRS: dict[str, Path] = {
    "web": Paths.WEB_LOGS_DIR,
    "scripts": Paths.SCRIPTS_LOGS_DIR,
}

# WARNING 미만은 버리는 서드파티 로거
QUIET_LOGGERS = (
    "aiosqlite",
    "uvicorn.access",
    "httpx",
    "httpcore",
)


def get_log_file_path(process_name: str) -> Path:
    """프로세스별 로그 파일 위치 (web, scripts 외에는 logs/ 바로 아래)"""
    log_dir = PROCESS_LOG_DIRS.get(process_name, Paths.LOGS_DIR)
    return log_dir / f"{process_name}.log"


def _daily_file_handler(log_file: Path, level: int) -> TimedRotatingFileHandler:
    handler = TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",
        backupCount=LOG_RETENTION_DAYS,
        encoding="utf-8",
    )
    # 교체된 파일 이름: scripts.log.2026-10-19
    handler.suffix = "%Y-%m-%d"
    handler.setLevel(level)
    return handler


def setup_logging(
    process_name: str,
    console_level: int = logging.INFO,
    file_level: int = logging.INFO,
    log_file: Path | None = None,
) -> logging.Logger:
    """루트 로거에 콘솔 / 파일 핸들러 설치

    다시 호출하면 이전 핸들러를 닫고 교체.

    Args:
        process_name: "web" 또는 "scripts"
        console_level: 표준 출력 레벨
        file_level: 파일 레벨
        log_file: 파일 위치 (None이면 get_log_file_path 결과)

    Returns:
        루트 Logger
    """
    log_file = log_file or get_log_file_path(process_name)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    root.setLevel(min(console_level, file_level))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(console_level)

    for handler in (console, _daily_file_handler(log_file, file_level)):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root.info(
        f"[{process_name}] 로그 출력 시작: 파일={log_file}, "
        f"콘솔={logging.getLevelName(console_level)}, "
        f"파일 레벨={logging.getLevelName(file_level)}, 보관={LOG_RETENTION_DAYS}일"
    )

    return root
