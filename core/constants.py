"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from decimal import Decimal
from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → smartwallet/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Defaults:
    """기본값 상수"""

    APP_NAME: str = "SmartWallet"
    VERSION: str = "1.0.0"

    MAIN_ACCOUNT_NAME: str = "Main Account"
    CURRENT_ACCOUNT_NAME: str = "Current Account"
    CURRENCY: str = "USD"

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000

    LOG_LEVEL: str = "INFO"
    HISTORY_LIMIT: int = 50


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    WEB_LOGS_DIR: Path = LOGS_DIR / "web"
    SCRIPTS_LOGS_DIR: Path = LOGS_DIR / "scripts"

    # 설정 파일
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"

    # DB 파일
    PROD_DB: Path = DATA_DIR / "smartwallet_prod.db"
    DEV_DB: Path = DATA_DIR / "smartwallet_dev.db"


class TransactionLabels:
    """거래 카테고리 라벨 (화면 표시용)"""

    TRANSFER: str = "Transfer"
    DEBT: str = "Debt Repayment"
    INVESTMENT: str = "Investment"
    GOAL: str = "Savings Goal"


# 금액 0 (Decimal 비교용)
ZERO: Decimal = Decimal("0")
