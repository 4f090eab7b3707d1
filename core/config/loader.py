"""
설정 로더

settings.yaml 로드 및 애플리케이션 설정 생성
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from core.constants import Defaults, Paths
from core.types import AccountCategory, AppMode


@dataclass(frozen=True)
class LedgerConfig:
    """Ledger 동작 설정

    withdraw_destination: 특수 항목 출금 시 입금될 계좌
    """

    withdraw_destination: AccountCategory
    currency: str


@dataclass(frozen=True)
class WebConfig:
    """Web 서버 설정"""

    host: str
    port: int


@dataclass(frozen=True)
class AppConfig:
    """애플리케이션 설정 (settings.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    mode: AppMode
    db_path: Path
    ledger: LedgerConfig
    web: WebConfig
    db_override: Path | None = None


class ConfigLoadError(Exception):
    """설정 로드 실패 예외"""

    pass


def get_db_path(mode: AppMode | str) -> Path:
    """모드에 따른 기본 DB 경로 반환

    Args:
        mode: 실행 모드 (PRODUCTION/DEVELOPMENT)

    Returns:
        DB 파일 경로 (Path 타입)
    """
    if isinstance(mode, str):
        mode = AppMode(mode.lower())

    if mode == AppMode.PRODUCTION:
        return Paths.PROD_DB
    return Paths.DEV_DB


def _parse_mode(data: dict[str, Any]) -> AppMode:
    mode_str = data.get("mode", AppMode.DEVELOPMENT.value)
    try:
        return AppMode(str(mode_str).lower())
    except ValueError as e:
        valid_modes = [m.value for m in AppMode]
        raise ValueError(
            f"유효하지 않은 mode입니다: '{mode_str}'. "
            f"유효한 값: {valid_modes}"
        ) from e


def _parse_ledger(data: dict[str, Any]) -> LedgerConfig:
    section = data.get("ledger") or {}
    if not isinstance(section, dict):
        raise ConfigLoadError("settings.yaml의 'ledger' 섹션 형식이 잘못되었습니다")

    destination = section.get("withdraw_destination", AccountCategory.CURRENT.value)
    try:
        withdraw_destination = AccountCategory(str(destination).lower())
    except ValueError as e:
        raise ConfigLoadError(
            f"withdraw_destination은 main 또는 current여야 합니다: '{destination}'"
        ) from e

    return LedgerConfig(
        withdraw_destination=withdraw_destination,
        currency=str(section.get("currency", Defaults.CURRENCY)),
    )


def _parse_web(data: dict[str, Any]) -> WebConfig:
    section = data.get("web") or {}
    if not isinstance(section, dict):
        raise ConfigLoadError("settings.yaml의 'web' 섹션 형식이 잘못되었습니다")

    try:
        port = int(section.get("port", Defaults.WEB_PORT))
    except (TypeError, ValueError) as e:
        raise ConfigLoadError(f"web.port가 숫자가 아닙니다: {section.get('port')}") from e

    return WebConfig(
        host=str(section.get("host", Defaults.WEB_HOST)),
        port=port,
    )


def load_config(path: Path | None = None) -> AppConfig:
    """settings.yaml 파일 로드

    파일이 없으면 기본값 (development 모드) 사용.

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        AppConfig 인스턴스

    Raises:
        ConfigLoadError: 형식이 잘못된 경우
        ValueError: 유효하지 않은 mode인 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    data: dict[str, Any] = {}
    if path.exists():
        try:
            content = path.read_text(encoding="utf-8")
            loaded = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigLoadError(f"settings.yaml 파싱 실패: {e}") from e

        if loaded is not None:
            if not isinstance(loaded, dict):
                raise ConfigLoadError("settings.yaml 최상위는 매핑이어야 합니다")
            data = loaded

    mode = _parse_mode(data)

    database = data.get("database") or {}
    override = database.get("path") if isinstance(database, dict) else None
    db_override = Path(override) if override else None
    db_path = db_override or get_db_path(mode)

    return AppConfig(
        mode=mode,
        db_path=db_path,
        ledger=_parse_ledger(data),
        web=_parse_web(data),
        db_override=db_override,
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _config: AppConfig | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._config is None:
            type(self)._config = load_config(settings_path)

    @property
    def config(self) -> AppConfig:
        """전체 설정"""
        assert self._config is not None
        return self._config

    @property
    def mode(self) -> AppMode:
        """현재 실행 모드"""
        return self.config.mode

    @property
    def db_path(self) -> Path:
        """현재 모드의 DB 경로"""
        return self.config.db_path

    def db_path_for(self, mode: AppMode | str | None = None) -> Path:
        """스크립트용 DB 경로

        database.path가 설정되어 있으면 mode와 무관하게 그 경로 사용.

        Args:
            mode: 실행 모드 (None이면 settings.yaml의 mode)
        """
        if self.config.db_override is not None:
            return self.config.db_override
        if mode is None:
            return self.config.db_path
        return get_db_path(mode)

    @property
    def withdraw_destination(self) -> AccountCategory:
        """특수 항목 출금 도착 계좌"""
        return self.config.ledger.withdraw_destination

    @property
    def currency(self) -> str:
        """표시용 통화 코드"""
        return self.config.ledger.currency

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._config = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
