"""
core/config/loader.py 테스트

settings.yaml 로드, 검증, Settings 싱글턴 테스트
"""

from pathlib import Path

import pytest

from core.config.loader import (
    AppConfig,
    ConfigLoadError,
    LedgerConfig,
    Settings,
    get_db_path,
    get_settings,
    load_config,
)
from core.constants import Defaults, Paths
from core.types import AccountCategory, AppMode


class TestGetDbPath:
    """get_db_path 테스트"""

    def test_production_mode(self) -> None:
        assert get_db_path(AppMode.PRODUCTION) == Paths.PROD_DB

    def test_development_mode(self) -> None:
        assert get_db_path(AppMode.DEVELOPMENT) == Paths.DEV_DB

    def test_string_mode(self) -> None:
        """문자열 모드 (대소문자 무시)"""
        assert get_db_path("PRODUCTION") == Paths.PROD_DB
        assert isinstance(get_db_path("development"), Path)


class TestLoadConfig:
    """load_config 테스트"""

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        """파일 없으면 development 기본값"""
        config = load_config(tmp_path / "nope.yaml")

        assert config.mode == AppMode.DEVELOPMENT
        assert config.db_path == Paths.DEV_DB
        assert config.ledger.withdraw_destination == AccountCategory.CURRENT
        assert config.ledger.currency == Defaults.CURRENCY
        assert config.web.port == Defaults.WEB_PORT

    def test_load_full_file(self, temp_settings_file: Path) -> None:
        """모든 섹션 로드"""
        config = load_config(temp_settings_file)

        assert config.mode == AppMode.PRODUCTION
        assert config.db_path == Paths.PROD_DB
        assert config.ledger.withdraw_destination == AccountCategory.MAIN
        assert config.ledger.currency == "EUR"
        assert config.web.host == "0.0.0.0"
        assert config.web.port == 9000

    def test_database_path_override(self, tmp_path: Path) -> None:
        """database.path 지정 시 기본 경로 대신 사용"""
        custom = tmp_path / "custom.db"
        path = tmp_path / "settings.yaml"
        path.write_text(f"database:\n  path: {custom.as_posix()}\n", encoding="utf-8")

        assert load_config(path).db_path == custom

    def test_empty_file(self, tmp_path: Path) -> None:
        """빈 파일은 기본값"""
        path = tmp_path / "settings.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(path).mode == AppMode.DEVELOPMENT

    def test_invalid_mode(self, tmp_path: Path) -> None:
        """잘못된 mode"""
        path = tmp_path / "settings.yaml"
        path.write_text("mode: staging\n", encoding="utf-8")

        with pytest.raises(ValueError):
            load_config(path)

    def test_invalid_withdraw_destination(self, tmp_path: Path) -> None:
        """인출 계좌는 main/current만 허용"""
        path = tmp_path / "settings.yaml"
        path.write_text("ledger:\n  withdraw_destination: goal\n", encoding="utf-8")

        with pytest.raises(ConfigLoadError):
            load_config(path)

    def test_invalid_port(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("web:\n  port: abc\n", encoding="utf-8")

        with pytest.raises(ConfigLoadError):
            load_config(path)

    def test_non_mapping_root(self, tmp_path: Path) -> None:
        """최상위가 리스트면 실패"""
        path = tmp_path / "settings.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigLoadError):
            load_config(path)

    def test_frozen(self, tmp_path: Path) -> None:
        """불변성 확인"""
        config = load_config(tmp_path / "nope.yaml")

        assert isinstance(config, AppConfig)
        assert isinstance(config.ledger, LedgerConfig)
        with pytest.raises(AttributeError):
            config.mode = AppMode.PRODUCTION  # type: ignore


class TestSettings:
    """Settings 싱글턴 테스트"""

    def test_singleton(self, temp_settings_file: Path) -> None:
        first = get_settings(temp_settings_file)
        second = get_settings()

        assert first is second
        assert second.mode == AppMode.PRODUCTION
        assert second.withdraw_destination == AccountCategory.MAIN

    def test_reset(self, temp_settings_file: Path, tmp_path: Path) -> None:
        """reset 후 다시 로드"""
        get_settings(temp_settings_file)
        Settings.reset()

        settings = get_settings(tmp_path / "nope.yaml")
        assert settings.mode == AppMode.DEVELOPMENT
        assert settings.db_path == Paths.DEV_DB

    def test_currency(self, temp_settings_file: Path) -> None:
        assert get_settings(temp_settings_file).currency == "EUR"


class TestDbPathFor:
    """스크립트 DB 경로 결정"""

    def test_mode_default_paths(self, temp_settings_file: Path) -> None:
        """override 없으면 mode별 기본 경로"""
        settings = get_settings(temp_settings_file)

        assert settings.db_path_for() == Paths.PROD_DB
        assert settings.db_path_for("development") == Paths.DEV_DB
        assert settings.db_path_for(AppMode.PRODUCTION) == Paths.PROD_DB

    def test_override_wins_over_mode(self, tmp_path: Path) -> None:
        """database.path는 mode 인자보다 우선"""
        custom = tmp_path / "custom.db"
        path = tmp_path / "settings.yaml"
        path.write_text(
            f"mode: development\ndatabase:\n  path: {custom.as_posix()}\n",
            encoding="utf-8",
        )
        settings = get_settings(path)

        assert settings.config.db_override == custom
        assert settings.db_path_for() == custom
        assert settings.db_path_for("production") == custom
        assert settings.db_path_for(AppMode.DEVELOPMENT) == custom
