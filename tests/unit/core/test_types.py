"""
core/types.py 테스트

Enum 값이 DB / API 문자열과 일치하는지 확인
"""

import pytest

from core.types import (
    AccountAffiliation,
    AccountCategory,
    EntityType,
    GoalStatus,
    SpecialCategory,
    TransferEndpoint,
    TransferKind,
    TransferType,
)


class TestAccountCategory:
    def test_values(self) -> None:
        assert AccountCategory.MAIN.value == "main"
        assert AccountCategory.CURRENT.value == "current"

    def test_affiliation_covers_categories(self) -> None:
        """모든 계좌 종류는 거래 소속으로 변환 가능"""
        for category in AccountCategory:
            assert AccountAffiliation(category.value).value == category.value

    def test_endpoint_covers_categories(self) -> None:
        for category in AccountCategory:
            assert TransferEndpoint(category.value).value == category.value


class TestEntityType:
    """특수 항목 종류 변환"""

    @pytest.mark.parametrize("entity_type", list(EntityType))
    def test_endpoint(self, entity_type: EntityType) -> None:
        assert entity_type.endpoint == TransferEndpoint(entity_type.value)

    @pytest.mark.parametrize("entity_type", list(EntityType))
    def test_special_category(self, entity_type: EntityType) -> None:
        assert entity_type.special_category == SpecialCategory(entity_type.value)

    def test_from_string(self) -> None:
        assert EntityType("goal") == EntityType.GOAL


class TestTransferEnums:
    def test_transfer_types(self) -> None:
        assert {t.value for t in TransferType} == {"borrow", "repay", "withdraw", "deposit"}

    def test_rollover_kinds(self) -> None:
        assert TransferKind.ROLLOVER_SURPLUS.value == "rollover_surplus"
        assert TransferKind.ROLLOVER_DEFICIT.value == "rollover_deficit"

    def test_goal_status_uses_hyphen(self) -> None:
        assert GoalStatus.IN_PROGRESS.value == "in-progress"
