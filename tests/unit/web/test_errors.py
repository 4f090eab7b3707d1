"""web/errors.py 테스트"""

from decimal import Decimal

import pytest

from core.errors import (
    AccountsNotFoundError,
    EntityNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
    LedgerError,
    StorageError,
)
from web.errors import status_for


class TestStatusFor:
    """예외 → 상태 코드"""

    @pytest.mark.parametrize(
        "exc, expected",
        [
            (InsufficientFundsError("main", Decimal("1"), Decimal("2")), 400),
            (AccountsNotFoundError("u1"), 400),
            (InvalidAmountError(Decimal("0")), 400),
            (EntityNotFoundError("goal", "goal-1"), 404),
            (StorageError("disk full"), 500),
            (LedgerError("unknown"), 500),
        ],
    )
    def test_mapping(self, exc: LedgerError, expected: int) -> None:
        assert status_for(exc) == expected

    def test_subclass_inherits_mapping(self) -> None:
        class CustomNotFound(EntityNotFoundError):
            pass

        assert status_for(CustomNotFound("debt", "d-1")) == 404

    def test_error_messages(self) -> None:
        exc = InsufficientFundsError("current", Decimal("10"), Decimal("25"))

        assert "current" in str(exc)
        assert "available=10" in str(exc)
        assert "requested=25" in str(exc)
