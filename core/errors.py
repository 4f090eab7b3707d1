"""
Ledger 예외 정의

서비스 계층에서 발생하는 예외. 자동 재시도 없음.
HTTP 계층에서 상태 코드로 변환 (web/errors.py).
"""

from decimal import Decimal


class LedgerError(Exception):
    """Ledger 예외 기본 클래스"""

    pass


class InsufficientFundsError(LedgerError):
    """잔액 부족

    Args:
        source: 출금 대상 (main, current, investment, goal)
        available: 현재 잔액
        requested: 요청 금액
    """

    def __init__(self, source: str, available: Decimal, requested: Decimal):
        self.source = source
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient funds in {source}: "
            f"available={available}, requested={requested}"
        )


class AccountsNotFoundError(LedgerError):
    """MAIN 또는 CURRENT 계좌 없음"""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"Accounts not found for user: {user_id}")


class EntityNotFoundError(LedgerError):
    """특수 항목 (Debt/Investment/Goal) 없음"""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} not found: {entity_id}")


class InvalidAmountError(LedgerError):
    """금액이 0 이하이거나 유한하지 않음 (NaN, Infinity)"""

    def __init__(self, amount: Decimal):
        self.amount = amount
        super().__init__(f"Amount must be positive: {amount}")


class StorageError(LedgerError):
    """저장소 실패 (재시도하지 않음)"""

    pass
