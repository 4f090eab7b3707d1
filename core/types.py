"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class AppMode(str, Enum):
    """실행 모드 (운영 / 개발)"""

    PRODUCTION = "production"
    DEVELOPMENT = "development"


class AccountCategory(str, Enum):
    """계좌 구분

    사용자마다 MAIN, CURRENT 계좌를 하나씩 보유.
    """

    MAIN = "main"  # 장기 저축 계좌
    CURRENT = "current"  # 일상 지출 계좌


class TransactionDirection(str, Enum):
    """거래 방향"""

    INCOME = "income"
    EXPENSE = "expense"


class AccountAffiliation(str, Enum):
    """거래가 속한 계좌"""

    MAIN = "main"
    CURRENT = "current"
    SPECIAL = "special"


class SpecialCategory(str, Enum):
    """특수 거래 분류

    TRANSFER는 이체에 딸린 동반 거래. 나머지는 특수 항목 납입.
    """

    TRANSFER = "transfer"
    DEBT = "debt"
    INVESTMENT = "investment"
    GOAL = "goal"


class TransferType(str, Enum):
    """이체 유형"""

    BORROW = "borrow"  # MAIN → CURRENT
    REPAY = "repay"  # CURRENT → MAIN
    WITHDRAW = "withdraw"  # 특수 항목 → 계좌
    DEPOSIT = "deposit"  # CURRENT → MAIN (월말 잉여금)


class TransferKind(str, Enum):
    """동반 거래에 기록되는 이체 태그

    월말 정산은 사용자 이체와 구분되는 전용 태그 사용.
    """

    BORROW = "borrow"
    REPAY = "repay"
    WITHDRAW = "withdraw"
    DEPOSIT = "deposit"
    ROLLOVER_SURPLUS = "rollover_surplus"
    ROLLOVER_DEFICIT = "rollover_deficit"


class TransferEndpoint(str, Enum):
    """이체 출발지/도착지"""

    MAIN = "main"
    CURRENT = "current"
    DEBT = "debt"
    INVESTMENT = "investment"
    GOAL = "goal"


class TransferStatus(str, Enum):
    """이체 상태

    현재 구조에서는 COMPLETED만 생성됨.
    """

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class EntityType(str, Enum):
    """특수 항목 종류"""

    DEBT = "debt"
    INVESTMENT = "investment"
    GOAL = "goal"

    @property
    def endpoint(self) -> TransferEndpoint:
        """이체 Endpoint 변환"""
        return TransferEndpoint(self.value)

    @property
    def special_category(self) -> SpecialCategory:
        """특수 거래 분류 변환"""
        return SpecialCategory(self.value)


class GoalStatus(str, Enum):
    """저축 목표 상태"""

    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class DebtType(str, Enum):
    """부채 종류"""

    CREDIT_CARD = "credit_card"
    STUDENT_LOAN = "student_loan"
    MORTGAGE = "mortgage"
    CAR_LOAN = "car_loan"
    PERSONAL_LOAN = "personal_loan"
    OTHER = "other"


class InvestmentType(str, Enum):
    """투자 종류"""

    STOCK = "stock"
    BOND = "bond"
    MUTUAL_FUND = "mutual_fund"
    ETF = "etf"
    CRYPTO = "crypto"
    REAL_ESTATE = "real_estate"
    OTHER = "other"
