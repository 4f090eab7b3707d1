"""거래 서비스 모듈"""

from wallet.transactions.service import TransactionService

__all__ = ["TransactionService"]
