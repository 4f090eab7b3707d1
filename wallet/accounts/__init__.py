"""계좌 서비스 모듈"""

from wallet.accounts.service import AccountService

__all__ = ["AccountService"]
