"""잔액 동기화 모듈"""

from wallet.balance.synchronizer import BalanceSynchronizer

__all__ = ["BalanceSynchronizer"]
