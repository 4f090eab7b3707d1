"""월말 정산 모듈"""

from wallet.rollover.engine import RolloverBatchResult, RolloverEngine, RolloverResult

__all__ = ["RolloverEngine", "RolloverResult", "RolloverBatchResult"]
