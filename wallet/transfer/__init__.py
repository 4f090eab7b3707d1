"""이체 엔진 모듈"""

from wallet.transfer.engine import CompanionEntry, ContributionResult, TransferEngine

__all__ = ["TransferEngine", "CompanionEntry", "ContributionResult"]
