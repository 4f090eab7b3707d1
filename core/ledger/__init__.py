"""
계좌 / 거래 / 이체 저장소

MAIN, CURRENT 계좌와 거래, 이체 내역을 저장하는 Ledger 계층.
비즈니스 규칙은 wallet 패키지에서 처리.

사용 예시:
```python
from core.ledger import LedgerStore, TransferRepository

store = LedgerStore(db)
account = await store.get_account("user-1", AccountCategory.MAIN)

transfers = TransferRepository(db)
history = await transfers.get_history("user-1")
```
"""

from core.ledger.models import Account, LedgerTransaction, Transfer
from core.ledger.schema import init_ledger_schema
from core.ledger.store import LedgerStore
from core.ledger.transfers import TransferRepository

__all__ = [
    # 저장소
    "LedgerStore",
    "TransferRepository",
    "init_ledger_schema",
    # 레코드
    "Account",
    "LedgerTransaction",
    "Transfer",
]
