from __future__ import annotations

from poker_ledger.services.ledger_service import LedgerService
from poker_ledger.storage.database import SessionLocal
from poker_ledger.storage.repository import LedgerRepository

repo = LedgerRepository(SessionLocal)
service = LedgerService(repo)


def get_ledger_service() -> LedgerService:
    return service
