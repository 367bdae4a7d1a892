from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from poker_ledger.domain import LedgerValidationError
from poker_ledger.services.ledger_service import RecordNotFoundError


def api_error(
    *,
    code: str,
    message: str,
    details: Any | None = None,
    status_code: int = status.HTTP_400_BAD_REQUEST,
) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "code": code,
            "message": message,
            "details": details,
        },
    )


def validation_error(exc: LedgerValidationError) -> HTTPException:
    return api_error(code="validation_error", message=str(exc))


def not_found(exc: RecordNotFoundError) -> HTTPException:
    return api_error(
        code="not_found",
        message=str(exc),
        details={"kind": exc.kind, "id": exc.record_id},
        status_code=status.HTTP_404_NOT_FOUND,
    )
