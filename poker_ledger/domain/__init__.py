from .ledger import (
    LedgerSummary,
    PlayerStat,
    SessionTotals,
    SuggestedTransfer,
    compute_session_balance,
    compute_session_totals,
    compute_standings,
    compute_total_money_moved,
    ensure_session_balanced,
    find_dangling_references,
    new_game_session,
    resolve_player,
    suggest_transfers,
    summarize,
    win_rate,
)
from .models import (
    MAX_AMOUNT,
    GameSession,
    IntegrityWarning,
    LedgerValidationError,
    Player,
    PlayerGameResult,
    Transaction,
    build_result,
    new_player,
    new_transaction,
    normalize_player_name,
    unique_preserve_order,
)

__all__ = [
    "MAX_AMOUNT",
    "GameSession",
    "IntegrityWarning",
    "LedgerSummary",
    "LedgerValidationError",
    "Player",
    "PlayerGameResult",
    "PlayerStat",
    "SessionTotals",
    "SuggestedTransfer",
    "Transaction",
    "build_result",
    "compute_session_balance",
    "compute_session_totals",
    "compute_standings",
    "compute_total_money_moved",
    "ensure_session_balanced",
    "find_dangling_references",
    "new_game_session",
    "new_player",
    "new_transaction",
    "normalize_player_name",
    "resolve_player",
    "suggest_transfers",
    "summarize",
    "unique_preserve_order",
    "win_rate",
]
