from kudos.models.ledger import (
    DailyQuota,
    GenesisState,
    HistoryEntry,
    LeaderboardEntry,
    QuotaStatus,
)
from kudos.models.messages import (
    MsgSendKudos,
    MsgSendKudosResponse,
    QueryKudosBalanceRequest,
    QueryKudosBalanceResponse,
    QueryKudosLeaderboardRequest,
    QueryKudosLeaderboardResponse,
    is_valid_address,
    validate_address,
)

__all__ = [
    "DailyQuota",
    "GenesisState",
    "HistoryEntry",
    "LeaderboardEntry",
    "MsgSendKudos",
    "MsgSendKudosResponse",
    "QueryKudosBalanceRequest",
    "QueryKudosBalanceResponse",
    "QueryKudosLeaderboardRequest",
    "QueryKudosLeaderboardResponse",
    "QuotaStatus",
    "is_valid_address",
    "validate_address",
]
