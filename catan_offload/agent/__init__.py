"""Agent et stratégies de décision (voleur, échanges)."""

from .brain import DecisionAgent
from .context import TurnContext
from .strategies import (
    ClayOrSheepTradeStrategy,
    DefaultTradeStrategy,
    FirstTileStrategy,
    HeuristicTileStrategy,
    OffloadedTileStrategy,
    OffloadedTradeStrategy,
    TileChoiceStrategy,
    TradeStrategy,
)

__all__ = [
    "ClayOrSheepTradeStrategy",
    "DecisionAgent",
    "DefaultTradeStrategy",
    "FirstTileStrategy",
    "HeuristicTileStrategy",
    "OffloadedTileStrategy",
    "OffloadedTradeStrategy",
    "TileChoiceStrategy",
    "TradeStrategy",
    "TurnContext",
]
