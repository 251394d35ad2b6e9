"""État propre à un tour de l'agent."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TurnContext:
    """Compteurs à durée de vie d'un tour, remis à zéro par les hooks de l'agent."""

    declined_trades: int = 0

    def record_declined_trade(self) -> None:
        self.declined_trades += 1

    def reset(self) -> None:
        self.declined_trades = 0


__all__ = ["TurnContext"]
