"""Actions invoquées sur la partie par l'agent.

Définit les charges utiles transmises à la surface d'invocation
(`catan_offload.app.GameService.dispatch`).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple


class TradeVerdict(Enum):
    """Réponse de l'agent à une offre d'échange."""

    IGNORE = "IGNORE"
    REJECT = "REJECT"
    ACCEPT = "ACCEPT"


@dataclass(frozen=True)
class TradeOffer:
    """Offre d'échange proposée par un joueur.

    Args:
        from_player: siège du joueur qui propose.
        to: sièges auxquels l'offre est adressée.
        get: ressources que le proposant reçoit.
        give: ressources que le proposant cède.
    """

    from_player: int
    to: Tuple[int, ...]
    get: Dict[str, int] = field(default_factory=dict)
    give: Dict[str, int] = field(default_factory=dict)

    def is_addressed_to(self, player_number: int) -> bool:
        return player_number in self.to


@dataclass(frozen=True)
class Action:
    """Action de base."""

    pass


@dataclass(frozen=True)
class MoveRobber(Action):
    """Déplace le voleur.

    Args:
        tile_id: ID de la tuile cible
    """

    tile_id: int


@dataclass(frozen=True)
class RespondToTrade(Action):
    """Répond à une offre d'échange.

    Args:
        offer: offre concernée
        verdict: acceptation ou refus
    """

    offer: TradeOffer
    verdict: TradeVerdict


__all__ = [
    "Action",
    "MoveRobber",
    "RespondToTrade",
    "TradeOffer",
    "TradeVerdict",
]
