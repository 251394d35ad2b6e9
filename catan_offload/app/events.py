"""Évènements publiés par la couche application (`catan_offload.app`)."""

from __future__ import annotations

from dataclasses import dataclass

from catan_offload.engine.actions import Action
from catan_offload.engine.state import GameState
from catan_offload.protocol.errors import DecisionServiceError


@dataclass(frozen=True)
class GameLoadedEvent:
    """Émis lorsqu'un état de partie est confié au service."""

    state: GameState


@dataclass(frozen=True)
class ActionAppliedEvent:
    """Émis après chaque action invoquée sur la partie."""

    action: Action
    state: GameState


@dataclass(frozen=True)
class DecisionFallbackEvent:
    """Émis quand une décision déportée échoue et que le repli s'applique."""

    tag: str
    error: DecisionServiceError
