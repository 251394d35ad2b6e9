"""Services d'application : invocation des actions et évènements."""

from .event_bus import EventBus
from .events import ActionAppliedEvent, DecisionFallbackEvent, GameLoadedEvent
from .game_service import GameService

__all__ = [
    "ActionAppliedEvent",
    "DecisionFallbackEvent",
    "EventBus",
    "GameLoadedEvent",
    "GameService",
]
