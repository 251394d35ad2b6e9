"""Surface d'invocation des actions de l'agent sur la partie."""

from __future__ import annotations

import logging
from typing import List, Tuple

from catan_offload.app.event_bus import EventBus
from catan_offload.app.events import ActionAppliedEvent, GameLoadedEvent
from catan_offload.engine.actions import Action, MoveRobber, RespondToTrade
from catan_offload.engine.state import GameState

logger = logging.getLogger(__name__)


class GameService:
    """Wrappe `GameState` et publie un évènement par action appliquée.

    Les règles restent du ressort de l'hôte : le service vérifie seulement
    que l'action désigne des éléments existants.
    """

    def __init__(self, state: GameState | None = None, *, event_bus: EventBus | None = None) -> None:
        self._event_bus = event_bus or EventBus()
        self._state: GameState | None = None
        self._history: List[Action] = []
        if state is not None:
            self.load(state)

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    @property
    def state(self) -> GameState:
        """État courant de la partie (erreur si aucune partie chargée)."""

        if self._state is None:
            raise RuntimeError("Aucune partie chargée. Utiliser load().")
        return self._state

    @property
    def history(self) -> Tuple[Action, ...]:
        return tuple(self._history)

    def load(self, state: GameState) -> GameState:
        self._state = state
        self._history.clear()
        self._event_bus.publish(GameLoadedEvent(state=state))
        return state

    def dispatch(self, action: Action) -> GameState:
        """Applique une action puis notifie les observateurs."""

        state = self.state
        if isinstance(action, MoveRobber):
            if action.tile_id not in state.board.land_tile_ids():
                raise ValueError(f"Action illégale: {action}")
            state.robber_tile_id = action.tile_id
        elif isinstance(action, RespondToTrade):
            if state.player(action.offer.from_player) is None:
                raise ValueError(f"Offre d'un siège vide: {action}")
        else:
            raise ValueError(f"Action non prise en charge: {action}")

        self._history.append(action)
        logger.info("Action appliquée: %s", action)
        self._event_bus.publish(ActionAppliedEvent(action=action, state=state))
        return state
