"""Stratégies de décision composées dans l'agent.

Deux capacités, chacune avec une variante locale et une variante déportée
vers le service de décision :

- choix de la tuile du voleur (`TileChoiceStrategy`) : rend un index dans
  l'énumération `Board.land_tile_ids()`;
- évaluation d'une offre d'échange (`TradeStrategy`) : rend un `TradeVerdict`.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping

import numpy as np

from catan_offload.app.event_bus import EventBus
from catan_offload.app.events import DecisionFallbackEvent
from catan_offload.agent.context import TurnContext
from catan_offload.engine.actions import TradeOffer, TradeVerdict
from catan_offload.engine.rules import (
    CLAY,
    MAX_DECLINED_TRADES,
    ORE,
    ROBBER_TAG,
    SHEEP,
    TRADE_TAG,
    WHEAT,
    WOOD,
)
from catan_offload.engine.state import GameState
from catan_offload.features.resources import encode_resources
from catan_offload.features.robber import build_robber_features
from catan_offload.features.seating import SELF_POSITION
from catan_offload.features.trade import TRADE_SEGMENT_LENGTHS, build_trade_features
from catan_offload.protocol.client import DecisionClient, DecisionRequest, ReplyKind
from catan_offload.protocol.errors import DecisionServiceError
from catan_offload.protocol.wire import format_message

logger = logging.getLogger(__name__)

REJECT_MARKER = "0"


class TileChoiceStrategy:
    """Interface minimale du choix de tuile pour le voleur."""

    def __init__(self, *, name: str | None = None) -> None:
        self._name = name or self.__class__.__name__

    @property
    def name(self) -> str:
        return self._name

    def choose_tile(self, state: GameState, player_number: int) -> int:
        raise NotImplementedError


class TradeStrategy:
    """Interface minimale de l'évaluation d'une offre d'échange."""

    def __init__(self, *, name: str | None = None) -> None:
        self._name = name or self.__class__.__name__

    @property
    def name(self) -> str:
        return self._name

    def evaluate(
        self,
        state: GameState,
        player_number: int,
        offer: TradeOffer,
        context: TurnContext,
    ) -> TradeVerdict:
        raise NotImplementedError


# -- Voleur ------------------------------------------------------------------


class FirstTileStrategy(TileChoiceStrategy):
    """Première tuile de l'énumération, sans condition."""

    def __init__(self) -> None:
        super().__init__(name="FirstTile")

    def choose_tile(self, state: GameState, player_number: int) -> int:
        return 0


class HeuristicTileStrategy(TileChoiceStrategy):
    """Bloque la tuile la plus productive pour les adversaires et la moins pour soi."""

    def __init__(self) -> None:
        super().__init__(name="HeuristicTile")

    def choose_tile(self, state: GameState, player_number: int) -> int:
        features = build_robber_features(state, player_number)
        tile_values = features.segment("tile_values")
        occupancy = features.segment("occupancy")
        current = features.segment("previous_robber")

        production = np.array([_dice_weight(int(value)) for value in tile_values])
        opponents = occupancy.sum(axis=0) - occupancy[SELF_POSITION]
        scores = production * (opponents - 2 * occupancy[SELF_POSITION])
        # Le voleur doit quitter sa tuile actuelle
        scores = np.where(current == 1, np.iinfo(np.int64).min, scores)
        return int(np.argmax(scores))


def _dice_weight(number: int) -> int:
    """Nombre de combinaisons de deux dés donnant `number`."""

    if not 2 <= number <= 12 or number == 7:
        return 0
    return 6 - abs(7 - number)


class OffloadedTileStrategy(TileChoiceStrategy):
    """Délègue le choix au service de décision, avec un repli local."""

    def __init__(
        self,
        client: DecisionClient,
        *,
        fallback: TileChoiceStrategy | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        super().__init__(name="OffloadedTile")
        self._client = client
        self._fallback = fallback or FirstTileStrategy()
        self._event_bus = event_bus

    @property
    def fallback(self) -> TileChoiceStrategy:
        return self._fallback

    def choose_tile(self, state: GameState, player_number: int) -> int:
        features = build_robber_features(state, player_number)
        message = format_message(ROBBER_TAG, features.values, features.wire_segment_lengths)
        outcome = self._client.decide(
            DecisionRequest(
                tag=ROBBER_TAG,
                message=message,
                reply_kind=ReplyKind.INT,
                reply_bound=features.n_tiles,
            )
        )
        if outcome.ok:
            return int(outcome.reply)

        index = self._fallback.choose_tile(state, player_number)
        logger.warning("Repli %s pour le voleur: tuile %d", self._fallback.name, index)
        _publish_fallback(self._event_bus, ROBBER_TAG, outcome.error)
        return index


# -- Échanges ----------------------------------------------------------------


class DefaultTradeStrategy(TradeStrategy):
    """Négociateur par défaut : accepte un échange payable au gain net positif."""

    _RESOURCE_PRIORITY: Dict[str, int] = {
        ORE: 5,
        WHEAT: 4,
        CLAY: 3,
        WOOD: 2,
        SHEEP: 1,
    }

    def __init__(self) -> None:
        super().__init__(name="DefaultNegotiator")

    def evaluate(
        self,
        state: GameState,
        player_number: int,
        offer: TradeOffer,
        context: TurnContext,
    ) -> TradeVerdict:
        # Le proposant cède `give` et reçoit `get`
        owned = state.resources_of(player_number)
        if not all(owned.get(resource, 0) >= amount for resource, amount in offer.get.items()):
            return TradeVerdict.REJECT
        gain = self._worth(offer.give)
        cost = self._worth(offer.get)
        return TradeVerdict.ACCEPT if gain > cost else TradeVerdict.REJECT

    def _worth(self, resources: Mapping[str, int]) -> int:
        return sum(
            self._RESOURCE_PRIORITY.get(resource, 0) * amount
            for resource, amount in resources.items()
        )


class ClayOrSheepTradeStrategy(TradeStrategy):
    """Refuse tant que l'offre ne contient ni argile ni mouton.

    Après plus de `MAX_DECLINED_TRADES` refus dans le tour, ou quand l'offre
    contient argile ou mouton, la décision revient au négociateur par défaut.
    """

    def __init__(self, default: TradeStrategy | None = None) -> None:
        super().__init__(name="ClayOrSheep")
        self._default = default or DefaultTradeStrategy()

    def evaluate(
        self,
        state: GameState,
        player_number: int,
        offer: TradeOffer,
        context: TurnContext,
    ) -> TradeVerdict:
        if context.declined_trades > MAX_DECLINED_TRADES:
            return self._default.evaluate(state, player_number, offer, context)

        wanted = encode_resources(offer.get)
        if wanted.clay == 0 and wanted.sheep == 0:
            context.record_declined_trade()
            return TradeVerdict.REJECT
        return self._default.evaluate(state, player_number, offer, context)


class OffloadedTradeStrategy(TradeStrategy):
    """Délègue le verdict au service; refus en cas d'échec."""

    def __init__(self, client: DecisionClient, *, event_bus: EventBus | None = None) -> None:
        super().__init__(name="OffloadedTrade")
        self._client = client
        self._event_bus = event_bus

    def evaluate(
        self,
        state: GameState,
        player_number: int,
        offer: TradeOffer,
        context: TurnContext,
    ) -> TradeVerdict:
        values = build_trade_features(state, player_number, offer)
        message = format_message(TRADE_TAG, values, TRADE_SEGMENT_LENGTHS)
        outcome = self._client.decide(
            DecisionRequest(tag=TRADE_TAG, message=message, reply_kind=ReplyKind.LINE)
        )
        if not outcome.ok:
            _publish_fallback(self._event_bus, TRADE_TAG, outcome.error)
            verdict = TradeVerdict.REJECT
        elif REJECT_MARKER in str(outcome.reply):
            verdict = TradeVerdict.REJECT
        else:
            verdict = TradeVerdict.ACCEPT

        if verdict is TradeVerdict.REJECT:
            context.record_declined_trade()
        logger.info("Offre de %d: %s (%r)", offer.from_player, verdict.value, outcome.reply)
        return verdict


def _publish_fallback(
    event_bus: EventBus | None,
    tag: str,
    error: DecisionServiceError | None,
) -> None:
    if event_bus is not None and error is not None:
        event_bus.publish(DecisionFallbackEvent(tag=tag, error=error))


__all__ = [
    "ClayOrSheepTradeStrategy",
    "DefaultTradeStrategy",
    "FirstTileStrategy",
    "HeuristicTileStrategy",
    "OffloadedTileStrategy",
    "OffloadedTradeStrategy",
    "TileChoiceStrategy",
    "TradeStrategy",
]
