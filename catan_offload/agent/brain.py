"""Agent qui applique les décisions de ses stratégies sur la partie.

L'hôte (boucle de tour) appelle les hooks :

- `move_robber()` quand l'agent doit déplacer le voleur;
- `consider_offer(offer)` quand une offre d'échange arrive;
- `start_turn()`, `end_turn()` et `reset_building_plan()` qui remettent à
  zéro le compteur de refus du tour.

Les stratégies sont choisies à la construction ; `DecisionAgent.offloaded`
assemble la configuration qui délègue les deux décisions au service.
"""

from __future__ import annotations

import logging

from catan_offload.agent.context import TurnContext
from catan_offload.agent.strategies import (
    ClayOrSheepTradeStrategy,
    FirstTileStrategy,
    HeuristicTileStrategy,
    OffloadedTileStrategy,
    OffloadedTradeStrategy,
    TileChoiceStrategy,
    TradeStrategy,
)
from catan_offload.app.game_service import GameService
from catan_offload.config import DecisionServiceConfig, TileFallback
from catan_offload.engine.actions import MoveRobber, RespondToTrade, TradeOffer, TradeVerdict
from catan_offload.protocol.client import DecisionClient

logger = logging.getLogger(__name__)


class DecisionAgent:
    """Agent assis au siège `player_number`, piloté par des stratégies composées."""

    def __init__(
        self,
        service: GameService,
        player_number: int,
        *,
        tile_strategy: TileChoiceStrategy | None = None,
        trade_strategy: TradeStrategy | None = None,
    ) -> None:
        if service.state.player(player_number) is None:
            raise ValueError(f"Aucun joueur au siège {player_number}")
        self._service = service
        self._player_number = player_number
        self._tile_strategy = tile_strategy or HeuristicTileStrategy()
        self._trade_strategy = trade_strategy or ClayOrSheepTradeStrategy()
        self._context = TurnContext()

    @classmethod
    def offloaded(
        cls,
        service: GameService,
        player_number: int,
        config: DecisionServiceConfig | None = None,
        *,
        client: DecisionClient | None = None,
        offload_trades: bool = True,
    ) -> "DecisionAgent":
        """Agent déléguant le voleur (et par défaut les échanges) au service.

        Le repli du voleur suit `config.tile_fallback`. Avec
        `offload_trades=False`, les échanges restent à la règle argile/mouton.
        """

        config = config or DecisionServiceConfig()
        client = client or DecisionClient(config)
        if config.tile_fallback is TileFallback.HEURISTIC:
            fallback: TileChoiceStrategy = HeuristicTileStrategy()
        else:
            fallback = FirstTileStrategy()
        tile_strategy = OffloadedTileStrategy(
            client, fallback=fallback, event_bus=service.event_bus
        )
        trade_strategy: TradeStrategy
        if offload_trades:
            trade_strategy = OffloadedTradeStrategy(client, event_bus=service.event_bus)
        else:
            trade_strategy = ClayOrSheepTradeStrategy()
        return cls(
            service,
            player_number,
            tile_strategy=tile_strategy,
            trade_strategy=trade_strategy,
        )

    @property
    def player_number(self) -> int:
        return self._player_number

    @property
    def context(self) -> TurnContext:
        return self._context

    @property
    def tile_strategy(self) -> TileChoiceStrategy:
        return self._tile_strategy

    @property
    def trade_strategy(self) -> TradeStrategy:
        return self._trade_strategy

    # -- Décisions ---------------------------------------------------------------

    def move_robber(self) -> MoveRobber:
        """Choisit la tuile du voleur et invoque le déplacement sur la partie."""

        state = self._service.state
        land_tiles = state.board.land_tile_ids()
        index = self._tile_strategy.choose_tile(state, self._player_number)
        if not 0 <= index < len(land_tiles):
            raise ValueError(
                f"{self._tile_strategy.name} a rendu l'index {index} hors de [0, {len(land_tiles)})"
            )
        action = MoveRobber(tile_id=land_tiles[index])
        logger.info("Voleur déplacé sur la tuile %d (index %d)", action.tile_id, index)
        self._service.dispatch(action)
        return action

    def consider_offer(self, offer: TradeOffer) -> TradeVerdict:
        """Évalue une offre et transmet la réponse; ignore les offres destinées à d'autres."""

        if not offer.is_addressed_to(self._player_number):
            return TradeVerdict.IGNORE
        if self._service.state.player(offer.from_player) is None:
            raise ValueError(f"Offre d'un siège vide: {offer.from_player}")

        verdict = self._trade_strategy.evaluate(
            self._service.state,
            self._player_number,
            offer,
            self._context,
        )
        self._service.dispatch(RespondToTrade(offer=offer, verdict=verdict))
        return verdict

    # -- Cycle de vie --------------------------------------------------------------

    def start_turn(self) -> None:
        self._context.reset()

    def end_turn(self) -> None:
        self._context.reset()

    def reset_building_plan(self) -> None:
        """Nouveau plan de construction : le compteur de refus repart de zéro."""

        self._context.reset()


__all__ = ["DecisionAgent"]
