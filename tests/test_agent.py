"""Scénarios de bout en bout : agent, service de décision et invocation des actions."""

from __future__ import annotations

import socket

import pytest

from catan_offload.agent.brain import DecisionAgent
from catan_offload.agent.strategies import (
    ClayOrSheepTradeStrategy,
    FirstTileStrategy,
    HeuristicTileStrategy,
    OffloadedTileStrategy,
    OffloadedTradeStrategy,
    TileChoiceStrategy,
)
from catan_offload.app.events import ActionAppliedEvent, DecisionFallbackEvent
from catan_offload.app.game_service import GameService
from catan_offload.config import DecisionServiceConfig, TileFallback
from catan_offload.engine.actions import MoveRobber, RespondToTrade, TradeOffer, TradeVerdict
from catan_offload.engine.state import GameState
from catan_offload.protocol.errors import DecisionTimeout
from catan_offload.protocol.server import serve_in_background
from offload_test_utils import make_state


def _config(endpoint, *, timeout: float = 5.0, **kwargs) -> DecisionServiceConfig:
    host, port = endpoint
    return DecisionServiceConfig(host=host, port=port, timeout=timeout, **kwargs)


@pytest.fixture
def service():
    return GameService(GameState.new_game())


@pytest.fixture
def events(service):
    received = []
    service.event_bus.subscribe(received.append)
    return received


def _applied(events):
    return [event for event in events if isinstance(event, ActionAppliedEvent)]


class TestMoveRobber:
    def test_reply_selects_tile_and_invokes_once(self, service, events):
        with serve_in_background(lambda tag, sections: 5) as server:
            agent = DecisionAgent.offloaded(service, 0, _config(server.endpoint))
            action = agent.move_robber()

        land_tiles = service.state.board.land_tile_ids()
        assert action == MoveRobber(tile_id=land_tiles[5])
        assert [event.action for event in _applied(events)] == [action]
        assert service.state.robber_tile_id == land_tiles[5]

    def test_timeout_falls_back_to_first_tile(self, service, events):
        service.state.robber_tile_id = 9
        with socket.create_server(("127.0.0.1", 0)) as silent:
            agent = DecisionAgent.offloaded(
                service, 0, _config(silent.getsockname()[:2], timeout=0.2)
            )
            action = agent.move_robber()

        # Repli de référence (index 0), choix inconditionnel
        assert action == MoveRobber(tile_id=service.state.board.land_tile_ids()[0])
        assert len(_applied(events)) == 1
        fallbacks = [event for event in events if isinstance(event, DecisionFallbackEvent)]
        assert len(fallbacks) == 1
        assert isinstance(fallbacks[0].error, DecisionTimeout)

    def test_heuristic_fallback_from_configuration(self):
        state, mapping = make_state(isolated_tiles=[10])
        state.player(3).cities.append(mapping[10])
        service = GameService(state)
        with socket.create_server(("127.0.0.1", 0)) as silent:
            config = _config(
                silent.getsockname()[:2], timeout=0.2, tile_fallback=TileFallback.HEURISTIC
            )
            agent = DecisionAgent.offloaded(service, 0, config)
            action = agent.move_robber()

        assert isinstance(agent.tile_strategy, OffloadedTileStrategy)
        assert isinstance(agent.tile_strategy.fallback, HeuristicTileStrategy)
        assert action == MoveRobber(tile_id=10)

    def test_repeated_requests_apply_the_same_action(self, service):
        def policy(tag, sections):
            # Politique déterministe : tuile au numéro le plus élevé
            tile_values = sections[0]
            return tile_values.index(max(tile_values))

        with serve_in_background(policy) as server:
            agent = DecisionAgent.offloaded(service, 1, _config(server.endpoint))
            actions = [agent.move_robber() for _ in range(3)]
            messages = server.messages

        assert actions[0] == MoveRobber(tile_id=8)
        assert actions == [actions[0]] * 3
        assert len(set(messages[1:])) == 1

    def test_strategy_index_out_of_range_is_an_error(self, service, events):
        class Broken(TileChoiceStrategy):
            def choose_tile(self, state, player_number):
                return 19

        agent = DecisionAgent(service, 0, tile_strategy=Broken())

        with pytest.raises(ValueError):
            agent.move_robber()
        assert _applied(events) == []


class TestConsiderOffer:
    def test_offer_for_someone_else_is_ignored(self, service, events):
        agent = DecisionAgent(service, 0)
        offer = TradeOffer(from_player=1, to=(2, 3), get={}, give={"ORE": 1})

        assert agent.consider_offer(offer) is TradeVerdict.IGNORE
        assert _applied(events) == []
        assert agent.context.declined_trades == 0

    def test_verdict_is_dispatched(self, service, events):
        agent = DecisionAgent(service, 0)
        offer = TradeOffer(from_player=1, to=(0,), get={"ORE": 1}, give={"ORE": 1})

        verdict = agent.consider_offer(offer)

        assert verdict is TradeVerdict.REJECT
        assert [event.action for event in _applied(events)] == [
            RespondToTrade(offer=offer, verdict=TradeVerdict.REJECT)
        ]

    def test_offer_from_empty_seat_is_rejected_before_evaluation(self):
        service = GameService(GameState.new_game(player_names=["A", "B"], max_players=4))
        events = []
        service.event_bus.subscribe(events.append)
        agent = DecisionAgent(service, 0)
        offer = TradeOffer(from_player=3, to=(0,), get={}, give={"ORE": 1})

        with pytest.raises(ValueError):
            agent.consider_offer(offer)

        assert agent.context.declined_trades == 0
        assert _applied(events) == []

    def test_offer_from_empty_seat_makes_no_round_trip(self):
        service = GameService(GameState.new_game(player_names=["A", "B"], max_players=4))
        with serve_in_background(lambda tag, sections: "1") as server:
            agent = DecisionAgent.offloaded(service, 0, _config(server.endpoint))
            with pytest.raises(ValueError):
                agent.consider_offer(TradeOffer(from_player=2, to=(0,)))
            messages = server.messages

        assert messages == ()

    def test_declines_accumulate_then_default_rule_applies(self, service):
        service.state.player(0).resources["WOOD"] = 1
        agent = DecisionAgent(service, 0, trade_strategy=ClayOrSheepTradeStrategy())
        # Le proposant cède du minerai contre du bois : gain net pour l'agent
        offer = TradeOffer(from_player=2, to=(0,), get={"WOOD": 1}, give={"ORE": 1})

        verdicts = [agent.consider_offer(offer) for _ in range(4)]

        assert verdicts == [TradeVerdict.REJECT] * 3 + [TradeVerdict.ACCEPT]
        assert agent.context.declined_trades == 3

    @pytest.mark.parametrize("hook", ["start_turn", "end_turn", "reset_building_plan"])
    def test_lifecycle_hooks_reset_counter(self, service, hook):
        agent = DecisionAgent(service, 0)
        offer = TradeOffer(from_player=1, to=(0,), get={}, give={"ORE": 1})
        agent.consider_offer(offer)
        agent.consider_offer(offer)
        assert agent.context.declined_trades == 2

        getattr(agent, hook)()

        assert agent.context.declined_trades == 0

    def test_offloaded_trade_round_trip(self, service, events):
        with serve_in_background(lambda tag, sections: "1") as server:
            agent = DecisionAgent.offloaded(service, 0, _config(server.endpoint))
            offer = TradeOffer(from_player=3, to=(0,), get={"WHEAT": 1}, give={"SHEEP": 1})
            verdict = agent.consider_offer(offer)

        assert isinstance(agent.trade_strategy, OffloadedTradeStrategy)
        assert verdict is TradeVerdict.ACCEPT
        assert len(_applied(events)) == 1


def test_default_composition(service):
    agent = DecisionAgent(service, 2)

    assert isinstance(agent.tile_strategy, HeuristicTileStrategy)
    assert isinstance(agent.trade_strategy, ClayOrSheepTradeStrategy)


def test_offloaded_can_keep_local_trade_rule(service):
    agent = DecisionAgent.offloaded(service, 0, offload_trades=False)

    assert isinstance(agent.trade_strategy, ClayOrSheepTradeStrategy)
    assert isinstance(agent.tile_strategy.fallback, FirstTileStrategy)


def test_agent_requires_a_seated_player():
    service = GameService(GameState.new_game(player_names=["A", "B"], max_players=4))

    with pytest.raises(ValueError):
        DecisionAgent(service, 3)
