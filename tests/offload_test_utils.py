"""Utilitaires partagés par les tests : plateaux et états préparés."""

from __future__ import annotations

import socket
from typing import Dict, List, Tuple

from catan_offload.engine.board import Board, Vertex
from catan_offload.engine.state import GameState

# Sommets ajoutés au plateau standard, chacun ne touchant qu'une tuile
ISOLATED_VERTEX_BASE = 1000


def board_with_isolated_vertices(tile_ids: List[int]) -> Tuple[Board, Dict[int, int]]:
    """Plateau standard + un sommet « isolé » par tuile demandée.

    Returns:
        (plateau, {tile_id: vertex_id})
    """

    base = Board.standard()
    vertices = dict(base.vertices)
    mapping: Dict[int, int] = {}
    for offset, tile_id in enumerate(tile_ids):
        vertex_id = ISOLATED_VERTEX_BASE + offset
        vertices[vertex_id] = Vertex(
            vertex_id=vertex_id,
            adjacent_tiles=(tile_id,),
        )
        mapping[tile_id] = vertex_id
    return Board(tiles=base.tiles, vertices=vertices), mapping


def make_state(
    *,
    max_players: int = 4,
    isolated_tiles: List[int] | None = None,
) -> Tuple[GameState, Dict[int, int]]:
    """État à `max_players` joueurs sur un plateau muni de sommets isolés."""

    board, mapping = board_with_isolated_vertices(isolated_tiles or list(range(19)))
    state = GameState.new_game(max_players=max_players, board=board)
    return state, mapping


def unused_port() -> int:
    """Port local libre (plus personne n'écoute après l'appel)."""

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]
