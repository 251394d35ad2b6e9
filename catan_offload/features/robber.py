"""Encodage du plateau pour la décision de placement du voleur.

Le vecteur produit a une taille fixée par le schéma, quelle que soit la
configuration des joueurs :

    N (valeurs des tuiles) + 4N (occupation) + 3 * max_players + N (voleur)

soit 126 entiers pour le plateau standard à 19 tuiles et 4 sièges. Les
segments par joueur utilisent la perspective ego-centrée de
`catan_offload.features.seating` : le joueur qui décide est toujours en tête.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

import numpy as np

from catan_offload.engine.rules import CITY_WEIGHT, OCCUPANCY_SLOTS, SETTLEMENT_WEIGHT
from catan_offload.engine.state import GameState
from catan_offload.features.seating import SELF_POSITION, relative_slot

logger = logging.getLogger(__name__)

SEGMENT_NAMES: Tuple[str, ...] = (
    "tile_values",
    "occupancy",
    "development_cards",
    "resources",
    "victory_points",
    "previous_robber",
)


def robber_feature_size(n_tiles: int, max_players: int) -> int:
    return n_tiles + OCCUPANCY_SLOTS * n_tiles + 3 * max_players + n_tiles


def robber_segment_lengths(n_tiles: int, max_players: int) -> Tuple[int, ...]:
    """Découpage du message `robber` : chaque segment par joueur est scindé
    en une section « soi » (1 valeur) et une section adversaires."""

    opponents = max_players - 1
    return (
        (n_tiles,)
        + (n_tiles,) * OCCUPANCY_SLOTS
        + (1, opponents) * 3
        + (n_tiles,)
    )


@dataclass(frozen=True)
class RobberFeatures:
    """Vecteur de caractéristiques et sa disposition."""

    values: np.ndarray
    n_tiles: int
    max_players: int

    def __len__(self) -> int:
        return int(self.values.shape[0])

    @property
    def wire_segment_lengths(self) -> Tuple[int, ...]:
        return robber_segment_lengths(self.n_tiles, self.max_players)

    def segment(self, name: str) -> np.ndarray:
        """Vue sur un segment nommé (`occupancy` est rendu en (4, N))."""

        bounds = self._bounds()
        if name not in bounds:
            raise KeyError(f"Segment inconnu: {name!r}")
        start, stop = bounds[name]
        view = self.values[start:stop]
        if name == "occupancy":
            return view.reshape(OCCUPANCY_SLOTS, self.n_tiles)
        return view

    def _bounds(self) -> Dict[str, Tuple[int, int]]:
        lengths = (
            self.n_tiles,
            OCCUPANCY_SLOTS * self.n_tiles,
            self.max_players,
            self.max_players,
            self.max_players,
            self.n_tiles,
        )
        bounds: Dict[str, Tuple[int, int]] = {}
        start = 0
        for name, length in zip(SEGMENT_NAMES, lengths):
            bounds[name] = (start, start + length)
            start += length
        return bounds


def build_robber_features(state: GameState, self_slot: int) -> RobberFeatures:
    """Construit le vecteur de caractéristiques du point de vue de `self_slot`.

    Args:
        state: état de la partie à encoder.
        self_slot: siège du joueur qui doit déplacer le voleur.

    Returns:
        RobberFeatures de longueur `robber_feature_size(N, max_players)`.
    """

    board = state.board
    land_tiles = board.land_tile_ids()
    tile_index = {tile_id: idx for idx, tile_id in enumerate(land_tiles)}
    max_players = state.max_players

    tile_values = np.array(
        [board.number_on_tile(tile_id) for tile_id in land_tiles], dtype=np.int64
    )
    occupancy = _encode_occupancy(state, self_slot, tile_index)
    dev_cards = _encode_per_player(
        state,
        self_slot,
        own=state.development_card_count_of,
        opponent=state.development_card_count_of,
    )
    resources = _encode_per_player(
        state,
        self_slot,
        own=state.resource_total_of,
        opponent=state.resource_total_of,
    )
    # Les points cachés des adversaires ne sont pas observables
    victory_points = _encode_per_player(
        state,
        self_slot,
        own=state.total_victory_points_of,
        opponent=state.public_victory_points_of,
    )
    previous_robber = np.zeros(len(land_tiles), dtype=np.int64)
    robber_index = tile_index.get(state.robber_tile_id)
    if robber_index is not None:
        previous_robber[robber_index] = 1

    logger.debug("tile values = %s", tile_values.tolist())
    logger.debug("occupancy = %s", occupancy.tolist())
    logger.debug("development cards = %s", dev_cards.tolist())
    logger.debug("resources = %s", resources.tolist())
    logger.debug("victory points = %s", victory_points.tolist())
    logger.debug("previous robber = %s", previous_robber.tolist())

    values = np.concatenate(
        [
            tile_values,
            occupancy.reshape(-1),
            dev_cards,
            resources,
            victory_points,
            previous_robber,
        ]
    )
    return RobberFeatures(values=values, n_tiles=len(land_tiles), max_players=max_players)


def _encode_occupancy(
    state: GameState,
    self_slot: int,
    tile_index: Dict[int, int],
) -> np.ndarray:
    """Poids par tuile: +1 par colonie, +2 par ville, par position relative."""

    tensor = np.zeros((OCCUPANCY_SLOTS, len(tile_index)), dtype=np.int64)
    weighted: List[Tuple[list, int]] = [
        (state.settlements(), SETTLEMENT_WEIGHT),
        (state.cities(), CITY_WEIGHT),
    ]
    for pieces, weight in weighted:
        for piece in pieces:
            position = relative_slot(piece.owner, self_slot, state.max_players)
            if position >= OCCUPANCY_SLOTS:
                continue
            for tile_id in state.adjacent_tiles_of(piece):
                index = tile_index.get(tile_id)
                if index is None:
                    continue
                tensor[position, index] += weight
    return tensor


def _encode_per_player(
    state: GameState,
    self_slot: int,
    *,
    own: Callable[[int], int],
    opponent: Callable[[int], int],
) -> np.ndarray:
    tensor = np.zeros(state.max_players, dtype=np.int64)
    for absolute in range(state.max_players):
        position = relative_slot(absolute, self_slot, state.max_players)
        if position == SELF_POSITION:
            tensor[position] = own(absolute)
        else:
            tensor[position] = opponent(absolute)
    return tensor


__all__ = [
    "RobberFeatures",
    "SEGMENT_NAMES",
    "build_robber_features",
    "robber_feature_size",
    "robber_segment_lengths",
]
