"""Encodage d'une offre d'échange pour la décision déportée."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from catan_offload.engine.actions import TradeOffer
from catan_offload.engine.rules import RESOURCE_ORDER
from catan_offload.engine.state import GameState
from catan_offload.features.resources import encode_resources

_VECTOR = len(RESOURCE_ORDER)

# soi VP | proposant VP | soi ressources | proposant ressources | get | give
TRADE_SEGMENT_LENGTHS: Tuple[int, ...] = (1, 1, _VECTOR, _VECTOR, _VECTOR, _VECTOR)


def build_trade_features(state: GameState, self_slot: int, offer: TradeOffer) -> np.ndarray:
    """Vecteur de 22 entiers décrivant l'offre du point de vue de `self_slot`.

    Les deux totaux de points sont les points publics, y compris pour
    le joueur qui décide.
    """

    segments = [
        np.array([state.public_victory_points_of(self_slot)], dtype=np.int64),
        np.array([state.public_victory_points_of(offer.from_player)], dtype=np.int64),
        encode_resources(state.resources_of(self_slot)).to_array(),
        encode_resources(state.resources_of(offer.from_player)).to_array(),
        encode_resources(offer.get).to_array(),
        encode_resources(offer.give).to_array(),
    ]
    return np.concatenate(segments)


__all__ = ["TRADE_SEGMENT_LENGTHS", "build_trade_features"]
