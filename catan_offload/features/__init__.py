"""Encodage de l'état de jeu en vecteurs d'entiers pour le service de décision.

- resources.py : vecteur de ressources à 5 composantes (ordre fixe)
- seating.py : renumérotation ego-centrée des sièges
- robber.py : vecteur de caractéristiques pour le placement du voleur
- trade.py : vecteur de caractéristiques pour une offre d'échange

Exemple :
    >>> from catan_offload.engine.state import GameState
    >>> from catan_offload.features import build_robber_features
    >>>
    >>> state = GameState.new_game()
    >>> features = build_robber_features(state, self_slot=2)
    >>> len(features)
    126
"""

from .resources import ResourceVector, encode_resources
from .robber import RobberFeatures, build_robber_features, robber_segment_lengths
from .seating import relative_slot, seating_order
from .trade import TRADE_SEGMENT_LENGTHS, build_trade_features

__all__ = [
    "ResourceVector",
    "RobberFeatures",
    "TRADE_SEGMENT_LENGTHS",
    "build_robber_features",
    "build_trade_features",
    "encode_resources",
    "relative_slot",
    "robber_segment_lengths",
    "seating_order",
]
