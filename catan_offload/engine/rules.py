"""Constantes partagées par l'encodage et le protocole de décision.

Ce module expose le contrat minimal attendu par les autres couches:
- ordre canonique des ressources (`RESOURCE_ORDER`)
- taille du plateau standard (`NUM_LAND_TILES`) et nombre de sièges
- étiquettes de messages et point d'accès par défaut du service
"""

# Ordre fixe du vecteur de ressources (argile, bois, mouton, minerai, blé)
CLAY: str = "CLAY"
WOOD: str = "WOOD"
SHEEP: str = "SHEEP"
ORE: str = "ORE"
WHEAT: str = "WHEAT"
RESOURCE_ORDER: tuple[str, ...] = (CLAY, WOOD, SHEEP, ORE, WHEAT)

# Plateau standard
NUM_LAND_TILES: int = 19
MAX_PLAYERS: int = 4
OCCUPANCY_SLOTS: int = 4

# Poids d'occupation par pièce
SETTLEMENT_WEIGHT: int = 1
CITY_WEIGHT: int = 2

# Protocole
ROBBER_TAG: str = "robber"
TRADE_TAG: str = "trade"
DEFAULT_HOST: str = "localhost"
DEFAULT_PORT: int = 2004
DEFAULT_TIMEOUT_SECONDS: float = 300.0

# Négociation: refus consécutifs tolérés avant de déléguer au négociateur par défaut
MAX_DECLINED_TRADES: int = 2

__all__ = [
    "CLAY",
    "WOOD",
    "SHEEP",
    "ORE",
    "WHEAT",
    "RESOURCE_ORDER",
    "NUM_LAND_TILES",
    "MAX_PLAYERS",
    "OCCUPANCY_SLOTS",
    "SETTLEMENT_WEIGHT",
    "CITY_WEIGHT",
    "ROBBER_TAG",
    "TRADE_TAG",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_TIMEOUT_SECONDS",
    "MAX_DECLINED_TRADES",
]
