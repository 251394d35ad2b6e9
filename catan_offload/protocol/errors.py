"""Erreurs du protocole de décision déportée."""

from __future__ import annotations


class WireFormatError(ValueError):
    """Message mal formé (segments vides, longueur incohérente, valeur non entière)."""


class DecisionServiceError(RuntimeError):
    """Échec d'un aller-retour avec le service de décision."""


class DecisionConnectionError(DecisionServiceError):
    """Service injoignable ou connexion interrompue."""


class DecisionTimeout(DecisionServiceError):
    """Aucune réponse dans le délai configuré."""


class DecisionProtocolError(DecisionServiceError):
    """Réponse illisible ou hors du domaine attendu."""


__all__ = [
    "DecisionConnectionError",
    "DecisionProtocolError",
    "DecisionServiceError",
    "DecisionTimeout",
    "WireFormatError",
]
