"""Délégation des décisions du voleur et des échanges à un service externe."""

__version__ = "0.1.0"
