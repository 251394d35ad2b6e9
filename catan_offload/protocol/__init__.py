"""Protocole de décision déportée : format texte, tramage et client TCP."""

from .client import DecisionClient, DecisionOutcome, DecisionRequest, ReplyKind
from .errors import (
    DecisionConnectionError,
    DecisionProtocolError,
    DecisionServiceError,
    DecisionTimeout,
    WireFormatError,
)
from .wire import format_message, parse_message

__all__ = [
    "DecisionClient",
    "DecisionConnectionError",
    "DecisionOutcome",
    "DecisionProtocolError",
    "DecisionRequest",
    "DecisionServiceError",
    "DecisionTimeout",
    "ReplyKind",
    "WireFormatError",
    "format_message",
    "parse_message",
]
