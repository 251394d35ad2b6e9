"""Format texte des requêtes et tramage sur le flux.

Une requête tient sur une ligne : une étiquette suivie de sections séparées
par `|`, chaque section étant un entier seul ou une suite d'entiers séparés
par des virgules :

    robber|5,2,6,...|0,1,...|...|1

Sur le flux, la requête est précédée de sa longueur en octets (2 octets
big-endian). La réponse est soit un entier signé sur 4 octets big-endian
(décision de tuile), soit une ligne de texte terminée par `\\n` (échange).
"""

from __future__ import annotations

import struct
from typing import BinaryIO, Iterable, List, Sequence, Tuple

import numpy as np

from catan_offload.protocol.errors import WireFormatError

SECTION_SEPARATOR = "|"
VALUE_SEPARATOR = ","
MAX_FRAME_BYTES = 0xFFFF

_LENGTH_PREFIX = struct.Struct(">H")
_INT_REPLY = struct.Struct(">i")


def format_message(tag: str, values: Iterable[int], segment_lengths: Sequence[int]) -> str:
    """Sérialise un vecteur d'entiers selon un découpage en sections fixe.

    Args:
        tag: type de décision (`robber`, `trade`).
        values: vecteur d'entiers, dans l'ordre des sections.
        segment_lengths: longueur de chaque section.

    Raises:
        WireFormatError: étiquette invalide, section vide, longueur incohérente
            ou valeurs non entières.
    """

    _check_tag(tag)
    vector = _as_int_vector(values)
    _check_layout(len(vector), segment_lengths)

    sections: List[str] = [tag]
    start = 0
    for length in segment_lengths:
        chunk = vector[start:start + length]
        sections.append(VALUE_SEPARATOR.join(str(int(value)) for value in chunk))
        start += length
    return SECTION_SEPARATOR.join(sections)


def split_message(message: str) -> Tuple[str, List[List[int]]]:
    """Découpe un message en étiquette et sections d'entiers, sans schéma."""

    tag, *raw_sections = message.strip().split(SECTION_SEPARATOR)
    _check_tag(tag)
    if not raw_sections:
        raise WireFormatError(f"Message sans section: {message!r}")
    sections: List[List[int]] = []
    for raw in raw_sections:
        if not raw:
            raise WireFormatError(f"Section vide dans {message!r}")
        try:
            sections.append([int(token) for token in raw.split(VALUE_SEPARATOR)])
        except ValueError as exc:
            raise WireFormatError(f"Valeur non entière dans {raw!r}") from exc
    return tag, sections


def parse_message(message: str, segment_lengths: Sequence[int]) -> Tuple[str, np.ndarray]:
    """Inverse de `format_message` : vérifie le découpage et rend le vecteur."""

    tag, sections = split_message(message)
    if len(sections) != len(segment_lengths):
        raise WireFormatError(
            f"{len(sections)} sections reçues, {len(segment_lengths)} attendues"
        )
    for index, (section, expected) in enumerate(zip(sections, segment_lengths)):
        if len(section) != expected:
            raise WireFormatError(
                f"Section {index}: {len(section)} valeurs, {expected} attendues"
            )
    values = [value for section in sections for value in section]
    return tag, np.array(values, dtype=np.int64)


# -- Tramage ---------------------------------------------------------------


def frame_message(message: str) -> bytes:
    payload = message.encode("utf-8")
    if len(payload) > MAX_FRAME_BYTES:
        raise WireFormatError(f"Message trop long pour une trame: {len(payload)} octets")
    return _LENGTH_PREFIX.pack(len(payload)) + payload


def read_framed_message(stream: BinaryIO) -> str:
    (length,) = _LENGTH_PREFIX.unpack(_read_exactly(stream, _LENGTH_PREFIX.size))
    payload = _read_exactly(stream, length)
    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise WireFormatError("Trame non UTF-8") from exc


def encode_int_reply(value: int) -> bytes:
    return _INT_REPLY.pack(value)


def read_int_reply(stream: BinaryIO) -> int:
    (value,) = _INT_REPLY.unpack(_read_exactly(stream, _INT_REPLY.size))
    return value


def encode_line_reply(text: str) -> bytes:
    return (text.rstrip("\r\n") + "\n").encode("utf-8")


def read_line_reply(stream: BinaryIO) -> str:
    raw = stream.readline()
    if not raw:
        raise EOFError("Flux fermé avant la réponse")
    try:
        return raw.decode("utf-8").rstrip("\r\n")
    except UnicodeDecodeError as exc:
        raise WireFormatError("Réponse non UTF-8") from exc


def _read_exactly(stream: BinaryIO, size: int) -> bytes:
    chunks: List[bytes] = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            raise EOFError(f"Flux fermé après {size - remaining}/{size} octets")
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


# -- Validation --------------------------------------------------------------


def _check_tag(tag: str) -> None:
    if not tag or SECTION_SEPARATOR in tag or VALUE_SEPARATOR in tag:
        raise WireFormatError(f"Étiquette invalide: {tag!r}")


def _check_layout(size: int, segment_lengths: Sequence[int]) -> None:
    if not segment_lengths:
        raise WireFormatError("Aucune section définie")
    if any(length <= 0 for length in segment_lengths):
        raise WireFormatError(f"Section vide dans le découpage {tuple(segment_lengths)}")
    expected = sum(segment_lengths)
    if size != expected:
        raise WireFormatError(f"Vecteur de {size} valeurs, découpage de {expected}")


def _as_int_vector(values: Iterable[int]) -> np.ndarray:
    vector = np.asarray(list(values) if not isinstance(values, np.ndarray) else values)
    if vector.ndim != 1:
        raise WireFormatError(f"Vecteur attendu, forme reçue {vector.shape}")
    if vector.size and vector.dtype.kind not in "iub":
        raise WireFormatError(f"Valeurs entières attendues, dtype {vector.dtype}")
    return vector


__all__ = [
    "MAX_FRAME_BYTES",
    "encode_int_reply",
    "encode_line_reply",
    "format_message",
    "frame_message",
    "parse_message",
    "read_framed_message",
    "read_int_reply",
    "read_line_reply",
    "split_message",
]
