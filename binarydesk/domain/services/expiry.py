"""
BinaryDesk – Domain Service: Expiry labels
============================================
Mapeo EXPLÍCITO etiqueta → duración. No se infiere nada por
substring: "45m" no es "5m".

Etiquetas desconocidas:
  - modo por defecto → 1 minuto (default documentado)
  - modo estricto    → InvalidExpiryError
"""

from __future__ import annotations

from binarydesk.domain.exceptions.domain_errors import InvalidExpiryError

DEFAULT_EXPIRY_LABEL = "1m"

EXPIRY_DURATIONS: dict[str, float] = {
    "30s": 30.0,
    "1m": 60.0,
    "5m": 300.0,
    "15m": 900.0,
    "1h": 3600.0,
}


def normalize_label(label: str) -> str:
    return str(label).strip().lower()


def is_known_label(label: str) -> bool:
    return normalize_label(label) in EXPIRY_DURATIONS


def resolve_expiry(label: str, strict: bool = False) -> tuple[str, float]:
    """
    Resuelve una etiqueta de expiración.

    Returns:
        (etiqueta_normalizada, duración_en_segundos)

    Raises:
        InvalidExpiryError si strict=True y la etiqueta no está mapeada.
    """
    key = normalize_label(label)
    if key in EXPIRY_DURATIONS:
        return key, EXPIRY_DURATIONS[key]
    if strict:
        raise InvalidExpiryError(label)
    return DEFAULT_EXPIRY_LABEL, EXPIRY_DURATIONS[DEFAULT_EXPIRY_LABEL]
