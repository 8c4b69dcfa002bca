# src/bptree_map/config.py
from bptree_map.errors import ConfigurationError

# orden por defecto: 16 hijos por nodo
DEFAULT_ORDER = 16
MIN_ORDER = 3


def validate_order(order) -> int:
    """
    Devuelve `order` si es un orden de árbol válido.
    Un orden menor que MIN_ORDER no puede respetar el split (cada mitad necesita al menos una clave).
    """
    if isinstance(order, bool) or not isinstance(order, int):
        raise ConfigurationError(f"order must be an int, got {type(order).__name__}")
    if order < MIN_ORDER:
        raise ConfigurationError(f"order must be >= {MIN_ORDER}, got {order}")
    return order
