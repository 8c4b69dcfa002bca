# src/bptree_map/io.py
from typing import Sequence

import pandas as pd

from bptree_map.db.traversal import iter_entries


def entries_to_dataframe(tree_map, columns: Sequence[str] = ("key", "value")) -> pd.DataFrame:
    """
    Devuelve un DataFrame con las entradas del mapa en orden de clave (una fila por entrada).
    Solo en memoria: no escribe ningún archivo.
    """
    if len(columns) != 2:
        raise ValueError("columns must name exactly two columns (key, value)")
    rows = list(iter_entries(tree_map.tree))
    return pd.DataFrame(rows, columns=list(columns))
