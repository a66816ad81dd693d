from typing import Sequence

import numpy as np


def cosine_similarity(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    """
    Cosine similarity over the shared prefix of ``a`` and ``b``.

    Vectors of different lengths are compared on their first
    min(len(a), len(b)) elements. A zero norm on either side yields 0.0.
    """
    n = min(len(a), len(b))
    x = np.asarray(a[:n], dtype=np.float64)
    y = np.asarray(b[:n], dtype=np.float64)

    norm_x = float(np.dot(x, x))
    norm_y = float(np.dot(y, y))
    if norm_x == 0.0 or norm_y == 0.0:
        return 0.0
    return float(np.dot(x, y)) / (np.sqrt(norm_x) * np.sqrt(norm_y))
