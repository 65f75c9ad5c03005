from __future__ import annotations
from typing import Optional, Sequence
import numpy as np

GAME_NUMBERS = ("1", "2", "3")

def levenshtein(a: str, b: str) -> int:
    """Distancia de edición clásica (inserción/borrado/sustitución cuestan 1), sin distinguir mayúsculas."""
    a, b = a.lower(), b.lower()
    dp = np.zeros((len(a) + 1, len(b) + 1), dtype=int)
    dp[:, 0] = np.arange(len(a) + 1)
    dp[0, :] = np.arange(len(b) + 1)
    for i in range(1, len(a) + 1):
        for j in range(1, len(b) + 1):
            if a[i - 1] == b[j - 1]:
                dp[i, j] = dp[i - 1, j - 1]
            else:
                dp[i, j] = 1 + min(dp[i - 1, j], dp[i, j - 1], dp[i - 1, j - 1])
    return int(dp[len(a), len(b)])

def closest_header(token: str,
                   headers: Sequence[str],
                   max_distance: int = 3
                   ) -> Optional[str]:
    """Devuelve la etiqueta del vocabulario más cercana a `token`, o None si ninguna queda a max_distance o menos.

    Tokens tipo "Game1" / "game 2" se resuelven directo a "Game <n>" para no
    empatar con las demás etiquetas de juego.
    """
    lowered = token.lower()
    if lowered.startswith("game"):
        suffix = lowered[len("game"):].strip()
        if suffix in GAME_NUMBERS:
            return f"Game {suffix}"

    if not headers:
        return None
    dists = [levenshtein(h, token) for h in headers]
    j = int(np.argmin(dists))
    return headers[j] if dists[j] <= max_distance else None
