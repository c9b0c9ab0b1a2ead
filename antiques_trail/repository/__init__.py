"""Repository layer: DB access helpers (SQLite).

Keep functions thin and focused, so services avoid SQL strings.
Every function takes the connection explicitly; none of them opens one.
"""
from __future__ import annotations


def placeholders(n: int) -> str:
    return ",".join(["?"] * n)
