"""Scripted RNG stand-in for pinning generation outcomes in tests."""

from __future__ import annotations


class FixedRNG:
    """Returns *default* for every seed unless a seed is listed in *values*.

    Records every seed it was asked for in :attr:`calls`.
    """

    def __init__(self, default: float = 0.0, values: dict[str, float] | None = None) -> None:
        self.default = default
        self.values = dict(values or {})
        self.calls: list[str] = []

    def next_float(self, seed: str) -> float:
        self.calls.append(seed)
        return self.values.get(seed, self.default)

    def next_bool(self, seed: str, probability: float = 0.5) -> bool:
        return self.next_float(seed) < probability
