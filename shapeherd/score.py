"""The end-of-game tally of enemies left on the field."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from shapeherd.enemy import EnemyType


@dataclass
class Score:
    """How many enemies of each colour remain."""

    blue: int = 0
    green: int = 0
    red: int = 0
    purple: int = 0
    yellow: int = 0
    cyan: int = 0
    white: int = 0

    @classmethod
    def from_enemies(cls, kinds: Iterable[EnemyType]) -> Score:
        score = cls()
        for kind in kinds:
            if kind is EnemyType.NONE:
                raise ValueError("EnemyType.NONE cannot be scored")
            setattr(score, kind.value, getattr(score, kind.value) + 1)
        return score

    def rows(self) -> List[Tuple[str, int]]:
        """Label and count pairs in display order."""
        return [
            ("White", self.white),
            ("Red", self.red),
            ("Green", self.green),
            ("Blue", self.blue),
            ("Purple", self.purple),
            ("Yellow", self.yellow),
            ("Cyan", self.cyan),
        ]