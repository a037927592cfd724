"""
Tile Supply - The face-down bag and its discard pile.

The supply is a value: drawing returns the drawn tiles together with a new
supply, and the random source is always passed in by the caller.
"""

from __future__ import annotations
from dataclasses import dataclass
import random


@dataclass(frozen=True)
class TileSupply:
    """
    Bag of face-down tiles plus the discard pile (box lid).

    Tiles are drawn from the end of the bag. When the bag runs dry the
    discard pile is shuffled back in; if both are empty, fewer tiles than
    requested are returned.
    """
    bag: tuple[str, ...] = ()
    discard: tuple[str, ...] = ()

    @classmethod
    def create(cls, colors: tuple[str, ...], tiles_per_color: int, rng: random.Random) -> TileSupply:
        """Build a full, shuffled bag."""
        tiles = [color for color in colors for _ in range(tiles_per_color)]
        rng.shuffle(tiles)
        return cls(bag=tuple(tiles))

    @property
    def remaining(self) -> int:
        return len(self.bag)

    @property
    def is_exhausted(self) -> bool:
        return not self.bag and not self.discard

    def draw(self, n: int, rng: random.Random) -> tuple[tuple[str, ...], TileSupply]:
        """Return (drawn tiles, new supply). Never fails."""
        supply = self
        drawn: list[str] = []

        while len(drawn) < n:
            if not supply.bag:
                if not supply.discard:
                    break
                supply = supply.refill(rng)
            take = min(n - len(drawn), len(supply.bag))
            drawn.extend(reversed(supply.bag[-take:]))
            supply = TileSupply(bag=supply.bag[:-take], discard=supply.discard)

        return tuple(drawn), supply

    def refill(self, rng: random.Random) -> TileSupply:
        """Shuffle the discard pile into the bag and empty the discard."""
        tiles = list(self.bag) + list(self.discard)
        rng.shuffle(tiles)
        return TileSupply(bag=tuple(tiles), discard=())

    def with_discarded(self, tiles) -> TileSupply:
        """Return new supply with tiles added to the discard pile."""
        tiles = tuple(tiles)
        if not tiles:
            return self
        return TileSupply(bag=self.bag, discard=self.discard + tiles)
