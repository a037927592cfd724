"""
Factory Display - Factory offers plus the shared center pool.

Pick operations return None when the requested colour is absent; the
display itself is never modified in place.
"""

from __future__ import annotations
from dataclasses import dataclass
import random

from .supply import TileSupply


@dataclass(frozen=True)
class PickResult:
    """Outcome of a successful pick."""
    taken: tuple[str, ...]
    display: FactoryDisplay
    spilled: tuple[str, ...] = ()
    wild_taken: int = 0
    took_first_player: bool = False


@dataclass(frozen=True)
class FactoryDisplay:
    """
    Factories and the center pool.

    The first-player marker sits in the center at the start of every round
    and goes to whoever first picks from the center.
    """
    factories: tuple[tuple[str, ...], ...] = ()
    center: tuple[str, ...] = ()
    center_has_first_player: bool = True

    @classmethod
    def empty(cls, count: int) -> FactoryDisplay:
        return cls(factories=tuple(() for _ in range(count)))

    def fill(
        self,
        supply: TileSupply,
        tiles_per_factory: int,
        rng: random.Random,
    ) -> tuple[FactoryDisplay, TileSupply]:
        """Deal a fresh round: every factory gets up to tiles_per_factory tiles."""
        factories = []
        for _ in self.factories:
            drawn, supply = supply.draw(tiles_per_factory, rng)
            factories.append(drawn)
        return FactoryDisplay(factories=tuple(factories), center=(), center_has_first_player=True), supply

    def all_empty(self) -> bool:
        return all(not f for f in self.factories) and not self.center

    def tile_count(self) -> int:
        return sum(len(f) for f in self.factories) + len(self.center)

    def available_colors(self) -> list[str]:
        """Distinct colours on offer, in first-seen order."""
        seen: dict[str, None] = {}
        for factory in self.factories:
            for tile in factory:
                seen.setdefault(tile, None)
        for tile in self.center:
            seen.setdefault(tile, None)
        return list(seen)

    def has_factory(self, factory_index) -> bool:
        return isinstance(factory_index, int) and 0 <= factory_index < len(self.factories)

    def _with_factory_emptied(self, factory_index: int, new_center: tuple[str, ...]) -> FactoryDisplay:
        factories = tuple(
            () if i == factory_index else f
            for i, f in enumerate(self.factories)
        )
        return FactoryDisplay(
            factories=factories,
            center=new_center,
            center_has_first_player=self.center_has_first_player,
        )

    def pick_from_factory(self, factory_index: int, color: str) -> PickResult | None:
        """Take every tile of color; the rest of the factory spills to the center."""
        if not self.has_factory(factory_index):
            return None
        factory = self.factories[factory_index]
        taken = tuple(t for t in factory if t == color)
        if not taken:
            return None
        spilled = tuple(t for t in factory if t != color)
        return PickResult(
            taken=taken,
            display=self._with_factory_emptied(factory_index, self.center + spilled),
            spilled=spilled,
        )

    def pick_from_center(self, color: str) -> PickResult | None:
        """Take every tile of color from the center, plus the marker if present."""
        taken = tuple(t for t in self.center if t == color)
        if not taken:
            return None
        return PickResult(
            taken=taken,
            display=FactoryDisplay(
                factories=self.factories,
                center=tuple(t for t in self.center if t != color),
                center_has_first_player=False,
            ),
            took_first_player=self.center_has_first_player,
        )

    def pick_from_factory_wild(self, factory_index: int, color: str, wild_color: str) -> PickResult | None:
        """
        Summer factory pick.

        The wild colour cannot be chosen directly unless the factory holds
        nothing else, in which case exactly one wild tile is taken. Otherwise
        at most one wild tile comes along with the chosen colour.
        The all-wild case exists so a factory of wild tiles never leaves the
        draft with no legal move.
        """
        if not self.has_factory(factory_index):
            return None
        factory = self.factories[factory_index]
        if color == wild_color:
            if not factory or any(t != wild_color for t in factory):
                return None
            spilled = factory[1:]
            return PickResult(
                taken=(wild_color,),
                display=self._with_factory_emptied(factory_index, self.center + spilled),
                spilled=spilled,
                wild_taken=1,
            )

        taken = [t for t in factory if t == color]
        if not taken:
            return None

        remaining = [t for t in factory if t != color]
        wild_taken = 0
        if wild_color in remaining:
            remaining.remove(wild_color)
            taken.append(wild_color)
            wild_taken = 1

        spilled = tuple(remaining)
        return PickResult(
            taken=tuple(taken),
            display=self._with_factory_emptied(factory_index, self.center + spilled),
            spilled=spilled,
            wild_taken=wild_taken,
        )

    def pick_from_center_wild(self, color: str, wild_color: str) -> PickResult | None:
        """
        Summer center pick.

        Picking the wild colour is only allowed when the center holds wild
        tiles exclusively, and then exactly one is taken.
        """
        if color == wild_color:
            if not self.center or any(t != wild_color for t in self.center):
                return None
            return PickResult(
                taken=(wild_color,),
                display=FactoryDisplay(
                    factories=self.factories,
                    center=self.center[1:],
                    center_has_first_player=False,
                ),
                wild_taken=1,
                took_first_player=self.center_has_first_player,
            )

        taken = [t for t in self.center if t == color]
        if not taken:
            return None

        new_center = [t for t in self.center if t != color]
        wild_taken = 0
        if wild_color in new_center:
            new_center.remove(wild_color)
            taken.append(wild_color)
            wild_taken = 1

        return PickResult(
            taken=tuple(taken),
            display=FactoryDisplay(
                factories=self.factories,
                center=tuple(new_center),
                center_has_first_player=False,
            ),
            wild_taken=wild_taken,
            took_first_player=self.center_has_first_player,
        )
