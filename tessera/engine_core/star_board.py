"""
Star Board - Summer variant placement board.

Seven rings (six colours plus the wild "center" ring), each with positions
1..6. Position N costs N tiles and is filled at most once. Decorations sit
between specific positions and award bonus tiles once all of their
neighbouring positions are filled.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from collections import Counter

from .config import SUMMER, SummerConfig
from .errors import InvariantViolation


CENTER_STAR = "center"
STARS = SUMMER.stars
POSITIONS = tuple(range(1, SUMMER.positions_per_star + 1))


@dataclass(frozen=True)
class Decoration:
    """A pillar, statue or window and the positions surrounding it."""
    kind: str
    decoration_id: str
    surrounded_by: tuple[tuple[str, int], ...]
    bonus_tiles: int


def _build_decorations() -> tuple[Decoration, ...]:
    ring = ("red", "blue", "yellow", "orange", "green", "purple")
    decorations = []
    for i, star in enumerate(ring):
        nxt = ring[(i + 1) % len(ring)]
        # pillar between two neighbouring stars and two center positions
        center_a = i if i > 0 else len(ring)
        center_b = i + 1
        pillar_spots = ((star, 1), (nxt, 1), (CENTER_STAR, center_a), (CENTER_STAR, center_b))
        decorations.append(Decoration("pillar", f"p{i + 1}", pillar_spots, 1))
    for i, star in enumerate(ring):
        nxt = ring[(i + 1) % len(ring)]
        decorations.append(Decoration(
            "statue", f"s{i + 1}",
            ((star, 2), (star, 3), (nxt, 5), (nxt, 6)),
            2,
        ))
    for i, star in enumerate(ring):
        decorations.append(Decoration("window", f"w{i + 1}", ((star, 5), (star, 6)), 3))
    return tuple(decorations)


DECORATIONS = _build_decorations()


@dataclass(frozen=True)
class StarPlacement:
    """Result of a star placement."""
    board: StarBoard
    score: int
    discarded: int
    decorations: tuple[Decoration, ...] = ()


@dataclass(frozen=True)
class StarBonus:
    star_bonuses: dict[str, int]
    number_bonuses: dict[int, int]

    @property
    def total(self) -> int:
        return sum(self.star_bonuses.values()) + sum(self.number_bonuses.values())


@dataclass(frozen=True)
class StarBoard:
    """Per-player star board. rings maps star name -> 6 slots (None = empty)."""
    rings: dict[str, tuple[str | None, ...]] = field(
        default_factory=lambda: {star: (None,) * len(POSITIONS) for star in STARS}
    )

    @classmethod
    def empty(cls) -> StarBoard:
        return cls()

    def get(self, star: str, position: int) -> str | None:
        return self.rings[star][position - 1]

    def is_filled(self, star: str, position: int) -> bool:
        return self.get(star, position) is not None

    def filled_count(self, star: str) -> int:
        return sum(1 for slot in self.rings[star] if slot is not None)

    def used_colors(self, star: str) -> set[str]:
        return {slot for slot in self.rings[star] if slot is not None}

    def tile_count(self) -> int:
        return sum(self.filled_count(star) for star in STARS)

    def tiles(self) -> list[str]:
        return [slot for star in STARS for slot in self.rings[star] if slot is not None]

    def with_tile(self, star: str, position: int, color: str) -> StarBoard:
        if self.is_filled(star, position):
            raise InvariantViolation(f"Star {star} position {position} is already filled")
        slots = self.rings[star]
        new_slots = slots[:position - 1] + (color,) + slots[position:]
        return StarBoard(rings={**self.rings, star: new_slots})

    def can_place(self, star: str, position: int, hand: tuple[str, ...], wild_color: str | None) -> bool:
        """
        Whether any placement on (star, position) is affordable from hand.

        A coloured star needs at least one tile of its own colour; the center
        star needs at least one non-wild tile of a colour not yet on that ring.
        """
        if star not in self.rings or position not in POSITIONS:
            return False
        if self.is_filled(star, position):
            return False
        if len(hand) < position:
            return False

        if star != CENTER_STAR:
            return star in hand
        used = self.used_colors(CENTER_STAR)
        return any(t != wild_color and t not in used for t in hand)

    def place(self, star: str, position: int, color: str, tiles_used: int, wild_tiles_used: int) -> StarPlacement:
        """Fill the position, score the ring run and report decorations."""
        board = self.with_tile(star, position, color)
        return StarPlacement(
            board=board,
            score=board.score_contiguous(star, position),
            discarded=tiles_used + wild_tiles_used - 1,
            decorations=board.completed_decorations(star, position),
        )

    def score_contiguous(self, star: str, position: int) -> int:
        """1 + filled neighbours walked clockwise and counter-clockwise."""
        n = len(POSITIONS)
        slots = self.rings[star]
        score = 1

        pos = position % n + 1
        while pos != position and slots[pos - 1] is not None:
            score += 1
            pos = pos % n + 1

        pos = (position - 2) % n + 1
        while pos != position and slots[pos - 1] is not None:
            score += 1
            pos = (pos - 2) % n + 1

        return score

    def completed_decorations(self, star: str, position: int) -> tuple[Decoration, ...]:
        """Decorations next to (star, position) whose neighbours are now all filled."""
        return tuple(
            deco for deco in DECORATIONS
            if (star, position) in deco.surrounded_by
            and all(self.is_filled(s, p) for s, p in deco.surrounded_by)
        )

    def end_game_bonuses(self, config: SummerConfig = SUMMER) -> StarBonus:
        star_bonuses = {
            star: config.star_bonuses.get(star, 0)
            for star in STARS
            if self.filled_count(star) == len(POSITIONS)
        }
        number_bonuses = {
            n: config.number_bonuses.get(n, 0)
            for n in POSITIONS
            if all(self.is_filled(star, n) for star in STARS)
        }
        return StarBonus(star_bonuses=star_bonuses, number_bonuses=number_bonuses)


def payment_for(hand: tuple[str, ...], color: str, position: int, wild_color: str | None) -> tuple[int, int] | None:
    """
    Canonical payment for a placement: as many tiles of color as possible,
    the rest in wild tiles. Returns (tiles_used, wild_tiles_used) or None.
    """
    counts = Counter(hand)
    if color == wild_color:
        if counts[color] >= position:
            return position, 0
        return None
    tiles_used = min(counts[color], position)
    if tiles_used < 1:
        return None
    wild_needed = position - tiles_used
    if wild_needed > counts[wild_color]:
        return None
    return tiles_used, wild_needed
