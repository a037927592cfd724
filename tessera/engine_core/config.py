"""
Variant Configuration - Fixed constants for each rule set.

Both variants share the same skeleton (factories, center pool, bag and
discard) and differ in palette, scoring tables and board shape.
"""

from __future__ import annotations
from dataclasses import dataclass, field


FIRST_PLAYER_MARKER = "first-player"

MIN_PLAYERS = 2
MAX_PLAYERS = 4


@dataclass(frozen=True)
class ClassicConfig:
    """Constants for the Classic (wall grid) variant."""
    colors: tuple[str, ...] = ("blue", "yellow", "red", "black", "white")
    tiles_per_color: int = 20
    factories: dict[int, int] = field(default_factory=lambda: {2: 5, 3: 7, 4: 9})
    tiles_per_factory: int = 4
    wall_pattern: tuple[tuple[str, ...], ...] = (
        ("blue", "yellow", "red", "black", "white"),
        ("white", "blue", "yellow", "red", "black"),
        ("black", "white", "blue", "yellow", "red"),
        ("red", "black", "white", "blue", "yellow"),
        ("yellow", "red", "black", "white", "blue"),
    )
    floor_penalties: tuple[int, ...] = (-1, -1, -2, -2, -2, -3, -3)
    bonus_row: int = 2
    bonus_column: int = 7
    bonus_color_set: int = 10
    starting_score: int = 0
    min_score: int = 0
    pattern_line_sizes: tuple[int, ...] = (1, 2, 3, 4, 5)

    @property
    def total_tiles(self) -> int:
        return len(self.colors) * self.tiles_per_color

    @property
    def wall_size(self) -> int:
        return len(self.wall_pattern)

    @property
    def floor_size(self) -> int:
        return len(self.floor_penalties)

    def factory_count(self, num_players: int) -> int:
        return self.factories.get(num_players, 5)


@dataclass(frozen=True)
class SummerConfig:
    """Constants for the Summer (star board) variant."""
    colors: tuple[str, ...] = ("purple", "green", "orange", "yellow", "blue", "red")
    tiles_per_color: int = 22
    rounds: int = 6
    factories: dict[int, int] = field(default_factory=lambda: {2: 5, 3: 7, 4: 9})
    tiles_per_factory: int = 4
    wild_sequence: tuple[str, ...] = ("purple", "green", "orange", "yellow", "blue", "red")
    starting_score: int = 5
    min_score: int = 1
    corner_storage: int = 4
    supply_spaces: int = 10
    positions_per_star: int = 6
    star_bonuses: dict[str, int] = field(default_factory=lambda: {
        "center": 12,
        "red": 14,
        "blue": 15,
        "yellow": 16,
        "orange": 17,
        "green": 18,
        "purple": 20,
    })
    number_bonuses: dict[int, int] = field(default_factory=lambda: {
        1: 4, 2: 8, 3: 12, 4: 16, 5: 0, 6: 0,
    })

    @property
    def total_tiles(self) -> int:
        return len(self.colors) * self.tiles_per_color

    @property
    def stars(self) -> tuple[str, ...]:
        return ("red", "blue", "yellow", "orange", "green", "purple", "center")

    def factory_count(self, num_players: int) -> int:
        return self.factories.get(num_players, 5)

    def wild_for_round(self, round_number: int) -> str:
        """Wild colour for a 1-based round number."""
        return self.wild_sequence[(round_number - 1) % len(self.wild_sequence)]


CLASSIC = ClassicConfig()
SUMMER = SummerConfig()
