"""
Classic Board Primitives - Pattern lines, wall and floor line.

All functions are pure: they take tuples and return new tuples.

Representation:
- pattern line row r: tuple of 0..r+1 tiles of one colour
- wall: 5x5 tuple grid, each cell a colour or None
- floor line: tuple of up to 7 entries (tiles or the first-player marker)
"""

from __future__ import annotations
from dataclasses import dataclass

from .config import CLASSIC, FIRST_PLAYER_MARKER, ClassicConfig
from .errors import InvariantViolation


WallGrid = tuple[tuple[str | None, ...], ...]


@dataclass(frozen=True)
class LinePlacement:
    """Result of placing tiles on a pattern line."""
    line: tuple[str, ...]
    placed: int
    overflow: tuple[str, ...]

    @property
    def overflow_count(self) -> int:
        return len(self.overflow)


@dataclass(frozen=True)
class WallPlacement:
    """Result of placing one tile on the wall."""
    wall: WallGrid
    col: int
    score: int


@dataclass(frozen=True)
class EndGameBonus:
    bonus: int
    rows: int
    columns: int
    colors: int


class Wall:
    """Wall placement and adjacency scoring."""

    @staticmethod
    def empty(config: ClassicConfig = CLASSIC) -> WallGrid:
        return tuple((None,) * config.wall_size for _ in range(config.wall_size))

    @staticmethod
    def column_for_color(row: int, color: str, config: ClassicConfig = CLASSIC) -> int:
        """Fixed column of color in row, or -1 for a foreign colour."""
        try:
            return config.wall_pattern[row].index(color)
        except ValueError:
            return -1

    @staticmethod
    def can_place_color(wall: WallGrid, row: int, color: str, config: ClassicConfig = CLASSIC) -> bool:
        col = Wall.column_for_color(row, color, config)
        if col == -1:
            return False
        return wall[row][col] is None

    @staticmethod
    def place_tile(wall: WallGrid, row: int, color: str, config: ClassicConfig = CLASSIC) -> WallPlacement:
        """Fill the fixed cell for (row, color) and score it."""
        col = Wall.column_for_color(row, color, config)
        if col == -1:
            raise ValueError(f"{color} has no cell in wall row {row}")
        if wall[row][col] is not None:
            raise InvariantViolation(f"Wall cell ({row}, {col}) is already filled")

        new_row = wall[row][:col] + (color,) + wall[row][col + 1:]
        new_wall = wall[:row] + (new_row,) + wall[row + 1:]
        return WallPlacement(wall=new_wall, col=col, score=Wall.score_adjacency(new_wall, row, col))

    @staticmethod
    def score_adjacency(wall: WallGrid, row: int, col: int) -> int:
        """
        Score the tile just placed at (row, col).

        An isolated tile scores 1. Otherwise each run through the tile that
        is longer than 1 scores its full length.
        """
        size = len(wall)
        horizontal = 1
        c = col - 1
        while c >= 0 and wall[row][c] is not None:
            horizontal += 1
            c -= 1
        c = col + 1
        while c < size and wall[row][c] is not None:
            horizontal += 1
            c += 1

        vertical = 1
        r = row - 1
        while r >= 0 and wall[r][col] is not None:
            vertical += 1
            r -= 1
        r = row + 1
        while r < size and wall[r][col] is not None:
            vertical += 1
            r += 1

        if horizontal == 1 and vertical == 1:
            return 1
        score = 0
        if horizontal > 1:
            score += horizontal
        if vertical > 1:
            score += vertical
        return score

    @staticmethod
    def row_filled(wall: WallGrid, row: int) -> int:
        return sum(1 for cell in wall[row] if cell is not None)

    @staticmethod
    def column_filled(wall: WallGrid, col: int) -> int:
        return sum(1 for row in wall if row[col] is not None)

    @staticmethod
    def color_filled(wall: WallGrid, color: str) -> int:
        return sum(1 for row in wall for cell in row if cell == color)

    @staticmethod
    def has_complete_row(wall: WallGrid) -> bool:
        return any(all(cell is not None for cell in row) for row in wall)

    @staticmethod
    def count_complete_rows(wall: WallGrid) -> int:
        return sum(1 for row in wall if all(cell is not None for cell in row))

    @staticmethod
    def end_game_bonuses(wall: WallGrid, config: ClassicConfig = CLASSIC) -> EndGameBonus:
        """+2 per full row, +7 per full column, +10 per complete colour."""
        size = len(wall)
        rows = Wall.count_complete_rows(wall)
        columns = sum(1 for c in range(size) if Wall.column_filled(wall, c) == size)
        colors = sum(1 for color in config.colors if Wall.color_filled(wall, color) == size)
        bonus = (
            rows * config.bonus_row
            + columns * config.bonus_column
            + colors * config.bonus_color_set
        )
        return EndGameBonus(bonus=bonus, rows=rows, columns=columns, colors=colors)


class PatternLine:
    """Per-row staging."""

    @staticmethod
    def empty(config: ClassicConfig = CLASSIC) -> tuple[tuple[str, ...], ...]:
        return tuple(() for _ in config.pattern_line_sizes)

    @staticmethod
    def capacity(row: int) -> int:
        return row + 1

    @staticmethod
    def can_place(line: tuple[str, ...], color: str, row: int, wall: WallGrid,
                  config: ClassicConfig = CLASSIC) -> bool:
        if line and line[0] != color:
            return False
        if not Wall.can_place_color(wall, row, color, config):
            return False
        return len(line) < PatternLine.capacity(row)

    @staticmethod
    def place(line: tuple[str, ...], tiles: tuple[str, ...], color: str, row: int) -> LinePlacement:
        """Fill up to capacity; anything beyond is overflow bound for the floor."""
        available = PatternLine.capacity(row) - len(line)
        to_place = max(0, min(len(tiles), available))
        return LinePlacement(
            line=line + (color,) * to_place,
            placed=to_place,
            overflow=(color,) * (len(tiles) - to_place),
        )

    @staticmethod
    def is_complete(line: tuple[str, ...], row: int) -> bool:
        return len(line) == PatternLine.capacity(row)

    @staticmethod
    def tile_to_wall(line: tuple[str, ...]) -> tuple[str, tuple[str, ...]] | None:
        """(colour for the wall, tiles for the discard) of a full line."""
        if not line:
            return None
        return line[0], line[1:]

    @staticmethod
    def legal_rows(color: str, lines, wall: WallGrid, config: ClassicConfig = CLASSIC) -> list[int]:
        return [
            row for row, line in enumerate(lines)
            if PatternLine.can_place(line, color, row, wall, config)
        ]


class FloorLine:
    """Penalty track."""

    @staticmethod
    def calculate_penalty(floor: tuple[str, ...], config: ClassicConfig = CLASSIC) -> int:
        """Sum of penalties over the occupied slots. Always <= 0."""
        slots = min(len(floor), config.floor_size)
        return sum(config.floor_penalties[:slots])

    @staticmethod
    def add(
        floor: tuple[str, ...],
        tiles: tuple[str, ...],
        with_marker: bool = False,
        config: ClassicConfig = CLASSIC,
    ) -> tuple[tuple[str, ...], tuple[str, ...]]:
        """
        Return (new floor, tiles for the discard).

        The marker goes down before the tiles. Entries past the last slot
        carry no penalty; tiles among them go straight to the discard.
        """
        entries = floor + ((FIRST_PLAYER_MARKER,) if with_marker else ()) + tiles
        kept = entries[:config.floor_size]
        excess = tuple(t for t in entries[config.floor_size:] if t != FIRST_PLAYER_MARKER)
        return kept, excess

    @staticmethod
    def discard_tiles(floor: tuple[str, ...]) -> tuple[str, ...]:
        """Everything on the floor except the marker."""
        return tuple(t for t in floor if t != FIRST_PLAYER_MARKER)
