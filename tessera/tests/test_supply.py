"""
Tests for the tile supply and the factory display.

Tests:
- Drawing, refilling from the discard pile, exhaustion
- Factory and center picks, first-player marker transfer
- Summer wild-colour pick rules
"""

import random

import pytest

from ..engine_core.factory import FactoryDisplay
from ..engine_core.supply import TileSupply


class TestTileSupply:
    """Tests for TileSupply."""

    def test_create_is_full_and_shuffled(self):
        """A new bag holds every tile, in seed-dependent order."""
        colors = ("blue", "red")
        a = TileSupply.create(colors, 10, random.Random(1))
        b = TileSupply.create(colors, 10, random.Random(1))
        c = TileSupply.create(colors, 10, random.Random(2))

        assert a.remaining == 20
        assert sorted(a.bag) == ["blue"] * 10 + ["red"] * 10
        assert a == b
        assert a.bag != c.bag

    def test_draw_returns_new_supply(self):
        """Drawing never modifies the supply it was called on."""
        supply = TileSupply(bag=("blue", "red", "black"))
        drawn, after = supply.draw(2, random.Random(0))

        assert drawn == ("black", "red")
        assert after.bag == ("blue",)
        assert supply.bag == ("blue", "red", "black")

    def test_draw_refills_from_discard(self):
        """An empty bag is refilled from the shuffled discard pile."""
        supply = TileSupply(bag=("blue",), discard=("red", "red", "red"))
        drawn, after = supply.draw(3, random.Random(0))

        assert sorted(drawn) == ["blue", "red", "red"]
        assert after.discard == ()
        assert after.bag == ("red",)

    def test_draw_when_exhausted_returns_fewer(self):
        """Bag and discard both empty: fewer tiles, no error."""
        supply = TileSupply(bag=("blue", "red"))
        drawn, after = supply.draw(5, random.Random(0))

        assert len(drawn) == 2
        assert after.is_exhausted

    def test_refill(self):
        """Refill moves the discard into the bag, shuffled by the seed."""
        supply = TileSupply(bag=("blue", "white"), discard=("red", "red", "black", "yellow"))
        after = supply.refill(random.Random(3))

        assert sorted(after.bag) == sorted(supply.bag + supply.discard)
        assert after.discard == ()
        assert after == supply.refill(random.Random(3))
        assert supply.discard == ("red", "red", "black", "yellow")

    def test_draw_reshuffles_like_refill(self):
        """Drawing past an empty bag uses the same shuffle as refill."""
        supply = TileSupply(bag=(), discard=("red", "blue", "black", "white", "yellow"))
        drawn, _ = supply.draw(2, random.Random(9))
        refilled = supply.refill(random.Random(9))

        assert drawn == (refilled.bag[-1], refilled.bag[-2])

    def test_with_discarded(self):
        supply = TileSupply(bag=("blue",))
        assert supply.with_discarded(()) is supply
        assert supply.with_discarded(["red"]).discard == ("red",)


class TestFactoryDisplay:
    """Tests for Classic picks."""

    @pytest.fixture
    def display(self):
        return FactoryDisplay(
            factories=(("blue", "blue", "red", "yellow"), ("black",) * 4),
            center=("red", "white"),
        )

    def test_fill_deals_every_factory(self):
        """Each factory gets tiles_per_factory tiles and the marker returns."""
        supply = TileSupply(bag=tuple(["blue"] * 20))
        display, after = FactoryDisplay.empty(5).fill(supply, 4, random.Random(0))

        assert [len(f) for f in display.factories] == [4] * 5
        assert display.center == ()
        assert display.center_has_first_player
        assert after.remaining == 0

    def test_fill_with_short_supply(self):
        """Later factories stay short when the supply runs out."""
        supply = TileSupply(bag=tuple(["blue"] * 6))
        display, _ = FactoryDisplay.empty(3).fill(supply, 4, random.Random(0))

        assert [len(f) for f in display.factories] == [4, 2, 0]

    def test_pick_from_factory_spills_rest(self, display):
        """Taking a colour empties the factory into the center."""
        result = display.pick_from_factory(0, "blue")

        assert result.taken == ("blue", "blue")
        assert result.spilled == ("red", "yellow")
        assert result.display.factories[0] == ()
        assert result.display.center == ("red", "white", "red", "yellow")
        assert result.display.center_has_first_player
        assert not result.took_first_player

    def test_pick_absent_color(self, display):
        assert display.pick_from_factory(1, "blue") is None
        assert display.pick_from_factory(7, "black") is None
        assert display.pick_from_center("black") is None

    def test_first_center_pick_takes_marker(self, display):
        """The first center pick carries the marker; the next one does not."""
        first = display.pick_from_center("red")
        assert first.taken == ("red",)
        assert first.took_first_player
        assert not first.display.center_has_first_player

        second = first.display.pick_from_center("white")
        assert not second.took_first_player
        assert second.display.center == ()

    def test_available_colors(self, display):
        assert display.available_colors() == ["blue", "red", "yellow", "black", "white"]
        assert display.tile_count() == 10
        assert not display.all_empty()


class TestWildPicks:
    """Tests for Summer wild-colour picks."""

    def test_factory_pick_adds_one_wild(self):
        """At most one wild tile comes along with the chosen colour."""
        display = FactoryDisplay(factories=(("green", "purple", "purple", "red"),))
        result = display.pick_from_factory_wild(0, "green", "purple")

        assert result.taken == ("green", "purple")
        assert result.wild_taken == 1
        assert result.display.center == ("purple", "red")

    def test_factory_wild_not_selectable_when_mixed(self):
        display = FactoryDisplay(factories=(("green", "purple", "purple", "red"),))
        assert display.pick_from_factory_wild(0, "purple", "purple") is None

    def test_factory_all_wild_gives_one(self):
        """A factory of only wild tiles yields one; the rest spill to the center."""
        display = FactoryDisplay(factories=(("purple",) * 4,))
        result = display.pick_from_factory_wild(0, "purple", "purple")

        assert result.taken == ("purple",)
        assert result.wild_taken == 1
        assert result.display.factories[0] == ()
        assert result.display.center == ("purple",) * 3

    def test_center_only_wild_gives_one(self):
        """Center holding 2 wild tiles: draft exactly 1, marker transfers."""
        display = FactoryDisplay(factories=((),), center=("orange", "orange"))
        result = display.pick_from_center_wild("orange", "orange")

        assert result.taken == ("orange",)
        assert result.display.center == ("orange",)
        assert result.took_first_player
        assert not result.display.center_has_first_player

    def test_center_wild_not_selectable_when_mixed(self):
        display = FactoryDisplay(factories=((),), center=("orange", "blue"))
        assert display.pick_from_center_wild("orange", "orange") is None

        result = display.pick_from_center_wild("blue", "orange")
        assert result.taken == ("blue", "orange")
        assert result.display.center == ()
