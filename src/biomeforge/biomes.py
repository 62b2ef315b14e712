"""Biome labels, display colors and the ordered classification rules."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, NamedTuple


class Biome(IntEnum):
    """Biome labels. Values are the codes stored in biome grids."""

    OCEAN = 0
    BEACH = 1
    PLAINS = 2
    FOREST = 3
    MOUNTAIN = 4
    SNOW = 5
    DESERT = 6
    SWAMP = 7
    TUNDRA = 8
    JUNGLE = 9

    @property
    def color(self) -> tuple[int, int, int]:
        """Display color as an RGB triple."""
        return BIOME_COLORS[self]


BIOME_COLORS: dict[Biome, tuple[int, int, int]] = {
    Biome.OCEAN: (0, 0, 100),
    Biome.BEACH: (238, 214, 175),
    Biome.PLAINS: (50, 205, 50),
    Biome.FOREST: (34, 139, 34),
    Biome.MOUNTAIN: (139, 137, 137),
    Biome.SNOW: (255, 250, 250),
    Biome.DESERT: (255, 228, 181),
    Biome.SWAMP: (0, 100, 0),
    Biome.TUNDRA: (255, 228, 196),
    Biome.JUNGLE: (0, 128, 0),
}


def biome_color(biome: Biome | int) -> tuple[int, int, int]:
    """RGB color for a biome label or code."""
    return BIOME_COLORS[Biome(biome)]


class CellState(NamedTuple):
    """Inputs to classification.

    Fields may be scalars or equally shaped numpy arrays; rule predicates
    only use comparisons and `&`, so they work elementwise on either.
    """

    elevation: Any
    sea_level: Any
    slope: Any
    temperature: Any
    humidity: Any


@dataclass(frozen=True)
class BiomeRule:
    """A classification rule: cells matching `predicate` get `biome`."""

    name: str
    predicate: Callable[[CellState], Any]
    biome: Biome


def _lowland(c: CellState) -> Any:
    return c.elevation < c.sea_level * 1.2


def _upland(c: CellState) -> Any:
    return c.elevation < c.sea_level * 1.5


def _tropical(c: CellState) -> Any:
    return (c.humidity > 0.7) & (c.temperature > 0.7)


SLOPE_RULE = BiomeRule("steep_slope", lambda c: c.slope > 0.5, Biome.MOUNTAIN)

# First match wins. The final rule matches everything.
BIOME_RULES: tuple[BiomeRule, ...] = (
    BiomeRule("deep_water", lambda c: c.elevation < c.sea_level * 0.8, Biome.OCEAN),
    BiomeRule("shore", lambda c: c.elevation < c.sea_level, Biome.BEACH),
    BiomeRule(
        "tropical_peak", lambda c: _tropical(c) & (c.elevation > 0.8), Biome.MOUNTAIN
    ),
    BiomeRule("tropical", _tropical, Biome.JUNGLE),
    BiomeRule("frozen", lambda c: c.temperature < 0.2, Biome.SNOW),
    SLOPE_RULE,
    BiomeRule(
        "lowland_wet_warm",
        lambda c: _lowland(c) & (c.humidity > 0.7) & (c.temperature > 0.5),
        Biome.JUNGLE,
    ),
    BiomeRule("lowland_wet", lambda c: _lowland(c) & (c.humidity > 0.7), Biome.SWAMP),
    BiomeRule(
        "lowland_mild_warm",
        lambda c: _lowland(c) & (c.humidity > 0.4) & (c.temperature > 0.5),
        Biome.FOREST,
    ),
    BiomeRule("lowland_mild", lambda c: _lowland(c) & (c.humidity > 0.4), Biome.PLAINS),
    BiomeRule("lowland_dry_hot", lambda c: _lowland(c) & (c.temperature > 0.7), Biome.DESERT),
    BiomeRule("lowland_dry", _lowland, Biome.PLAINS),
    BiomeRule(
        "upland_wet_warm",
        lambda c: _upland(c) & (c.humidity > 0.5) & (c.temperature > 0.5),
        Biome.MOUNTAIN,
    ),
    BiomeRule("upland_wet", lambda c: _upland(c) & (c.humidity > 0.5), Biome.TUNDRA),
    BiomeRule("upland_dry_hot", lambda c: _upland(c) & (c.temperature > 0.7), Biome.DESERT),
    BiomeRule("upland_dry", _upland, Biome.FOREST),
    BiomeRule("highland_cold", lambda c: c.temperature < 0.3, Biome.SNOW),
    BiomeRule("highland_cool", lambda c: c.temperature < 0.5, Biome.MOUNTAIN),
    BiomeRule("highland_mild", lambda c: c.temperature < 0.7, Biome.FOREST),
    BiomeRule("highland_hot", lambda c: True, Biome.DESERT),
)


def biome_rules(slope_rules: bool = True) -> tuple[BiomeRule, ...]:
    """The rule list, optionally without the steep-slope rule."""
    if slope_rules:
        return BIOME_RULES
    return tuple(rule for rule in BIOME_RULES if rule is not SLOPE_RULE)


def matching_rule(
    state: CellState,
    rules: tuple[BiomeRule, ...] = BIOME_RULES,
) -> BiomeRule:
    """First rule whose predicate holds for a single cell."""
    for rule in rules:
        if rule.predicate(state):
            return rule
    # Unreachable while the last rule is a catch-all.
    raise ValueError(f"No biome rule matched {state}")


def choose_biome(
    temperature: float,
    humidity: float,
    elevation: float,
    sea_level: float,
    slope: float,
    slope_rules: bool = True,
) -> Biome:
    """Classify a single cell."""
    state = CellState(
        elevation=elevation,
        sea_level=sea_level,
        slope=slope,
        temperature=temperature,
        humidity=humidity,
    )
    return matching_rule(state, biome_rules(slope_rules)).biome
