"""
Tessera - Tile-Drafting Game Engine

A deterministic, rules-driven engine for tile-drafting games with AI opponents.
Two rule variants (Classic wall tiling and Summer star boards) share one
engine that provides:
- Immutable state and a seeded random source
- Legal move generation and validation
- A reducer for actions and round-end scoring
- Three AI tiers, from random play to alpha-beta search
"""

__version__ = "0.1.0"
