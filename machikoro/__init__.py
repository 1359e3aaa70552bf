"""
Machikoro - Rules engine for the Machi Koro city-building dice game.

A deterministic, move-oriented engine that:
- Validates player moves against the turn/phase state machine
- Resolves dice-driven establishment effects in a fixed pass order
- Manages the establishment supply and landmark registry
- Emits structured event records for every coin transfer, roll and trade

Both rulesets (Machi Koro 1 with the Harbor expansion, and Machi Koro 2)
are supported behind a version tag.
"""

__version__ = "0.1.0"
