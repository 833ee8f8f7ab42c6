"""
Stagcourt - Rules engine for a trick-drafting card game.

A deterministic, single-threaded engine that owns the whole game state:
- Card catalog and rule tables
- Zone bookkeeping (deck, kingdom, discard, burn pile, hands, territories)
- Turn phases and interactive card resolutions
- Atonement, elimination and win detection
- Per-player filtered views with legal actions
"""

__version__ = "0.1.0"
