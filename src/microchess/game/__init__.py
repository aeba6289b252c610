"""Game layer — keypad entry, LED display and command dispatch.

Quick start::

    from microchess.game import GameController

    ctrl = GameController()
    ctrl.handle("C")
    for key in "1434F":
        ctrl.handle(key)
"""

from microchess.game.controller import CommandOutcome, GameController
from microchess.game.entry import Display, KeypadEntry, slot_on

__all__ = [
    "CommandOutcome",
    "Display",
    "GameController",
    "KeypadEntry",
    "slot_on",
]
