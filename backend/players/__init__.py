"""
Player implementations for the grid snake engine.

This module contains the key binding tables and the keyboard players that
turn key presses into queued turns.
"""

from .base import Player
from .bindings import KeyEvent, KeyBindings, ARROW_BINDINGS, WASD_BINDINGS, DEFAULT_BINDINGS, PAUSE_KEYS
from .keyboard_player import KeyboardPlayer, is_reversal
from .input_translator import InputTranslator, PAUSE

__all__ = [
    'Player',
    'KeyEvent',
    'KeyBindings',
    'ARROW_BINDINGS',
    'WASD_BINDINGS',
    'DEFAULT_BINDINGS',
    'PAUSE_KEYS',
    'KeyboardPlayer',
    'is_reversal',
    'InputTranslator',
    'PAUSE',
]
