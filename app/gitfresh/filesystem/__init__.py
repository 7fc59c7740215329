"""Working tree wipe.

This module provides the preserve-ancestor wipe of the working tree.
"""

from gitfresh.filesystem.wipe import SelectiveWiper, WipeDecision, decide

__all__ = [
    "SelectiveWiper",
    "WipeDecision",
    "decide",
]
