"""
mode_manager.py — Two-Value Tree Mode
=======================================
Modes: FORMED, CHAOS
Keyboard toggles, gestures set. Transitions are left to the animators.
"""

from enum import Enum

from config import (MODE_FORMED, MODE_CHAOS,
                    GESTURE_OPEN_PALM, GESTURE_FIST, CONF_THRESH)


class TreeMode(Enum):
    FORMED = MODE_FORMED
    CHAOS = MODE_CHAOS


# Stable gesture label (str) → TreeMode
GESTURE_TO_MODE = {
    GESTURE_OPEN_PALM: TreeMode.CHAOS,
    GESTURE_FIST:      TreeMode.FORMED,
}


class ModeManager:
    """
    Owns the process-wide TreeMode.
    Reports the last action and its source for the HUD.
    """

    def __init__(self, mode=TreeMode.FORMED):
        self.mode = mode
        self.last_action = "none"
        self.last_source = "none"
        self._last_gesture = None

    @property
    def is_formed(self):
        return self.mode is TreeMode.FORMED

    def set_mode(self, mode, source="api"):
        """Set the mode. Returns True if it changed."""
        changed = mode is not self.mode
        self.mode = mode
        self.last_action = mode.name
        self.last_source = source
        return changed

    def toggle(self, source="api"):
        nxt = TreeMode.CHAOS if self.mode is TreeMode.FORMED else TreeMode.FORMED
        self.set_mode(nxt, source)
        return self.mode

    def handle_keyboard(self):
        """SPACE / terminal 'toggle'."""
        return self.toggle(source="keyboard")

    def handle_gesture(self, gesture_label, confidence):
        """
        Apply a stable gesture label.

        Only a change of label acts, so a held palm does not undo a
        keyboard toggle on every frame.

        Args:
            gesture_label: str, e.g. "OPEN_PALM"
            confidence:    float 0–1

        Returns:
            True if the mode was set
        """
        if gesture_label == self._last_gesture:
            return False

        mode = GESTURE_TO_MODE.get(gesture_label)
        if mode is None:
            self._last_gesture = gesture_label
            return False
        if confidence < CONF_THRESH:
            return False
        self._last_gesture = gesture_label
        self.set_mode(mode, source="gesture")
        return True

    def get_status(self):
        return {
            "mode": self.mode.value,
            "last_action": self.last_action,
            "last_source": self.last_source,
        }
