"""
prediction_smoother.py — Gesture debouncing
--------------------------------------------
Per-frame classifier output flickers while the hand moves. The smoother
keeps the last few predictions and only reports a new stable gesture
when confident frames make up a majority of the window and the previous
switch is at least a cooldown old. A hand passing through an open pose
on its way to a fist therefore does not flip the tree.
"""

from collections import Counter, deque
import time

from config import GESTURE_NONE, CONF_THRESH, SMOOTHER_BUFFER, SMOOTHER_COOLDOWN


class SmootherResult:
	__slots__ = ("stable_label", "stable_conf", "changed",
				 "raw_label", "raw_conf")

	def __init__(self, stable_label, stable_conf, changed, raw_label, raw_conf):
		self.stable_label = stable_label
		self.stable_conf = stable_conf
		self.changed = changed
		self.raw_label = raw_label
		self.raw_conf = raw_conf

	def __repr__(self):
		flag = " *" if self.changed else ""
		return f"SmootherResult({self.stable_label} {self.stable_conf:.2f}{flag})"


class PredictionSmoother:
	def __init__(self, buffer_size=SMOOTHER_BUFFER, confidence_threshold=CONF_THRESH,
				 cooldown_seconds=SMOOTHER_COOLDOWN):
		self.window = deque(maxlen=buffer_size)
		self.confidence_threshold = confidence_threshold
		self.cooldown_seconds = cooldown_seconds

		self.label = GESTURE_NONE
		self.conf = 0.0
		self._switched_at = 0.0

	def reset(self, timestamp=None):
		"""Forget the window and fall back to NONE (hand lost)."""
		self.window.clear()
		self.label = GESTURE_NONE
		self.conf = 0.0
		self._switched_at = time.time() if timestamp is None else timestamp

	def _vote(self):
		"""(label, mean conf) of the confident majority, else (NONE, 0)."""
		confident = [(l, c) for l, c in self.window if c >= self.confidence_threshold]
		if not confident:
			return GESTURE_NONE, 0.0
		winner, votes = Counter(l for l, _ in confident).most_common(1)[0]
		if votes * 2 <= len(self.window):
			return GESTURE_NONE, 0.0
		confs = [c for l, c in confident if l == winner]
		return winner, sum(confs) / len(confs)

	def update(self, label, confidence, timestamp=None):
		now = time.time() if timestamp is None else timestamp
		self.window.append((label, confidence))
		winner, conf = self._vote()

		changed = False
		if winner == self.label:
			self.conf = conf
		elif now - self._switched_at >= self.cooldown_seconds:
			self.label, self.conf = winner, conf
			self._switched_at = now
			changed = True

		return SmootherResult(self.label, self.conf, changed, label, confidence)
