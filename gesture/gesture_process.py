"""
gesture_process.py — Perception Process (Separate Process)
=============================================================
Owns the webcam + OpenCV preview window.
Pipeline:  Camera → MediaPipe → (hand signal, mode gesture) → Queue

Queue discipline:
    - maxsize=1, overwrite old value (latest frame wins)
    - Send a HandFrame every processed frame while the hand is visible
    - On hand lost (debounced) → send a single detected=False frame
    - The stable gesture label rides along; the consumer acts on changes
"""

import os
import sys
import queue
import time

import cv2
import mediapipe as mp
from mediapipe.tasks.python import BaseOptions
from mediapipe.tasks.python.vision import (
    HandLandmarker, HandLandmarkerOptions,
    HandLandmarksConnections, RunningMode,
    drawing_utils as mp_drawing,
)

# Ensure project root on path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import HAND_MARGIN, HAND_LOST_THRESHOLD, GESTURE_NONE
from gesture.hand_signal import HandFrame, HandSample, HandSignalFilter, sample_from_landmarks
from gesture.landmark_classifier import classify, finger_states
from gesture.prediction_smoother import PredictionSmoother

HAND_CONNECTIONS = HandLandmarksConnections.HAND_CONNECTIONS
_MODEL_TASK_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                                "hand_landmarker.task")


def run(result_queue, stop_event, model_path=None):
    """
    Main perception loop. Meant to be called via multiprocessing.Process.

    Args:
        result_queue:  multiprocessing.Queue(maxsize=1)
        stop_event:    multiprocessing.Event
        model_path:    optional path to hand_landmarker.task
    """
    task_path = model_path or _MODEL_TASK_PATH

    # ── open webcam ──
    cap = cv2.VideoCapture(0)
    if not cap.isOpened():
        print("[Gesture] ❌ Cannot open webcam.")
        return

    # ── MediaPipe hand landmarker ──
    if not os.path.exists(task_path):
        print(f"[Gesture] ❌ hand_landmarker.task not found at {task_path}")
        cap.release()
        return

    options = HandLandmarkerOptions(
        base_options=BaseOptions(model_asset_path=task_path),
        running_mode=RunningMode.VIDEO,
        num_hands=1,
        min_hand_detection_confidence=0.5,
        min_hand_presence_confidence=0.5,
        min_tracking_confidence=0.5,
    )

    signal = HandSignalFilter()
    smoother = PredictionSmoother()

    with HandLandmarker.create_from_options(options) as landmarker:
        print("[Gesture] ✅ MediaPipe hand landmarker loaded.")
        print("[Gesture] 📷 Gesture window opened.")

        frame_ts = 0
        hand_missing_count = 0
        lost_sent = False         # prevents repeated "hand lost" sends

        while not stop_event.is_set():
            ret, frame = cap.read()
            if not ret:
                continue

            frame = cv2.flip(frame, 1)
            h, w = frame.shape[:2]

            # ── detect landmarks ──
            rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
            mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb)
            frame_ts += 33
            try:
                results = landmarker.detect_for_video(mp_image, frame_ts)
            except RuntimeError as e:
                print(f"[Gesture] ⚠ Detection failed: {e}")
                results = None

            hand_lms = None
            if results and results.hand_landmarks:
                hand_lms = results.hand_landmarks[0]   # first hand only

            if hand_lms is not None:
                hand_missing_count = 0
                lost_sent = False

                mp_drawing.draw_landmarks(frame, hand_lms, HAND_CONNECTIONS)
                xs = [lm.x * w for lm in hand_lms]
                ys = [lm.y * h for lm in hand_lms]
                x1 = max(0, int(min(xs)) - HAND_MARGIN)
                y1 = max(0, int(min(ys)) - HAND_MARGIN)
                x2 = min(w, int(max(xs)) + HAND_MARGIN)
                y2 = min(h, int(max(ys)) + HAND_MARGIN)
                cv2.rectangle(frame, (x1, y1), (x2, y2), (0, 255, 0), 2)

                sample = signal.update(sample_from_landmarks(hand_lms))
                label, conf = classify(hand_lms)
                stable = smoother.update(label, conf, time.time())
                if stable.changed:
                    print(f"[GESTURE] {stable.stable_label} ({stable.stable_conf:.2f})")
                _send(result_queue, HandFrame(sample, stable.stable_label,
                                              stable.stable_conf))
            else:
                hand_missing_count += 1
                # Only report the loss once after the debounce threshold
                if hand_missing_count >= HAND_LOST_THRESHOLD and not lost_sent:
                    smoother.reset()
                    _send(result_queue, HandFrame(signal.update(HandSample(detected=False)),
                                                  GESTURE_NONE, 0.0))
                    print("[GESTURE] hand lost")
                    lost_sent = True

            _draw_hud(frame, w, signal.current, smoother, hand_lms)

            cv2.imshow("EVERGREEN Gesture Window", frame)
            if cv2.waitKey(1) & 0xFF == ord('q'):
                stop_event.set()
                break

    cap.release()
    cv2.destroyAllWindows()
    print("[Gesture] Gesture window closed.")


def _draw_hud(frame, w, sample, smoother, hand_lms):
    cv2.rectangle(frame, (0, 0), (w, 65), (12, 14, 28), -1)
    cv2.putText(frame, "EVERGREEN Gesture Window", (10, 22),
                cv2.FONT_HERSHEY_SIMPLEX, 0.65, (0, 200, 255), 2)

    if hand_lms is None:
        cv2.putText(frame, "No hand detected", (10, 50),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.6, (100, 100, 200), 2)
        return

    cv2.putText(frame,
                f"x {sample.x:.2f}  y {sample.y:.2f}  scale {sample.scale:.2f}",
                (10, 50), cv2.FONT_HERSHEY_SIMPLEX, 0.55, (0, 255, 130), 2)

    # Finger states for debugging
    fingers = finger_states(hand_lms)
    finger_str = " ".join(f.upper()[0] for f, v in fingers.items() if v)
    cv2.putText(frame, f"{smoother.label}  "
                       f"Fingers: {finger_str if finger_str else 'none'}",
                (w - 330, 50), cv2.FONT_HERSHEY_SIMPLEX, 0.5,
                (180, 180, 220), 1)


def _send(q, item):
    """Put into queue, discarding old value if full."""
    try:
        q.get_nowait()
    except queue.Empty:
        pass
    try:
        q.put_nowait(item)
    except queue.Full:
        pass
