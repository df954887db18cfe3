"""
photo_loader.py — Placard Photos
==================================
Finds photos named 1.jpg, 2.jpg, ... in the photo folder and loads
them off the frame loop. A placard shows a grey placeholder while its
photo loads and a dark-red "Image not found" panel if it never will.
"""

import os
import re
import threading
from enum import Enum

import cv2

from config import MAX_PHOTOS, PHOTO_THUMB

_NUMBERED = re.compile(r"(\d+)\.jpg$")


class TextureState(Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


def ensure_bgr(img):
    if img is None:
        return None
    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)
    if img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2BGR)
    return img


def read_thumbnail(path, size=PHOTO_THUMB):
    """
    Decode a photo and centre-crop it to a size×size RGB array.
    Returns None when the file is missing or not an image.
    """
    img = ensure_bgr(cv2.imread(str(path), cv2.IMREAD_UNCHANGED))
    if img is None or img.size == 0:
        return None
    h, w = img.shape[:2]
    side = min(h, w)
    y0, x0 = (h - side) // 2, (w - side) // 2
    img = cv2.resize(img[y0:y0 + side, x0:x0 + side], (size, size),
                     interpolation=cv2.INTER_AREA)
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)


def _photo_number(path):
    m = _NUMBERED.search(os.path.basename(path))
    return int(m.group(1)) if m else 0


def discover_photos(photo_dir, max_photos=MAX_PHOTOS):
    """
    Paths of 1.jpg … max_photos.jpg that exist and decode, in numeric order.
    Missing or broken files are skipped.
    """
    if not os.path.isdir(photo_dir):
        print(f"[Photos] No photo folder at {photo_dir}")
        return []

    found = []
    for i in range(1, max_photos + 1):
        path = os.path.join(photo_dir, f"{i}.jpg")
        if os.path.exists(path) and cv2.imread(path, cv2.IMREAD_REDUCED_GRAYSCALE_8) is not None:
            found.append(path)
    found.sort(key=_photo_number)
    print(f"[Photos] {len(found)} photo(s) found in {photo_dir}")
    return found


class PhotoTexture:
    """
    One placard's image. Starts LOADING with a placeholder; a single
    completion flips it to READY (image set) or FAILED (permanent).
    """

    PLACEHOLDER = (204, 204, 204)
    ERROR = (85, 0, 0)

    def __init__(self, source):
        self.source = source
        self.state = TextureState.LOADING
        self.image = None
        self._lock = threading.Lock()

    @property
    def color(self):
        return self.ERROR if self.state is TextureState.FAILED else self.PLACEHOLDER

    @property
    def label(self):
        return "Image not found" if self.state is TextureState.FAILED else "Happy Memories"

    def complete(self, image):
        """One-shot: later calls are ignored."""
        with self._lock:
            if self.state is not TextureState.LOADING:
                return
            if image is None:
                self.state = TextureState.FAILED
                print(f"[Photos] ⚠ Failed to load image: {self.source}")
            else:
                self.image = image
                self.state = TextureState.READY

    def load(self):
        """Blocking load; never raises."""
        try:
            image = read_thumbnail(self.source)
        except (cv2.error, OSError) as e:
            print(f"[Photos] ⚠ {self.source}: {e}")
            image = None
        self.complete(image)
        return self.state

    def load_async(self):
        t = threading.Thread(target=self.load, daemon=True)
        t.start()
        return t


class PhotoLibrary:
    """Textures keyed by source. Textures for dropped sources are simply forgotten."""

    def __init__(self):
        self.textures = {}

    def sync(self, sources):
        kept = {}
        for src in sources:
            tex = self.textures.get(src)
            if tex is None:
                tex = PhotoTexture(src)
                tex.load_async()
            kept[src] = tex
        self.textures = kept
        return kept

    def get(self, source):
        return self.textures.get(source)

    def counts(self):
        out = {s.value: 0 for s in TextureState}
        for tex in self.textures.values():
            out[tex.state.value] += 1
        return out

