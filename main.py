"""
main.py — EVERGREEN: Gesture-Driven Memory Tree
==================================================
A tree of light, ornaments and photo placards that you orbit with
your hand. Open palm scatters the tree, a fist gathers it again.

Two windows:
    1. Pygame — perspective tree view with HUD
    2. OpenCV — Real-time hand tracking feed (via gesture_process)

Usage:
    python3 main.py
    python3 main.py --photos ~/Pictures/tree
    python3 main.py --no-gesture
    python3 main.py --no-gui
"""

import sys, os, math, argparse, multiprocessing, queue

# Ensure project root is on sys.path for local package imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import numpy as np

# ───── EVERGREEN modules ─────
from config import (WIN_W, WIN_H, FPS, FOV_DEG, NEAR_PLANE, SCENE_OFFSET,
                    TREE_HEIGHT, PHOTO_DIR, MAX_PHOTOS)
from core.mode_manager import TreeMode
from core.scene import TreeScene
from scene.transforms import rotate

try:
    import cv2
    CV2_AVAILABLE = True
except ImportError:
    CV2_AVAILABLE = False

if CV2_AVAILABLE:
    from assets.photo_loader import PhotoLibrary, TextureState, discover_photos

try:
    import mediapipe as mp
    MEDIAPIPE_AVAILABLE = True
except ImportError:
    MEDIAPIPE_AVAILABLE = False

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False


# Placard geometry (local units): paper backing, photo window, clip, caption
BACKING = np.array([[-0.6, -0.75, 0.0], [0.6, -0.75, 0.0],
                    [0.6, 0.75, 0.0], [-0.6, 0.75, 0.0]])
PHOTO = np.array([[-0.5, -0.35, 0.025], [0.5, -0.35, 0.025],
                  [0.5, 0.65, 0.025], [-0.5, 0.65, 0.025]])
CLIP = np.array([0.0, 0.7, 0.025])
CAPTION = np.array([0.0, -0.55, 0.03])


# ══════════════════════════════════════════════════════════════
#  PERSPECTIVE TREE RENDERER  (Pygame)
# ══════════════════════════════════════════════════════════════

class TreeRenderer:
    """Point/polygon perspective view of the scene."""

    # palette
    BG     = (2, 14, 9)
    FLOOR  = (6, 28, 18)
    NEEDLE = (24, 140, 70)
    GOLD   = (212, 175, 55)
    STAR   = (255, 236, 150)
    PAPER  = (253, 253, 253)
    INK    = (51, 51, 51)
    TXT    = (212, 175, 55)
    DIM    = (110, 115, 100)
    WARN   = (255, 70, 70)

    def __init__(self):
        pygame.init()
        self.w, self.h = WIN_W, WIN_H
        self.screen = pygame.display.set_mode((self.w, self.h))
        pygame.display.set_caption("EVERGREEN — Memory Tree")
        self.clock = pygame.time.Clock()
        self.fn = pygame.font.SysFont("serif", 13)
        self.fm = pygame.font.SysFont("serif", 16, bold=True)
        self.ft = pygame.font.SysFont("serif", 24, bold=True)
        self.focal = (self.h / 2) / math.tan(math.radians(FOV_DEG) / 2)
        self.offset = np.array(SCENE_OFFSET)
        self.error = None
        self._surfaces = {}     # source → pygame.Surface of its photo

    # ---- projection ----
    def _view(self, pose):
        eye = pose.position
        fwd = pose.target - eye
        fwd = fwd / np.linalg.norm(fwd)
        right = np.cross(fwd, np.array([0.0, 1.0, 0.0]))
        right = right / np.linalg.norm(right)
        up = np.cross(right, fwd)
        return eye, np.stack([right, up, fwd])

    def project(self, pts, view):
        """World points (N, 3) → screen (N, 2) and depth (N,)."""
        eye, basis = view
        cam = (np.atleast_2d(pts) - eye) @ basis.T
        depth = cam[:, 2]
        safe = np.where(depth > NEAR_PLANE, depth, np.inf)
        sx = self.w / 2 + cam[:, 0] / safe * self.focal
        sy = self.h / 2 - cam[:, 1] / safe * self.focal
        return np.stack([sx, sy], axis=-1), depth

    # ---- scene layers ----
    def draw_particles(self, field, view, color, size):
        pts, depth = self.project(field.positions + self.offset, view)
        visible = depth > NEAR_PLANE
        for (x, y), d in zip(pts[visible], depth[visible]):
            r = max(1, int(size * 20.0 / d))
            pygame.draw.circle(self.screen, color, (int(x), int(y)), r)

    def draw_star(self, scene, view):
        if scene.mode is not TreeMode.FORMED:
            return
        (pt,), (d,) = self.project(np.array([0.0, TREE_HEIGHT + 0.4, 0.0]) + self.offset, view)
        if d > NEAR_PLANE:
            pygame.draw.circle(self.screen, self.STAR, (int(pt[0]), int(pt[1])),
                               max(3, int(160.0 / d)))

    def draw_placards(self, scene, view):
        items = []
        for tf in scene.animator:
            world = tf.position + self.offset
            _, (d,) = self.project(world, view)
            if d > NEAR_PLANE:
                items.append((d, tf, world))
        # back to front
        for d, tf, world in sorted(items, key=lambda it: -it[0]):
            self._draw_placard(scene, tf, world, view)

    def _corners(self, tf, world, local, view):
        pts = rotate(tf.quaternion, local * tf.scale) + world
        screen, depth = self.project(pts, view)
        if (depth <= NEAR_PLANE).any():
            return None
        return [(int(x), int(y)) for x, y in screen]

    def _draw_placard(self, scene, tf, world, view):
        backing = self._corners(tf, world, BACKING, view)
        photo = self._corners(tf, world, PHOTO, view)
        if backing is None or photo is None:
            return
        pygame.draw.polygon(self.screen, self.PAPER, backing)

        tex = scene.photos.get(tf.obj.source) if scene.photos else None
        if tex is not None and tex.state is TextureState.READY:
            xs, ys = [p[0] for p in photo], [p[1] for p in photo]
            rect = pygame.Rect(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))
            if rect.w > 1 and rect.h > 1:
                self.screen.blit(pygame.transform.smoothscale(
                    self._surface(tex), rect.size), rect.topleft)
        else:
            color = tex.color if tex is not None else (204, 204, 204)
            pygame.draw.polygon(self.screen, color, photo)

        (clip,), _ = self.project(rotate(tf.quaternion, CLIP * tf.scale) + world, view)
        pygame.draw.circle(self.screen, self.GOLD, (int(clip[0]), int(clip[1])), 3)

        label = tex.label if tex is not None else "Happy Memories"
        (cap,), (d,) = self.project(rotate(tf.quaternion, CAPTION * tf.scale) + world, view)
        if d < 14.0:
            txt = self.fn.render(label, True, self.INK)
            self.screen.blit(txt, (int(cap[0]) - txt.get_width() // 2,
                                   int(cap[1]) - txt.get_height() // 2))

    def _surface(self, tex):
        surf = self._surfaces.get(tex.source)
        if surf is None:
            surf = pygame.surfarray.make_surface(tex.image.swapaxes(0, 1))
            self._surfaces[tex.source] = surf
        return surf

    # ---- HUD ----
    def draw_hud(self, scene):
        s = scene.get_status()
        cam = s["camera"]

        self.screen.blit(self.ft.render(
            f"EVERGREEN  |  {s['mode'].upper()}", True, self.TXT), (14, 10))
        pygame.draw.line(self.screen, self.TXT, (14, 42), (self.w - 14, 42), 1)

        rows = [
            ("Hand",  f"{s['hand']}  (scale {s['hand_scale']:.2f})"),
            ("Orbit", f"az {math.degrees(cam['azimuth']):.0f}°  "
                      f"polar {math.degrees(cam['polar']):.0f}°"),
            ("Dist",  f"{cam['distance']:.1f}"),
            ("Cards", f"{s['placards']}  (settle {s['settle']:.2f})"),
            ("Cmd",   f"{s['last_action']} / {s['last_source']}"),
        ]
        y = 50
        for lbl, val in rows:
            self.screen.blit(self.fm.render(f"{lbl}:", True, self.DIM), (16, y))
            self.screen.blit(self.fm.render(f" {val}", True, self.TXT), (80, y))
            y += 20

        if scene.photos is not None:
            c = scene.photos.counts()
            self.screen.blit(self.fn.render(
                f"photos  ready {c['ready']}  loading {c['loading']}  failed {c['failed']}",
                True, self.DIM), (self.w - 300, 14))

    def draw_help(self):
        line = "SPACE=form/scatter  R=dismiss error  ESC=quit  |  palm=scatter  fist=form"
        self.screen.blit(self.fn.render(line, True, self.DIM), (14, self.h - 24))

    def draw_error(self):
        ov = pygame.Surface((self.w, self.h), pygame.SRCALPHA)
        ov.fill((0, 0, 0, 204))
        self.screen.blit(ov, (0, 0))
        for i, (text, font) in enumerate([
                ("Something went wrong", self.ft),
                ("A resource failed to load. Check the console for details.", self.fm),
                ("Press R to try again", self.fn)]):
            txt = font.render(text, True, self.TXT)
            self.screen.blit(txt, (self.w // 2 - txt.get_width() // 2,
                                   self.h // 2 - 40 + i * 34))

    def render(self, scene):
        self.screen.fill(self.BG)
        if self.error is None:
            try:
                view = self._view(scene.pose)
                self.draw_particles(scene.foliage, view, self.NEEDLE, 0.6)
                self.draw_particles(scene.ornaments, view, self.GOLD, 1.6)
                self.draw_star(scene, view)
                self.draw_placards(scene, view)
            except (pygame.error, ValueError) as e:
                print(f"[main] ⚠ Error drawing 3D scene: {e}")
                self.error = e
        if self.error is not None:
            self.draw_error()
        self.draw_hud(scene)
        self.draw_help()
        pygame.display.flip()

    def tick(self):
        """Wait for the next frame; seconds since the last one."""
        return self.clock.tick(FPS) / 1000.0

    def close(self):
        pygame.quit()


# ══════════════════════════════════════════════════════════════
#  KEYBOARD HANDLER
# ══════════════════════════════════════════════════════════════

def handle_keys(scene, renderer):
    for ev in pygame.event.get():
        if ev.type == pygame.QUIT:
            return False
        if ev.type != pygame.KEYDOWN:
            continue
        k = ev.key
        if k == pygame.K_SPACE:
            scene.mode_manager.handle_keyboard()
        elif k == pygame.K_r:
            renderer.error = None
        elif k == pygame.K_ESCAPE:
            return False
    return True


# ══════════════════════════════════════════════════════════════
#  GESTURE QUEUE POLLING
# ══════════════════════════════════════════════════════════════

def poll_gesture_queue(result_queue, scene):
    """Drain the gesture queue; the newest hand frame wins."""
    if result_queue is None:
        return
    latest = None
    while True:
        try:
            latest = result_queue.get_nowait()
        except queue.Empty:
            break
    if latest is not None:
        scene.apply_hand_frame(latest)


# ══════════════════════════════════════════════════════════════
#  TERMINAL MODE
# ══════════════════════════════════════════════════════════════

def print_status(scene):
    s = scene.get_status()
    cam = s["camera"]
    x, y, z = cam["position"]
    print(f"  mode={s['mode']}  hand={s['hand']}  placards={s['placards']}  "
          f"settle={s['settle']:.3f}")
    print(f"  camera=({x:.2f}, {y:.2f}, {z:.2f})  dist={cam['distance']:.2f}  "
          f"frames={s['frames']}")


def terminal_mode(scene, stop, result_queue=None):
    print("\n" + "=" * 55)
    print("  EVERGREEN — Terminal Mode")
    print("  Type: 'status', 'toggle', 'step [N]', 'quit'")
    print("=" * 55 + "\n")
    dt = 1.0 / FPS
    while not stop.is_set():
        try:
            cmd = input("EVERGREEN> ").strip().lower()
            if not cmd:
                continue
            parts = cmd.split()
            if parts[0] in ("quit", "exit", "q"):
                stop.set()
                break
            if parts[0] == "status":
                print_status(scene)
                continue
            if parts[0] == "toggle":
                print(f"  mode → {scene.mode_manager.handle_keyboard().value}")
                continue
            if parts[0] == "step":
                n = int(parts[1]) if len(parts) > 1 and parts[1].isdigit() else 1
                for _ in range(n):
                    poll_gesture_queue(result_queue, scene)
                    scene.tick(dt)
                print_status(scene)
                continue
            print(f"  unknown command: {cmd}")
        except (EOFError, KeyboardInterrupt):
            stop.set()
            break


# ══════════════════════════════════════════════════════════════
#  MAIN
# ══════════════════════════════════════════════════════════════

def main():
    ap = argparse.ArgumentParser(description="EVERGREEN Memory Tree")
    ap.add_argument("--no-gesture", action="store_true")
    ap.add_argument("--no-gui",     action="store_true")
    ap.add_argument("--photos",     default=PHOTO_DIR,
                    help="folder holding 1.jpg, 2.jpg, ...")
    ap.add_argument("--max-photos", type=int, default=MAX_PHOTOS)
    ap.add_argument("--seed",       type=int, default=None)
    args = ap.parse_args()

    print("\n" + "=" * 55)
    print("  🎄  EVERGREEN — Gesture-Driven Memory Tree")
    print("=" * 55 + "\n")

    gui = not args.no_gui and PYGAME_AVAILABLE
    photos = PhotoLibrary() if CV2_AVAILABLE else None
    scene = TreeScene(seed=args.seed, particles=gui, photo_library=photos)
    if CV2_AVAILABLE:
        scene.set_sources(discover_photos(args.photos, args.max_photos))
    else:
        print("[main] Photos unavailable (missing: cv2).")
    stop = multiprocessing.Event()

    # renderer
    renderer = TreeRenderer() if gui else None

    # gesture + window (separate process using gesture_process.run)
    gesture_queue = None
    gesture_proc = None
    if not args.no_gesture and CV2_AVAILABLE and MEDIAPIPE_AVAILABLE:
        try:
            from gesture.gesture_process import run as gesture_run
            gesture_queue = multiprocessing.Queue(maxsize=1)
            gesture_proc = multiprocessing.Process(
                target=gesture_run,
                args=(gesture_queue, stop),
                daemon=True,
            )
            gesture_proc.start()
            print("[main] 📷 Gesture process started.")
        except ImportError as e:
            print(f"[main] Gesture process import failed: {e}")
    elif not args.no_gesture:
        missing = []
        if not CV2_AVAILABLE:
            missing.append("cv2")
        if not MEDIAPIPE_AVAILABLE:
            missing.append("mediapipe")
        print(f"[main] Gesture unavailable (missing: {', '.join(missing)}).")

    # main loop
    if renderer is None:
        terminal_mode(scene, stop, gesture_queue)
    else:
        print("[main] 🎮 Pygame window opened. Gesture capture running.")
        print("[main] Press ESC or close window to quit.\n")
        while not stop.is_set():
            delta = renderer.tick()
            poll_gesture_queue(gesture_queue, scene)
            if not handle_keys(scene, renderer):
                break
            scene.tick(delta)
            renderer.render(scene)
        renderer.close()

    stop.set()
    if gesture_proc:
        gesture_proc.join(timeout=2)
    print("\n[EVERGREEN] Shutdown complete. 🎄\n")


if __name__ == "__main__":
    main()
