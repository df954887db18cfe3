import cv2
import numpy as np

from assets.photo_loader import (PhotoLibrary, PhotoTexture, TextureState,
                                 discover_photos, read_thumbnail)


def _write_jpg(path, h=60, w=90):
    img = np.zeros((h, w, 3), dtype=np.uint8)
    img[:, : w // 2] = (0, 0, 255)
    assert cv2.imwrite(str(path), img)


def test_discover_sorts_numerically_and_skips_gaps(tmp_path):
    for n in (10, 2, 1):
        _write_jpg(tmp_path / f"{n}.jpg")
    (tmp_path / "3.jpg").write_bytes(b"not an image")
    (tmp_path / "cover.jpg").write_bytes(b"")

    found = discover_photos(str(tmp_path), max_photos=12)
    assert [p.rsplit("/", 1)[-1] for p in found] == ["1.jpg", "2.jpg", "10.jpg"]


def test_discover_respects_max(tmp_path):
    for n in range(1, 6):
        _write_jpg(tmp_path / f"{n}.jpg")
    assert len(discover_photos(str(tmp_path), max_photos=3)) == 3


def test_missing_folder_is_empty(tmp_path):
    assert discover_photos(str(tmp_path / "nope")) == []


def test_thumbnail_is_square_rgb(tmp_path):
    _write_jpg(tmp_path / "1.jpg")
    thumb = read_thumbnail(tmp_path / "1.jpg", size=32)
    assert thumb.shape == (32, 32, 3)
    # BGR red on disk comes back as RGB red
    r, g, b = thumb[16, 2]
    assert r > 200 and b < 60


def test_texture_ready(tmp_path):
    _write_jpg(tmp_path / "1.jpg")
    tex = PhotoTexture(str(tmp_path / "1.jpg"))
    assert tex.state is TextureState.LOADING
    assert tex.load() is TextureState.READY
    assert tex.image is not None
    assert tex.label == "Happy Memories"


def test_texture_failure_is_permanent(tmp_path):
    tex = PhotoTexture(str(tmp_path / "missing.jpg"))
    assert tex.load() is TextureState.FAILED
    assert tex.color == PhotoTexture.ERROR
    assert tex.label == "Image not found"
    tex.complete(np.zeros((4, 4, 3), dtype=np.uint8))
    assert tex.state is TextureState.FAILED


def test_async_load_completes(tmp_path):
    _write_jpg(tmp_path / "1.jpg")
    tex = PhotoTexture(str(tmp_path / "1.jpg"))
    tex.load_async().join(timeout=5)
    assert tex.state is TextureState.READY


def test_library_keeps_existing_textures(tmp_path):
    _write_jpg(tmp_path / "1.jpg")
    a, b = str(tmp_path / "1.jpg"), str(tmp_path / "2.jpg")
    lib = PhotoLibrary()
    lib.sync([a])
    tex_a = lib.get(a)
    lib.sync([a, b])
    assert lib.get(a) is tex_a
    lib.sync([b])
    assert lib.get(a) is None
    assert sum(lib.counts().values()) == 1
