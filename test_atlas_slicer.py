"""
Tests for slicing texture atlases into single textures.
"""

import io

import numpy as np
import pytest
from PIL import Image

from modslicer.coordinates.grid_position import GridPosition
from modslicer.errors import DecodeError, OutOfBoundsError, ResourceIOError
from modslicer.export.atlas_slicer import slice_atlas


def cell_color(column, row):
    return (column * 16, row * 16, 128, 255)


def make_atlas(size=256):
    """Build a PNG atlas where every 16x16 cell has its own solid color."""
    image = Image.new("RGBA", (size, size))
    for row in range(size // 16):
        for column in range(size // 16):
            image.paste(
                cell_color(column, row),
                (column * 16, row * 16, column * 16 + 16, row * 16 + 16),
            )
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def test_slices_mapped_cells(tmp_path):
    mapping = {GridPosition.parse("00"): "origin", GridPosition.parse("ff"): "corner"}

    written = slice_atlas(make_atlas(), mapping, tmp_path)

    assert sorted(path.name for path in tmp_path.iterdir()) == ["corner.png", "origin.png"]
    assert [path.name for path in written] == ["origin.png", "corner.png"]

    for name, (column, row) in (("origin", (0, 0)), ("corner", (15, 15))):
        with Image.open(tmp_path / f"{name}.png") as tile:
            assert tile.size == (16, 16)
            pixels = np.array(tile.convert("RGBA"))
        expected = np.full((16, 16, 4), cell_color(column, row), dtype=np.uint8)
        assert np.array_equal(pixels, expected)


def test_accepts_text_keys(tmp_path):
    slice_atlas(make_atlas(), {"3a": "cobble"}, tmp_path)

    with Image.open(tmp_path / "cobble.png") as tile:
        assert tile.convert("RGBA").getpixel((0, 0)) == cell_color(10, 3)


def test_empty_mapping_writes_nothing(tmp_path):
    assert slice_atlas(make_atlas(), {}, tmp_path) == []
    assert list(tmp_path.iterdir()) == []


def test_small_image_out_of_bounds(tmp_path):
    atlas = make_atlas(size=128)
    mapping = {GridPosition.parse("00"): "inside", GridPosition.parse("88"): "outside"}

    with pytest.raises(OutOfBoundsError):
        slice_atlas(atlas, mapping, tmp_path)
    assert list(tmp_path.iterdir()) == []


def test_small_image_rejected_even_for_cells_inside(tmp_path):
    with pytest.raises(OutOfBoundsError):
        slice_atlas(make_atlas(size=128), {"00": "x"}, tmp_path)
    assert list(tmp_path.iterdir()) == []


def test_small_image_with_empty_mapping(tmp_path):
    assert slice_atlas(make_atlas(size=128), {}, tmp_path) == []


def test_larger_image_is_sliced(tmp_path):
    large = Image.new("RGBA", (512, 512), (0, 0, 0, 0))
    with Image.open(io.BytesIO(make_atlas())) as atlas:
        large.paste(atlas, (0, 0))
    buffer = io.BytesIO()
    large.save(buffer, format="PNG")

    written = slice_atlas(buffer.getvalue(), {"ff": "far"}, tmp_path)

    assert [path.name for path in written] == ["far.png"]
    with Image.open(tmp_path / "far.png") as tile:
        assert tile.convert("RGBA").getpixel((0, 0)) == cell_color(15, 15)


def test_name_with_dot_keeps_full_name(tmp_path):
    written = slice_atlas(make_atlas(), {"00": "stone.mossy"}, tmp_path)
    assert [path.name for path in written] == ["stone.mossy.png"]


def test_missing_output_dir(tmp_path):
    with pytest.raises(ResourceIOError):
        slice_atlas(make_atlas(), {"00": "x"}, tmp_path / "missing")


def test_output_dir_is_a_file(tmp_path):
    not_a_dir = tmp_path / "file.txt"
    not_a_dir.write_text("x")

    with pytest.raises(ResourceIOError):
        slice_atlas(make_atlas(), {"00": "x"}, not_a_dir)


def test_oversized_image(tmp_path, monkeypatch):
    atlas = make_atlas()
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

    with pytest.raises(DecodeError):
        slice_atlas(atlas, {"00": "x"}, tmp_path)


def test_garbage_bytes(tmp_path):
    with pytest.raises(DecodeError):
        slice_atlas(b"definitely not a png", {GridPosition.parse("00"): "x"}, tmp_path)


def test_non_png_image(tmp_path):
    buffer = io.BytesIO()
    Image.new("RGB", (256, 256)).save(buffer, format="BMP")

    with pytest.raises(DecodeError):
        slice_atlas(buffer.getvalue(), {GridPosition.parse("00"): "x"}, tmp_path)
