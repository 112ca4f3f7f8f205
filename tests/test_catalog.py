import pytest
from PIL import Image

from image_relay.catalog import ImageCatalog, load_catalog
from image_relay.errors import CatalogLoadError, EmptyCatalogError


def test_load_catalog_keeps_sorted_scan_order(catalog):
    assert len(catalog) == 3
    assert catalog.names == ("a.png", "b.jpg", "c.gif")
    assert [img.size for img in catalog] == [(10, 10), (20, 12), (30, 14)]


def test_load_catalog_keeps_placeholder_for_undecodable_file(image_dir):
    (image_dir / "a1-broken.jpg").write_bytes(b"definitely not an image")

    catalog = load_catalog(image_dir)

    assert len(catalog) == 4
    assert catalog[1] is None
    assert catalog.unavailable == 1
    # Later files keep their scan position.
    assert catalog[2].size == (20, 12)


def test_load_catalog_skips_sub_directories(image_dir):
    (image_dir / "aa-nested").mkdir()

    catalog = load_catalog(image_dir)

    assert len(catalog) == 3


def test_load_catalog_missing_directory_is_fatal(tmp_path):
    with pytest.raises(CatalogLoadError):
        load_catalog(tmp_path / "does-not-exist")


def test_load_catalog_empty_directory_refuses_to_start(tmp_path):
    with pytest.raises(EmptyCatalogError):
        load_catalog(tmp_path)


def test_catalog_without_decodable_images_is_rejected():
    with pytest.raises(EmptyCatalogError):
        ImageCatalog([None, None])
    with pytest.raises(EmptyCatalogError):
        ImageCatalog([])


@pytest.mark.parametrize("size", [1, 2, 3, 7])
def test_index_for_wraps_into_range(size):
    catalog = ImageCatalog([Image.new("RGB", (1, 1))] * size)

    for number in range(0, 50):
        index = catalog.index_for(number)
        assert index == number % size
        assert 0 <= index < size


def test_entry_uses_wrapped_index(catalog):
    assert catalog.entry(5) is catalog[2]
    assert catalog.entry(3) is catalog[0]
