import numpy as np
import pytest

from image_editor.models.image import Image
from image_editor.repositories.image_repository import ImageRepository
from tests.helpers import read_rgb


@pytest.fixture
def repo():
    return ImageRepository()


class TestImageRepository:

    def test_load_returns_rgb_pixels(self, repo, png_file):
        img = repo.load(png_file)
        assert img.path == png_file
        assert (img.width, img.height) == (3, 4)
        assert np.array_equal(img.pixels, read_rgb(png_file))

    def test_load_missing_file(self, repo, tmp_path):
        with pytest.raises(FileNotFoundError):
            repo.load(tmp_path / "missing.jpg")

    def test_save_png_is_lossless(self, repo, png_file, tmp_path):
        img = repo.load(png_file)
        target = repo.save(img, tmp_path / "copy.png")
        assert np.array_equal(read_rgb(target), img.pixels)

    def test_save_jpeg_keeps_dimensions(self, repo, png_file, tmp_path):
        img = repo.load(png_file)
        target = repo.save(img, tmp_path / "copy.jpg")
        assert read_rgb(target).shape == img.pixels.shape

    def test_save_grayscale(self, repo, tmp_path):
        gray = Image(np.array([[0, 128], [200, 255]], dtype=np.uint8))
        target = repo.save(gray, tmp_path / "gray.png")
        loaded = repo.load(target)
        assert np.array_equal(loaded.pixels[:, :, 0], gray.pixels)

    def test_save_without_path(self, repo):
        with pytest.raises(ValueError):
            repo.save(Image(np.zeros((2, 2, 3), dtype=np.uint8)))

    def test_decode_rejects_garbage(self, repo):
        with pytest.raises(ValueError):
            repo.decode(b"not an image")
        with pytest.raises(ValueError):
            repo.decode(b"")

    def test_encode_then_decode_dimensions(self, repo, png_file):
        img = repo.load(png_file)
        decoded = repo.decode(repo.encode(img, "PNG"))
        assert np.array_equal(decoded.pixels, img.pixels)

    def test_iter_dir_filters_extensions(self, repo, png_file, tmp_path):
        (tmp_path / "notes.txt").write_text("not an image")
        images = repo.load_dir(tmp_path)
        assert [img.path.name for img in images] == [png_file.name]

    def test_iter_dir_requires_directory(self, repo, png_file):
        with pytest.raises(NotADirectoryError):
            list(repo.iter_dir(png_file))
