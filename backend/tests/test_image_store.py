"""
Boutique Backend — Image Store Unit Tests
==========================================

What:  Tests for ImageStore validation, naming and disk writes.
How:   Uses pytest's tmp_path as the image directory.
"""

import re

import pytest

from boutique.exceptions import ValidationError
from boutique.services.image_store import ImageStore, ImageUpload

class TestImageStoreValidation:
    """Tests for extension and size checks."""

    @pytest.fixture(autouse=True)
    def _store(self, tmp_path):
        self.store = ImageStore(str(tmp_path / "images"), max_size=1024)

    @pytest.mark.parametrize("filename", ["dress.jpg", "dress.JPEG", "a.png", "b.gif", "c.webp"])
    def test_valid_extensions(self, filename):
        assert self.store.validate_extension(filename) == "." + filename.rsplit(".", 1)[1].lower()

    @pytest.mark.parametrize("filename", ["notes.txt", "script.exe", "noextension"])
    def test_invalid_extensions(self, filename):
        with pytest.raises(ValidationError) as exc_info:
            self.store.validate_extension(filename)
        assert exc_info.value.field == "image"

    def test_empty_file_rejected(self):
        with pytest.raises(ValidationError, match="empty"):
            self.store.validate_size(0)

    def test_oversized_file_rejected(self):
        with pytest.raises(ValidationError, match="too large"):
            self.store.validate_size(1025)

    def test_size_at_limit_accepted(self):
        self.store.validate_size(1024)

    def test_directory_created(self):
        assert self.store.image_dir.is_dir()

class TestImageStoreWrites:
    """Tests for naming and storage."""

    def test_names_strictly_increase(self, tmp_path):
        store = ImageStore(str(tmp_path), max_size=1024)
        names = [store.next_name(".jpg") for _ in range(50)]
        stamps = [int(n[:-4]) for n in names]
        assert stamps == sorted(set(stamps))
        assert all(re.fullmatch(r"\d{13,}\.jpg", n) for n in names)

    @pytest.mark.asyncio
    async def test_save_writes_under_generated_name(self, tmp_path, sample_image_bytes):
        store = ImageStore(str(tmp_path), max_size=1024)
        name = await store.save(ImageUpload(filename="../../etc/Dress.JPG", content=sample_image_bytes))

        assert name.endswith(".jpg")
        assert "Dress" not in name
        assert store.path_for(name).read_bytes() == sample_image_bytes

    @pytest.mark.asyncio
    async def test_save_rejects_before_writing(self, tmp_path):
        store = ImageStore(str(tmp_path), max_size=4)
        with pytest.raises(ValidationError):
            await store.save(ImageUpload(filename="big.png", content=b"12345"))
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.asyncio
    async def test_remove(self, tmp_path, sample_image_bytes):
        store = ImageStore(str(tmp_path), max_size=1024)
        name = await store.save(ImageUpload(filename="a.png", content=sample_image_bytes))

        await store.remove(name)
        assert not store.path_for(name).exists()
        # Removing again is a no-op
        await store.remove(name)
