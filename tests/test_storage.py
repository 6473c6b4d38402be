"""Tests for local audio storage."""

import json

import pytest

from voice_roundtable.providers import LocalAudioStorage


@pytest.fixture
def storage(tmp_path):
    return LocalAudioStorage({"base_path": str(tmp_path)})


class TestLocalAudioStorage:
    """Tests for LocalAudioStorage."""

    def test_creates_audio_dir(self, tmp_path):
        """Test that the audio directory is created on init."""
        LocalAudioStorage({"base_path": str(tmp_path / "new")})

        assert (tmp_path / "new" / "audio").is_dir()

    def test_storage_type(self, storage):
        """Test the storage type name."""
        assert storage.get_storage_type() == "local"

    @pytest.mark.asyncio
    async def test_save_returns_file_path(self, storage, tmp_path):
        """Test saving appends .mp3 and returns the file path."""
        locator = await storage.save_audio(b"ID3data", "clip")

        assert locator == str(tmp_path / "audio" / "clip.mp3")
        assert (tmp_path / "audio" / "clip.mp3").read_bytes() == b"ID3data"

    @pytest.mark.asyncio
    async def test_metadata_sidecar(self, storage, tmp_path):
        """Test metadata is written next to the clip."""
        await storage.save_audio(b"x", "clip", metadata={"voice_id": "v1"})

        sidecar = tmp_path / "audio" / "clip.meta.json"
        assert json.loads(sidecar.read_text()) == {"voice_id": "v1"}

    @pytest.mark.asyncio
    async def test_delete(self, storage, tmp_path):
        """Test deleting a clip and its sidecar."""
        await storage.save_audio(b"x", "clip", metadata={"a": 1})

        assert await storage.delete_audio("clip.mp3") is True
        assert not (tmp_path / "audio" / "clip.mp3").exists()
        assert not (tmp_path / "audio" / "clip.meta.json").exists()
        assert await storage.delete_audio("clip.mp3") is False

    @pytest.mark.asyncio
    async def test_delete_by_locator(self, storage, tmp_path):
        """Test deleting with the absolute path returned by save_audio."""
        locator = await storage.save_audio(b"x", "clip")

        assert await storage.delete_audio(locator) is True
        assert not (tmp_path / "audio" / "clip.mp3").exists()
