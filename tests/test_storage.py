"""Tests for profile persistence."""

import json
import logging
from datetime import datetime, timezone

from maia.schemas import LineStatus, Preferences, ProfileLearnLineStatus, UserProfile
from maia.storage import FileKeyValueStore, MemoryKeyValueStore, ProfileStore, new_profile


def sample_profile() -> UserProfile:
    accessed = datetime(2024, 3, 9, 8, 30, 15, 123456, tzinfo=timezone.utc)
    return UserProfile(
        name="Ada",
        preferences=Preferences(language="sv", theme="dark"),
        learn_line_status={
            "a": ProfileLearnLineStatus(
                learn_line_id="a",
                velocity=42.5,
                efficacy=310,
                current_step_index=2,
                current_content_index=1,
                status=LineStatus.IN_PROGRESS,
                last_accessed=accessed,
            ),
        },
        completed_learn_lines=["b"],
    )


class TestProfileStore:

    def test_round_trip(self):
        store = ProfileStore(MemoryKeyValueStore())
        profile = sample_profile()
        assert store.save(profile) is True
        assert store.load() == profile

    def test_dates_stored_as_iso_strings(self):
        kv = MemoryKeyValueStore()
        ProfileStore(kv).save(sample_profile())
        data = json.loads(kv.get("userProfile"))
        assert data["learn_line_status"]["a"]["last_accessed"].startswith("2024-03-09T08:30:15")
        assert isinstance(data["created"], str)

    def test_load_missing(self):
        assert ProfileStore(MemoryKeyValueStore()).load() is None

    def test_load_corrupt(self, caplog):
        kv = MemoryKeyValueStore({"userProfile": "not json at all"})
        with caplog.at_level(logging.ERROR):
            assert ProfileStore(kv).load() is None
        assert "Failed to parse user profile" in caplog.text
        assert kv.get("userProfile") == "not json at all"

    def test_load_wrong_shape(self):
        kv = MemoryKeyValueStore({"userProfile": json.dumps({"learn_line_status": []})})
        assert ProfileStore(kv).load() is None

    def test_missing_fields_backfilled(self):
        kv = MemoryKeyValueStore({"userProfile": json.dumps({
            "id": "abc",
            "created": "2024-01-01T00:00:00Z",
            "preferences": {"language": "sv", "accessibility": {"large_text": True}},
            "completed_learn_lines": ["x", "x"],
            "added_in_a_later_version": 1,
        })})
        profile = ProfileStore(kv).load()
        assert profile.id == "abc"
        assert profile.created == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert profile.preferences.language == "sv"
        assert profile.preferences.theme == "light"
        assert profile.preferences.accessibility.large_text is True
        assert profile.preferences.accessibility.high_contrast is False
        assert profile.learn_line_status == {}
        assert profile.completed_learn_lines == ["x"]

    def test_save_failure(self, caplog):
        class FullStore(MemoryKeyValueStore):
            def set(self, key, value):
                raise OSError("quota exceeded")

        with caplog.at_level(logging.ERROR):
            assert ProfileStore(FullStore()).save(new_profile()) is False
        assert "quota exceeded" in caplog.text

    def test_clear(self):
        store = ProfileStore(MemoryKeyValueStore())
        store.save(new_profile())
        store.clear()
        assert store.load() is None

    def test_custom_key(self):
        kv = MemoryKeyValueStore()
        ProfileStore(kv, key="other").save(new_profile())
        assert kv.get("other") is not None
        assert kv.get("userProfile") is None


class TestFileKeyValueStore:

    def test_set_get_remove(self, tmp_path):
        store = FileKeyValueStore(tmp_path / "state")
        assert store.get("k") is None
        store.set("k", '{"a": 1}')
        assert store.get("k") == '{"a": 1}'
        store.set("k", '{"a": 2}')
        assert store.get("k") == '{"a": 2}'
        assert [p.name for p in (tmp_path / "state").iterdir()] == ["k.json"]
        store.remove("k")
        assert store.get("k") is None
        store.remove("k")

    def test_profile_round_trip_on_disk(self, tmp_path):
        store = ProfileStore(FileKeyValueStore(tmp_path))
        profile = sample_profile()
        store.save(profile)
        assert ProfileStore(FileKeyValueStore(tmp_path)).load() == profile
