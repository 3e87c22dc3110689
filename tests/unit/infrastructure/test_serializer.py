"""Tests for JsonSerializer."""

from datetime import date, datetime, timezone

import pytest

from taskboard.core.entities.models import Task, TaskStatus
from taskboard.infrastructure.serializers.json import JsonSerializer, SerializationError


class TestJsonSerializer:
    """Tests for JsonSerializer."""

    @pytest.fixture
    def serializer(self) -> JsonSerializer:
        """Create a serializer for testing."""
        return JsonSerializer()

    def test_serialize_dict(self, serializer: JsonSerializer) -> None:
        """Test serializing a dictionary."""
        result = serializer.serialize({"name": "Alice", "age": 30})

        assert isinstance(result, bytes)
        assert b"Alice" in result

    def test_deserialize_dict(self, serializer: JsonSerializer) -> None:
        """Test deserializing to a dictionary."""
        assert serializer.deserialize(b'{"name": "Alice"}') == {"name": "Alice"}

    def test_datetime_restored(self, serializer: JsonSerializer) -> None:
        """Aware datetimes and dates come back as the same objects."""
        stamp = datetime(2024, 3, 1, 12, 30, 15, 123456, tzinfo=timezone.utc)
        data = {"at": stamp, "day": date(2024, 3, 1)}

        restored = serializer.deserialize(serializer.serialize(data))

        assert restored == data
        assert restored["at"].tzinfo is not None

    def test_entity_dict_survives(self, serializer: JsonSerializer) -> None:
        """A cached task decodes to an equal entity."""
        task = Task(
            id="a" * 32,
            title="Write docs",
            project="b" * 32,
            status=TaskStatus.IN_PROGRESS,
            assigned_to=("c" * 32,),
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )

        restored = Task.from_dict(serializer.deserialize(serializer.serialize(task.to_dict())))

        assert restored == task

    def test_set_serialized_sorted(self, serializer: JsonSerializer) -> None:
        assert serializer.deserialize(serializer.serialize({3, 1, 2})) == [1, 2, 3]

    def test_unserializable_raises(self, serializer: JsonSerializer) -> None:
        with pytest.raises(SerializationError):
            serializer.serialize(object())

    def test_invalid_bytes_raise(self, serializer: JsonSerializer) -> None:
        with pytest.raises(SerializationError):
            serializer.deserialize(b"not json")
