"""Cache value serializers."""

from taskboard.infrastructure.serializers.json import JsonSerializer, SerializationError

__all__ = ["JsonSerializer", "SerializationError"]
