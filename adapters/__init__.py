"""Database adapter layer: driver registry, connection descriptors and statement dialects."""

from adapters.factory import build_descriptor, check_driver, get_adapter, is_supported, list_supported

__all__ = ["build_descriptor", "check_driver", "get_adapter", "is_supported", "list_supported"]
