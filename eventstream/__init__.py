"""Event streaming building blocks: validators, serializers, partition selectors and data views."""

__version__ = "1.0.0"