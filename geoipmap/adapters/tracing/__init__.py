"""Tracing adapters - Implementations of PathTracerPort."""

from .tracepath_adapter import TracePathTracer, is_unroutable_address

__all__ = ["TracePathTracer", "is_unroutable_address"]
