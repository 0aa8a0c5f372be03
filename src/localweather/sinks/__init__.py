"""Record sinks the collected observations are emitted to."""

from .protocols import JsonLinesSink, MemorySink, RecordSink

__all__ = [
    "JsonLinesSink",
    "MemorySink",
    "RecordSink",
]
