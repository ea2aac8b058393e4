"""Exports for test fakes."""

from .clock import ManualClock, RecordingSleeper
from .http import AuthCheckingTransport, ScriptedTransport
from .operations import FlakyOperation
from .sinks import RecordingHandler, recording_logger

__all__ = [
    "AuthCheckingTransport",
    "FlakyOperation",
    "ManualClock",
    "RecordingHandler",
    "RecordingSleeper",
    "ScriptedTransport",
    "recording_logger",
]
