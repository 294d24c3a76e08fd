from .base import SourceListener, SpeechSource
from .replay import ScriptedSource, ScriptError, ScriptEvent, load_script

__all__ = [
    "ScriptError",
    "ScriptEvent",
    "ScriptedSource",
    "SourceListener",
    "SpeechSource",
    "load_script",
]
