from .config import AnalyzerSettings, RecognitionOptions, get_settings, reload_settings
from .domain import AnalyticsSnapshot, EmotionalTone, FragmentEvent
from .session.controller import TranscriptAnalyzer

__version__ = "1.0.0"
