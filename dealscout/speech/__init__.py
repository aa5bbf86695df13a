# dealscout/speech/__init__.py
from .base import SpeechSynthesizer, TranscriptListener
from .transcripts import AgentTranscriptListener
from .tts_client import RemoteTTSClient

__all__ = ["AgentTranscriptListener", "RemoteTTSClient", "SpeechSynthesizer", "TranscriptListener"]
