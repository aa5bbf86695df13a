# dealscout/speech/tts_client.py
"""
Remote text-to-speech client.

GETs `<tts_url>?text=<text>&model=<voice>` and returns the audio bytes.
Playback is the caller's concern.
"""

from __future__ import annotations

import logging
from urllib.parse import urlencode

import requests

from dealscout.config import Settings
from dealscout.core.fetch import NetworkError

from .base import SpeechSynthesizer

logger = logging.getLogger(__name__)


class RemoteTTSClient(SpeechSynthesizer):
    def __init__(self, settings: Settings, *, timeout_s: float = 30.0, session: requests.Session | None = None) -> None:
        self._url = settings.tts_url
        self._voice = settings.tts_voice
        self._timeout_s = timeout_s
        self._session = session or requests.Session()

    def build_url(self, text: str, voice: str | None = None) -> str:
        return f"{self._url}?{urlencode({'text': text, 'model': voice or self._voice})}"

    def speak(self, text: str, voice: str | None = None) -> bytes:
        """
        Raises:
            NetworkError: transport failure or non-2xx response.
        """
        url = self.build_url(text, voice)
        try:
            resp = self._session.get(url, timeout=self._timeout_s)
        except requests.RequestException as e:
            raise NetworkError(str(e)) from e
        if resp.status_code >= 400:
            raise NetworkError(f"HTTP {resp.status_code} from TTS service")
        logger.debug("tts voice=%s bytes=%d", voice or self._voice, len(resp.content))
        return resp.content


__all__ = ["RemoteTTSClient"]
