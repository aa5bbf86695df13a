# dealscout/speech/transcripts.py
from __future__ import annotations

import logging
from collections.abc import Callable

from dealscout.core.fetch import HtmlFetcherError
from dealscout.orchestrator import DealPipeline

from .base import SpeechSynthesizer, TranscriptListener

logger = logging.getLogger(__name__)


class AgentTranscriptListener(TranscriptListener):
    """
    Feeds finalized transcripts into the pipeline and, when a synthesizer is
    attached, speaks the response text. Results go to `on_result`.
    """

    def __init__(
        self,
        pipeline: DealPipeline,
        on_result: Callable[[int, dict], None],
        *,
        synthesizer: SpeechSynthesizer | None = None,
        on_audio: Callable[[bytes], None] | None = None,
    ) -> None:
        self._pipeline = pipeline
        self._on_result = on_result
        self._synthesizer = synthesizer
        self._on_audio = on_audio

    def on_final_transcript(self, text: str) -> None:
        text = text.strip()
        if not text:
            return
        status, payload = self._pipeline.handle(text)
        self._on_result(status, payload)

        spoken = payload.get("response") or payload.get("error")
        if self._synthesizer is None or not spoken:
            return
        try:
            audio = self._synthesizer.speak(spoken)
        except HtmlFetcherError as e:
            # speech is best-effort; the text result was already delivered
            logger.warning("speech synthesis failed: %s", e)
            return
        if self._on_audio is not None:
            self._on_audio(audio)


__all__ = ["AgentTranscriptListener"]
