# dealscout/speech/base.py
"""
Speech collaborator contracts.

The voice front-end is outside this package; the core only needs:
  - SpeechSynthesizer.speak(text, voice) -> audio bytes (completion signal)
  - TranscriptListener.on_final_transcript(text) for finalized speech input
"""

from __future__ import annotations

from typing import Protocol


class SpeechSynthesizer(Protocol):
    def speak(self, text: str, voice: str | None = None) -> bytes: ...


class TranscriptListener(Protocol):
    def on_final_transcript(self, text: str) -> None: ...


__all__ = ["SpeechSynthesizer", "TranscriptListener"]
