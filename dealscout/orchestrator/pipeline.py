# dealscout/orchestrator/pipeline.py
"""
Query-to-deal orchestrator

Purpose
-------
Execute one request as a strictly forward sequence:
  1) classify intent (conversation → single reply, done)
  2) expand the query into search phrases
  3) discover listing pages
  4) extract listing candidates
  5) analyze each candidate
  6) filter by profit threshold, stable sort descending
  7) summarize

Design
------
- Every loop is sequential, so "first seen wins" dedup and the stable sort
  are well defined.
- Per-item failures in steps 3-5 degrade (recorded in `degradations`) and
  never abort the run.
- `handle()` is the outer boundary: any escaping exception becomes an error
  envelope with a 5xx status and no partial results.

Public API
----------
DealPipeline(settings, provider=None, http_get=None).run(query) -> PipelineRun
DealPipeline(...).handle(query) -> (status_code, payload dict)
filter_and_rank(properties, threshold) -> list[AnalyzedProperty]
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from dealscout.agents import analyze_property, classify_intent, converse, expand_query, summarize
from dealscout.config import Settings, load_settings
from dealscout.core.discovery import discover
from dealscout.core.errors import (
    ClassificationError,
    ConfigurationError,
    PipelineTimeoutError,
    RequestCancelledError,
)
from dealscout.core.fetch import HtmlFetcherError, HttpGet, fetch_html
from dealscout.core.llm import ChatProvider, build_provider
from dealscout.core.normalize.listing_html import ListingCollector, make_placeholder
from dealscout.schemas.models import (
    AnalyzedProperty,
    ConversationResponse,
    ErrorEnvelope,
    IntentResult,
    ListingCandidate,
    SearchResponse,
)

logger = logging.getLogger(__name__)

CLASSIFICATION_FAILED_MESSAGE = "Sorry, I couldn't understand that request. Please try again."


@dataclass(frozen=True)
class PipelineRun:
    """Everything one request produced. Only `response` is returned to clients."""

    response: ConversationResponse | SearchResponse
    intent: IntentResult
    phrases: list[str] = field(default_factory=list)
    urls: list[str] = field(default_factory=list)
    candidates: list[ListingCandidate] = field(default_factory=list)
    analyzed: list[AnalyzedProperty] = field(default_factory=list)
    degradations: list[str] = field(default_factory=list)


class _Deadline:
    def __init__(self, seconds: float, clock: Callable[[], float], cancel: threading.Event | None = None) -> None:
        self._clock = clock
        self._expires = clock() + seconds
        self._seconds = seconds
        self._cancel = cancel

    def check(self) -> None:
        if self._cancel is not None and self._cancel.is_set():
            raise RequestCancelledError("request cancelled by caller")
        if self._clock() > self._expires:
            raise PipelineTimeoutError(f"request exceeded {self._seconds:.0f}s deadline")


def filter_and_rank(properties: Iterable[AnalyzedProperty], threshold: float) -> list[AnalyzedProperty]:
    """Keep profit >= threshold; descending by profit, ties keep discovery order."""
    kept = [p for p in properties if p.profit >= threshold]
    return sorted(kept, key=lambda p: p.profit, reverse=True)


class DealPipeline:
    def __init__(
        self,
        settings: Settings | None = None,
        *,
        provider: ChatProvider | None = None,
        http_get: HttpGet | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.settings = settings or load_settings()
        self._provider = provider
        self._http_get = http_get
        self._clock = clock

    @property
    def provider(self) -> ChatProvider:
        if self._provider is None:
            self._provider = build_provider(self.settings)
        return self._provider

    # ---------- stages ----------

    def _extract(self, urls: list[str], query: str, deadline: _Deadline, degradations: list[str]) -> list[ListingCandidate]:
        s = self.settings
        collector = ListingCollector(cap=s.max_listings)
        for url in urls:
            deadline.check()
            try:
                html = fetch_html(url, user_agent=s.user_agent, timeout_s=s.scrape_timeout_s, http_get=self._http_get)
                added = collector.collect_page(html, url)
            except HtmlFetcherError as e:
                logger.warning("scrape skipped %s: %s", url, e)
                degradations.append(f"scrape_skipped:{url}")
                continue
            except Exception as e:  # noqa: BLE001 - malformed page, skip it
                logger.warning("scrape skipped %s (parse): %s: %s", url, type(e).__name__, e)
                degradations.append(f"scrape_skipped:{url}")
                continue

            logger.info("scraped %s: %d new listings (total %d)", url, added, len(collector))
            if len(collector) == 0:
                collector.add(make_placeholder(url, query))
        return collector.items

    def _analyze(
        self, candidates: list[ListingCandidate], query: str, deadline: _Deadline, degradations: list[str]
    ) -> list[AnalyzedProperty]:
        out: list[AnalyzedProperty] = []
        for cand in candidates[: self.settings.max_analyzed]:
            deadline.check()
            prop = analyze_property(cand, query, self.provider)
            if prop.analysis_source == "fallback":
                degradations.append(f"analysis_degraded:{cand.title}")
            out.append(prop)
        return out

    # ---------- public ----------

    def run(self, query: str, *, cancel: threading.Event | None = None) -> PipelineRun:
        """
        Execute one request.

        Raises:
            ConfigurationError, ClassificationError, PipelineTimeoutError,
            RequestCancelledError, or any unexpected exception (the caller
            owns the outer boundary).
        """
        s = self.settings
        deadline = _Deadline(s.request_timeout_s, self._clock, cancel)
        provider = self.provider

        intent = classify_intent(query, provider)
        if not intent.is_property_search:
            reply = converse(query, provider)
            return PipelineRun(response=ConversationResponse(response=reply), intent=intent)

        degradations: list[str] = []

        deadline.check()
        phrases, degraded = expand_query(query, provider)
        phrases = phrases[: s.max_phrases]
        if degraded:
            degradations.append("expansion_degraded")

        discovery = discover(
            phrases,
            query=query,
            user_agent=s.user_agent,
            timeout_s=s.search_timeout_s,
            cap=s.max_discovered_urls,
            http_get=self._http_get,
            checkpoint=deadline.check,
        )
        degradations.extend(discovery.degraded)
        urls = discovery.unique(s.max_unique_urls)
        logger.info("discovered %d unique URLs from %d phrases", len(urls), len(phrases))

        candidates = self._extract(urls, query, deadline, degradations)
        analyzed = self._analyze(candidates, query, deadline, degradations)
        ranked = filter_and_rank(analyzed, s.profit_threshold)
        logger.info("%d of %d analyzed properties clear %.0f profit", len(ranked), len(analyzed), s.profit_threshold)

        deadline.check()
        text = summarize(query, ranked, provider, threshold=s.profit_threshold)

        return PipelineRun(
            response=SearchResponse(response=text, properties=ranked, query=query),
            intent=intent,
            phrases=phrases,
            urls=urls,
            candidates=candidates,
            analyzed=analyzed,
            degradations=degradations,
        )

    def handle(self, query: str, *, cancel: threading.Event | None = None) -> tuple[int, dict]:
        """Outer boundary: (HTTP status, JSON-ready payload)."""
        try:
            run = self.run(query, cancel=cancel)
        except ConfigurationError as e:
            logger.error("configuration error: %s", e)
            return 500, ErrorEnvelope(error=str(e)).model_dump()
        except ClassificationError as e:
            logger.error("classification failed: %s", e)
            return 500, ErrorEnvelope(error=CLASSIFICATION_FAILED_MESSAGE).model_dump()
        except Exception as e:  # noqa: BLE001 - all-or-nothing boundary
            logger.exception("agent error")
            return 500, ErrorEnvelope(error=str(e) or "An error occurred").model_dump()

        if run.degradations:
            logger.info("run degradations: %s", ", ".join(run.degradations))
        return 200, run.response.model_dump(mode="json")


__all__ = ["DealPipeline", "PipelineRun", "filter_and_rank", "CLASSIFICATION_FAILED_MESSAGE"]
