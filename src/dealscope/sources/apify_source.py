"""
Ajio listings scraped by an Apify actor run.

An actor run is asynchronous: it is started, polled until it finishes, and
its default dataset is read afterwards. The polling is modelled by
``ScrapeRun``, a bounded state machine, so the timeout contract is explicit.
"""
from __future__ import annotations

import time
from enum import Enum
from typing import Any, Callable, List, Optional

import requests

from ..logger import get_logger
from ..models import NormalizedItem
from .base import ProductSource
from .rules import extract, path

logger = get_logger(__name__)

API_BASE = "https://api.apify.com/v2"

TITLE_RULES = (path("title"), path("name"))
PRICE_RULES = (path("price"), path("final_price"))
LINK_RULES = (path("url"), path("product_link"))
THUMBNAIL_RULES = (path("image"),)

# Apify run statuses after which the run will never succeed
FAILED_STATUSES = frozenset({"FAILED", "ABORTED", "TIMED-OUT"})


class RunState(str, Enum):
    STARTED = "started"
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


class ScrapeRun:
    """
    Poll state of one actor run.

    STARTED -> POLLING(attempt) -> SUCCEEDED | FAILED | TIMED_OUT

    Each call to ``observe`` records one status response. The run times out
    once ``max_attempts`` responses have been observed without success.
    """

    def __init__(self, run_id: str, *, max_attempts: int = 20) -> None:
        self.run_id = run_id
        self.max_attempts = max_attempts
        self.state = RunState.STARTED
        self.attempt = 0
        self.dataset_id: Optional[str] = None

    @property
    def finished(self) -> bool:
        return self.state in (RunState.SUCCEEDED, RunState.FAILED, RunState.TIMED_OUT)

    def observe(self, run_data: Any) -> RunState:
        """
        Advance the state machine with one status payload (``data`` of the run
        object). A payload that is not an object counts as a poll without status.
        """
        if self.finished:
            raise RuntimeError(f"run {self.run_id} already {self.state.value}")

        self.attempt += 1
        self.state = RunState.POLLING
        if not isinstance(run_data, dict):
            run_data = {}
        status = run_data.get("status")

        if status == "SUCCEEDED":
            self.state = RunState.SUCCEEDED
            self.dataset_id = run_data.get("defaultDatasetId")
        elif status in FAILED_STATUSES:
            self.state = RunState.FAILED
        elif self.attempt >= self.max_attempts:
            self.state = RunState.TIMED_OUT

        return self.state


class ApifySource(ProductSource):
    """Starts an actor run per query and reads its dataset once it succeeds."""

    name = "ajio"

    def __init__(
        self,
        config,
        *,
        poll_interval_s: float = 1.5,
        max_attempts: int = 20,
        start_timeout_s: int = 15,
        request_timeout_s: int = 10,
        session=None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        super().__init__(config, session=session)
        self.poll_interval_s = poll_interval_s
        self.max_attempts = max_attempts
        self.start_timeout_s = start_timeout_s
        self.request_timeout_s = request_timeout_s
        self._sleep = sleep

    def is_configured(self) -> bool:
        return self.config.apify_configured

    @property
    def actor_path(self) -> str:
        # Apify expects "username~actor-name" in URL paths
        return self.config.apify_actor_id.replace("/", "~")

    def fetch(self, query: str) -> List[NormalizedItem]:
        self._require_configured("APIFY_TOKEN")

        with self.http_session() as session:
            run = self.start_run(session, query)
            if run is None:
                logger.warning(f"Apify run for '{query}' returned no run id")
                return []

            self.wait_for(session, run)

            if run.state is RunState.SUCCEEDED and run.dataset_id:
                items = self.fetch_dataset(session, run.dataset_id)
                logger.info(f"Apify dataset {run.dataset_id} returned {len(items)} items for '{query}'")
                return [self.to_item(it) for it in items if isinstance(it, dict)]

        logger.warning(
            f"Apify run {run.run_id} ended as {run.state.value} after {run.attempt} polls"
        )
        return []

    def start_run(self, session: requests.Session, query: str) -> Optional[ScrapeRun]:
        response = session.post(
            f"{API_BASE}/acts/{self.actor_path}/runs",
            params={"token": self.config.apify_token},
            json={"searchQuery": query},
            timeout=self.start_timeout_s,
        )
        payload = self._json(response)
        run_id = extract(payload, (path("data", "id"),))
        if not run_id:
            return None
        return ScrapeRun(run_id, max_attempts=self.max_attempts)

    def wait_for(self, session: requests.Session, run: ScrapeRun) -> ScrapeRun:
        """Poll ``run`` until it leaves the POLLING state."""
        url = f"{API_BASE}/acts/{self.actor_path}/runs/{run.run_id}"
        while not run.finished:
            self._sleep(self.poll_interval_s)
            response = session.get(
                url,
                params={"token": self.config.apify_token},
                timeout=self.request_timeout_s,
            )
            payload = self._json(response)
            run.observe(payload.get("data") if isinstance(payload, dict) else None)
            logger.debug(f"Apify run {run.run_id} poll {run.attempt}: {run.state.value}")
        return run

    def fetch_dataset(self, session: requests.Session, dataset_id: str) -> list:
        response = session.get(
            f"{API_BASE}/datasets/{dataset_id}/items",
            params={"token": self.config.apify_token},
            timeout=self.request_timeout_s,
        )
        items = self._json(response)
        return items if isinstance(items, list) else []

    @classmethod
    def to_item(cls, record: dict) -> NormalizedItem:
        return NormalizedItem(
            source=cls.name,
            title=extract(record, TITLE_RULES, default=""),
            price=extract(record, PRICE_RULES),
            link=extract(record, LINK_RULES),
            thumbnail=extract(record, THUMBNAIL_RULES),
            raw=record,
        )
