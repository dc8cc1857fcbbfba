"""
Debounced real-time search.

Keystrokes restart a timer; only when input pauses for `delay` seconds is a
search dispatched, together with an AI answer when beta features are on. The
two calls run concurrently and each updates its own part of the view state as
soon as it completes.

Every dispatch is stamped with a generation number. A response is applied only
while its generation is still the latest, so a slow response for an old query
can never overwrite results for the query currently typed.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Optional, Set

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.5

SearchFn = Callable[[str], Awaitable[List[Any]]]
AnswerFn = Callable[[str], Awaitable[Optional[str]]]


@dataclass
class SearchViewState:
    query: str = ""
    results: List[Any] = field(default_factory=list)
    ai_answer: Optional[str] = None
    is_loading: bool = False
    is_ai_loading: bool = False


class DebouncedSearchController:
    def __init__(
        self,
        search: SearchFn,
        answer: Optional[AnswerFn] = None,
        *,
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
        ai_enabled: bool = False,
        on_change: Optional[Callable[[SearchViewState], None]] = None,
    ):
        self._search = search
        self._answer = answer
        self.delay = delay
        self.ai_enabled = ai_enabled and answer is not None
        self._on_change = on_change
        self.state = SearchViewState()
        self._timer: Optional[asyncio.TimerHandle] = None
        self._generation = 0
        self._inflight: Set[asyncio.Task] = set()

    @property
    def generation(self) -> int:
        return self._generation

    def set_query(self, query: str) -> None:
        """
        Record a keystroke. Must be called from a running event loop.
        """
        self.state.query = query
        self._cancel_timer()
        # Any new input invalidates responses still in flight
        self._generation += 1

        if not query.strip():
            self.state.results = []
            self.state.ai_answer = None
            self.state.is_loading = False
            self.state.is_ai_loading = False
            self._notify()
            return

        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.delay, self._fire, query)

    def cancel(self) -> None:
        """Drop the pending timer and ignore any response still in flight."""
        self._cancel_timer()
        self._generation += 1

    async def wait_idle(self) -> None:
        """Wait until no timer is pending and every dispatched search has finished."""
        while self._timer is not None or self._inflight:
            if self._inflight:
                await asyncio.gather(*list(self._inflight), return_exceptions=True)
            else:
                await asyncio.sleep(min(self.delay, 0.01))

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, query: str) -> None:
        self._timer = None
        self._generation += 1
        task = asyncio.ensure_future(self._dispatch(query, self._generation))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def _dispatch(self, query: str, generation: int) -> None:
        self.state.is_loading = True
        if self.ai_enabled:
            self.state.is_ai_loading = True
            self.state.ai_answer = None
        self._notify()

        calls = [self._run_search(query, generation)]
        if self.ai_enabled:
            calls.append(self._run_answer(query, generation))
        await asyncio.gather(*calls)

        if self._is_current(generation):
            self.state.is_loading = False
            self.state.is_ai_loading = False
            self._notify()

    async def _run_search(self, query: str, generation: int) -> None:
        try:
            results = list(await self._search(query))
        except Exception as e:
            logger.error("Search error for %r: %s", query, e)
            results = []
        if self._is_current(generation):
            self.state.results = results
            self._notify()
        else:
            logger.debug("Discarding stale results for %r", query)

    async def _run_answer(self, query: str, generation: int) -> None:
        try:
            answer = await self._answer(query)
        except Exception as e:
            logger.error("AI answer error for %r: %s", query, e)
            answer = None
        if self._is_current(generation):
            self.state.ai_answer = answer
            self._notify()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self.state)
