"""
Asynchronous choice sourcing.

In source-driven mode every accepted search-term change re-invokes the
caller's source function.  Each request owns a :class:`CancellationToken`;
issuing a new request cancels the previous token, and a request whose token
is cancelled never touches prompt state, whatever order results arrive in.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Sequence
from typing import Union

from checkbox_search.choices import Item, RawChoice, normalize_choices
from checkbox_search.logging import get_logger

logger = get_logger("source")

DEFAULT_LOAD_ERROR = "Failed to load choices"


class SourceCancelledError(Exception):
    """Raised inside a source function whose request has been superseded."""

    pass


class CancellationToken:
    """
    Cancellation handle passed to every source call.

    Source functions may poll :attr:`cancelled`, call
    :meth:`raise_if_cancelled`, await :meth:`wait`, or register a callback
    with :meth:`add_callback` to abort their own work early.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._callbacks: list[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Mark the request obsolete and run registered callbacks once."""
        if self._event.is_set():
            return
        self._event.set()
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def add_callback(self, callback: Callable[[], None]) -> None:
        """Run *callback* on cancellation (immediately if already cancelled)."""
        if self._event.is_set():
            callback()
        else:
            self._callbacks.append(callback)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise SourceCancelledError("Request was cancelled")

    async def wait(self) -> None:
        """Block until the token is cancelled."""
        await self._event.wait()


SourceResult = Sequence[RawChoice]
SourceFn = Callable[
    [Union[str, None], CancellationToken],
    Union[SourceResult, Awaitable[SourceResult]],
]


class SourceLoader:
    """
    Drives the source function and reports outcomes through callbacks.

    Parameters
    ----------
    source:
        ``source(term_or_none, token)`` returning choices or an awaitable
        of choices.
    on_start:
        Called synchronously when a request is issued.
    on_success:
        Called with the normalised items of a request that is still current.
    on_error:
        Called with a human-readable message when a current request fails.
    """

    def __init__(
        self,
        source: SourceFn,
        on_start: Callable[[], None],
        on_success: Callable[[list[Item]], None],
        on_error: Callable[[str], None],
    ) -> None:
        self._source = source
        self._on_start = on_start
        self._on_success = on_success
        self._on_error = on_error

        self._token: CancellationToken | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        self._generation = 0

    @property
    def token(self) -> CancellationToken | None:
        """Token of the most recent request."""
        return self._token

    @property
    def pending(self) -> bool:
        return any(not task.done() for task in self._tasks)

    def load(self, term: str | None) -> asyncio.Task[None] | None:
        """
        Issue a request for *term*, cancelling the one in flight.

        Returns the task awaiting an asynchronous result, or ``None`` when
        the source answered synchronously.
        """
        if self._token is not None:
            self._token.cancel()

        token = CancellationToken()
        self._token = token
        self._generation += 1
        generation = self._generation

        logger.debug("Loading choices (request=%d, term=%r)", generation, term)
        self._on_start()

        try:
            result = self._source(term or None, token)
        except Exception as exc:
            self._fail(token, generation, exc)
            return None

        if not inspect.isawaitable(result):
            self._commit(token, generation, result)
            return None

        task = asyncio.ensure_future(self._resolve(token, generation, result))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def cancel(self) -> None:
        """Cancel the current token and any outstanding tasks."""
        if self._token is not None:
            self._token.cancel()
        for task in list(self._tasks):
            task.cancel()

    async def wait(self) -> None:
        """Wait for every outstanding request to settle."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _resolve(
        self,
        token: CancellationToken,
        generation: int,
        awaitable: Awaitable[SourceResult],
    ) -> None:
        try:
            result = await awaitable
        except asyncio.CancelledError:
            if token.cancelled:
                logger.debug("Discarding cancelled request %d", generation)
                return
            raise
        except Exception as exc:
            self._fail(token, generation, exc)
            return

        self._commit(token, generation, result)

    def _commit(
        self,
        token: CancellationToken,
        generation: int,
        result: SourceResult,
    ) -> None:
        if token.cancelled:
            logger.debug("Discarding stale result of request %d", generation)
            return
        items = normalize_choices(result or [])
        logger.debug("Request %d returned %d items", generation, len(items))
        self._on_success(items)

    def _fail(self, token: CancellationToken, generation: int, exc: Exception) -> None:
        if token.cancelled:
            logger.debug("Discarding failure of cancelled request %d: %s", generation, exc)
            return
        logger.warning("Source function error: %s", exc)
        self._on_error(str(exc) or DEFAULT_LOAD_ERROR)
