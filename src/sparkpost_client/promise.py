# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Future returned by asynchronous dispatch.

``PendingRequest`` wraps the coroutine that performs the request and its
retries. Created inside a running event loop it is scheduled right away;
otherwise the coroutine runs when :meth:`PendingRequest.wait` is called.

Example:
    From async code::

        response = await client.transmissions.post(payload)

    From blocking code::

        pending = client.transmissions.post(payload)
        pending.then(lambda r: print(r.status_code), lambda e: print(e.status_code)).wait()
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Coroutine, Generator
from typing import Any

PENDING = "pending"
FULFILLED = "fulfilled"
REJECTED = "rejected"


class PendingRequest:
    """In-flight request resolving to a value or an exception.

    Attributes:
        request: Originating request, attached only in debug mode.
    """

    def __init__(self, coro: Coroutine[Any, Any, Any], request: Any = None):
        self.request = request
        self._coro = coro
        self._state = PENDING
        self._result: Any = None
        self._exception: BaseException | None = None
        self._task: asyncio.Future | None = None

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        if loop is not None:
            self._task = loop.create_task(self._settle())

    @property
    def state(self) -> str:
        """One of ``pending``, ``fulfilled`` or ``rejected``."""
        return self._state

    async def _settle(self) -> None:
        try:
            self._result = await self._coro
        except Exception as exc:
            self._exception = exc
            self._state = REJECTED
        else:
            self._state = FULFILLED

    async def _resolve(self) -> Any:
        if self._state == PENDING:
            if self._task is None:
                self._task = asyncio.ensure_future(self._settle())
            await self._task
        if self._exception is not None:
            raise self._exception
        return self._result

    def __await__(self) -> Generator[Any, None, Any]:
        return self._resolve().__await__()

    def wait(self) -> Any:
        """Block until the request settles and return its value.

        Raises:
            The rejection exception, usually a ``ClientError``.
            RuntimeError: When called from inside a running event loop;
                use ``await`` there instead.
        """
        if self._state == PENDING:
            try:
                asyncio.get_running_loop()
            except RuntimeError:
                asyncio.run(self._resolve_quietly())
            else:
                raise RuntimeError("wait() cannot block inside a running event loop, await the request instead")
        return self._value()

    async def _resolve_quietly(self) -> None:
        try:
            await self._resolve()
        except Exception:
            # surfaced by _value()
            return

    def _value(self) -> Any:
        if self._exception is not None:
            raise self._exception
        return self._result

    def then(
        self,
        on_fulfilled: Callable[[Any], Any] | None = None,
        on_rejected: Callable[[BaseException], Any] | None = None,
    ) -> PendingRequest:
        """Chain continuations and return a new ``PendingRequest``.

        The new request resolves to the return value of whichever callback
        ran. A missing callback passes the value or exception through.
        Callbacks may return awaitables, which are awaited.
        """

        async def chained() -> Any:
            try:
                value = await self
            except Exception as exc:
                if on_rejected is None:
                    raise
                return await _maybe_await(on_rejected(exc))
            if on_fulfilled is None:
                return value
            return await _maybe_await(on_fulfilled(value))

        return PendingRequest(chained(), self.request)

    def __repr__(self) -> str:
        return f"<PendingRequest [{self._state}]>"


async def _maybe_await(value: Any) -> Any:
    if isinstance(value, Awaitable):
        return await value
    return value
