# -*- coding: utf-8 -*-

"""Deferred-execution queues used to run the Promise callbacks.

A Promise never calls its callbacks directly: it submits them to an
`enqueue` function, who must execute them later, after the current call
returns, in FIFO order, and one at a time.
"""

import asyncio
from collections import deque
import logging

from . import config
from .errors import DrainLimitError

_logger = logging.getLogger(__name__)


class CallbackQueue(object):
    """FIFO queue of callbacks, executed when the owner runs the queue.

    It's a manual run-loop: nothing is executed until `run_once()` or `run()`
    is called. Callbacks are executed in the order they have been enqueued.
    """

    def __init__(self, drain_limit=None):
        """
        Args:
            drain_limit (int, optional): maximum number of callbacks executed
                by a call to `run()`. 0 means no limit. If not set, the
                'drain_limit' config entry is used.
        """
        self._callbacks = deque()
        self._drain_limit = drain_limit

    def __len__(self):
        return len(self._callbacks)

    def __repr__(self):
        return '<CallbackQueue pending=%s>' % len(self._callbacks)

    def enqueue(self, callback):
        """Add a callback (without argument) at the end of the queue."""
        self._callbacks.append(callback)

    def clear(self):
        """Remove all pending callbacks, without executing them."""
        self._callbacks.clear()

    def run_once(self):
        """Execute the oldest callback of the queue.

        Returns:
            boolean: True if a callback has been executed; False if the queue
                was empty.
        """
        if not self._callbacks:
            return False
        callback = self._callbacks.popleft()
        try:
            callback()
        except Exception:
            _logger.exception('Queued callback %r raise an exception!',
                              callback)
        return True

    def run(self, limit=None):
        """Execute callbacks until the queue is empty.

        Callbacks added during the execution are executed too.

        Args:
            limit (int, optional): maximum number of callbacks to execute.
                0 means no limit. Default to the queue's limit.
        Returns:
            int: number of callbacks executed.
        Raises:
            DrainLimitError: if the limit is reached while there are still
                callbacks in the queue.
        """
        if limit is None:
            limit = self._drain_limit
        if limit is None:
            limit = config.get('drain_limit')

        count = 0
        while self._callbacks:
            if limit and count >= limit:
                raise DrainLimitError('%s callbacks executed, %s still '
                                      'pending' % (count, len(self)))
            self.run_once()
            count += 1
        return count


def loop_scheduler(loop=None):
    """Build an `enqueue` function using an asyncio event loop.

    Args:
        loop (asyncio.AbstractEventLoop, optional): loop running the
            callbacks. By default, the running loop (the function must then
            be called from a coroutine).
    Returns:
        callable: function who schedules a callback using `loop.call_soon()`.
    """
    if loop is None:
        loop = asyncio.get_running_loop()

    def enqueue(callback):
        loop.call_soon(callback)

    return enqueue


default_queue = CallbackQueue()
