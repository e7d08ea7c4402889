# -*- coding: utf-8 -*-

import asyncio
import logging

import pytest

from pledge import config
from pledge.errors import DrainLimitError
from pledge.scheduler import CallbackQueue, loop_scheduler


class TestCallbackQueue(object):

    def test_nothing_runs_before_drain(self):
        q = CallbackQueue()
        calls = []
        q.enqueue(lambda: calls.append(1))

        assert calls == []
        assert len(q) == 1

    def test_fifo_order(self, queue):
        calls = []
        for i in range(5):
            queue.enqueue(lambda i=i: calls.append(i))

        assert queue.run() == 5
        assert calls == [0, 1, 2, 3, 4]
        assert len(queue) == 0

    def test_run_once(self, queue):
        calls = []
        queue.enqueue(lambda: calls.append('a'))
        queue.enqueue(lambda: calls.append('b'))

        assert queue.run_once() is True
        assert calls == ['a']
        assert queue.run_once() is True
        assert queue.run_once() is False
        assert calls == ['a', 'b']

    def test_callbacks_enqueued_while_running(self, queue):
        """Callbacks added during a drain run after the pending ones."""
        calls = []

        def first():
            calls.append('first')
            queue.enqueue(lambda: calls.append('third'))

        queue.enqueue(first)
        queue.enqueue(lambda: calls.append('second'))

        assert queue.run() == 3
        assert calls == ['first', 'second', 'third']

    def test_failing_callback_is_logged(self, queue, caplog):
        """An exception in a callback doesn't stop the queue."""
        calls = []

        def failing():
            raise ValueError('boom')

        queue.enqueue(failing)
        queue.enqueue(lambda: calls.append('after'))

        with caplog.at_level(logging.ERROR, logger='pledge'):
            queue.run()
        assert calls == ['after']
        assert any(r.exc_info and r.exc_info[0] is ValueError
                   for r in caplog.records)

    def test_clear(self, queue):
        calls = []
        queue.enqueue(lambda: calls.append(1))
        queue.clear()

        assert queue.run() == 0
        assert calls == []

    def test_drain_limit(self):
        """A callback who always enqueues itself hits the limit."""
        q = CallbackQueue(drain_limit=10)

        def loop():
            q.enqueue(loop)

        q.enqueue(loop)
        with pytest.raises(DrainLimitError):
            q.run()
        assert len(q) == 1

    def test_drain_limit_argument(self, queue):
        for __ in range(3):
            queue.enqueue(lambda: None)

        with pytest.raises(DrainLimitError):
            queue.run(limit=2)
        assert queue.run(limit=1) == 1

    def test_drain_limit_from_config(self, config_file):
        config.set('drain_limit', 2)
        q = CallbackQueue()
        for __ in range(3):
            q.enqueue(lambda: None)

        with pytest.raises(DrainLimitError):
            q.run()

    def test_no_drain_limit_by_default(self, config_file):
        q = CallbackQueue()
        for __ in range(1000):
            q.enqueue(lambda: None)
        assert q.run() == 1000


class TestLoopScheduler(object):

    def test_uses_call_soon(self):
        loop = asyncio.new_event_loop()
        calls = []
        try:
            enqueue = loop_scheduler(loop)
            enqueue(lambda: calls.append(1))
            enqueue(lambda: calls.append(2))
            assert calls == []
            loop.call_soon(loop.stop)
            loop.run_forever()
        finally:
            loop.close()
        assert calls == [1, 2]

    def test_running_loop_by_default(self):
        calls = []

        async def main():
            enqueue = loop_scheduler()
            enqueue(lambda: calls.append('done'))
            assert calls == []
            await asyncio.sleep(0)

        asyncio.run(main())
        assert calls == ['done']
