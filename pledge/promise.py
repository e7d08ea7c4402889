# -*- coding: utf-8 -*-

from collections import namedtuple
from functools import partial
import logging

from . import config, scheduler
from .errors import rejection_value

_logger = logging.getLogger(__name__)


# A callback pair registered by `then()`, and the settlement functions of the
# Promise it must settle.
_Subscription = namedtuple('_Subscription', ['on_fulfilled', 'on_rejected',
                                             'fulfill', 'reject'])


class Promise(object):
    """It represents an operation expected to be completed in the future.

    A Promise contains a value not yet known when the Promise is created. It
    allows to set callbacks who will be called as soon as the result is known.

    Callbacks are never called synchronously: they're submitted to an
    `enqueue` function (see `pledge.scheduler`), and executed when the queue
    runs them, in the order they have been registered.
    """

    PENDING = 'pending'
    FULFILLED = 'fulfilled'
    REJECTED = 'rejected'

    def __init__(self, executor, enqueue=None, _name=None, _previous=None):
        """Constructor of the Promise.

        Generate the two settlement functions for the executor, then call the
        `executor`. It means the executor will be fully executed before the
        constructor returns.
        If the executor raises an exception, it's caught and the Promise is
        rejected with this exception (or with the value of a `Rejection`).

        Args:
            executor (callable): Takes 2 callable arguments:
                The first one, `on_fulfilled()` should be called when the
                Promise is fulfilled and must accept the result's value as its
                only argument.
                The second, `on_rejected()`, should be called when an error
                occurs, with the reason as argument. It can be any value.
                Only the first call to one of these functions is taken into
                account.
            enqueue (callable, optional): function used to schedule the
                callbacks. It receives a callable without argument. Default
                to `scheduler.default_queue.enqueue`.
            _name (str): if set, name used when converted to text.
        """
        self._state = self.PENDING
        self._value = None
        self._enqueue = enqueue or scheduler.default_queue.enqueue
        self._name = _name or getattr(executor, '__name__', '???')
        self._previous = _previous

        self._subscriptions = []

        def on_fulfilled(value):
            self._settle(self.FULFILLED, value)

        def on_rejected(reason):
            self._settle(self.REJECTED, reason)

        try:
            executor(on_fulfilled, on_rejected)
        except Exception as error:
            on_rejected(rejection_value(error))

    @property
    def state(self):
        """str: one of PENDING, FULFILLED or REJECTED."""
        return self._state

    @property
    def value(self):
        """Result if fulfilled, reason if rejected, None if pending."""
        return self._value

    def then(self, on_fulfilled=None, on_rejected=None):
        """Create a new promise from callbacks called when this one is settled.

        If the promise is fulfilled, the `on_fulfilled` callback will be
        called. Otherwise (the promise has been rejected), the `on_rejected`
        callback is called.
        In any case, the callback will define the state of the returned
        Promise. If the callback raises an exception, the new Promise is
        rejected. Else, it's fulfilled with the value returned, as is.

        If a callback is not defined, the state of the self promise is
        transferred at the new promise (the state and the value).

        Args:
            on_fulfilled (callable, optional):  This callback will receive the
                result of the original promise as argument.
            on_rejected (callable, optional): This callback will receive the
                reason of the rejection of the original promise as argument.
        Returns:
            Promise<*>: new promise depending of self.
        """

        def chained_executor(fulfill, reject):
            self._subscribe(_Subscription(on_fulfilled, on_rejected,
                                          fulfill, reject))

        if not on_rejected:
            name = '%s' % getattr(on_fulfilled, '__name__', '???')
        elif not on_fulfilled:
            name = '<None, %s>' % getattr(on_rejected, '__name__', '???')
        else:
            name = '<%s, %s>' % (getattr(on_fulfilled, '__name__', '???'),
                                 getattr(on_rejected, '__name__', '???'))
        return self.__class__(chained_executor, enqueue=self._enqueue,
                              _name=name, _previous=self)

    def catch(self, on_rejected=None):
        """Create a new promise with a callback called when an error occurs.

        Alias of `self.then(None, on_rejected)`

        Args:
            on_rejected (callable, optional): Will be called with the
                rejection reason if `self` is rejected.
        returns:
            Promise<*>: new Promise chained to `self`. If `self` is fulfilled,
                the promised value will be the same as `self`. Otherwise, the
                value returned by the `on_rejected()` callback.
        """
        return self.then(None, on_rejected)

    def __repr__(self):
        return 'Promise(%s)' % self._inner_print()

    def _inner_print(self):
        # Chains can be longer than the recursion limit.
        parts = []
        promise = self
        while promise is not None:
            if promise._state == self.REJECTED:
                state = 'R'
            elif promise._state == self.FULFILLED:
                state = 'F'
            else:
                state = 'P'
            parts.append('%s %s' % (promise._name, state))
            promise = promise._previous
        return ' -> '.join(reversed(parts))

    @classmethod
    def resolve(cls, value, enqueue=None):
        """Create a promise already fulfilled with the selected value.

        Args:
            value: result of the promise. It's never unwrapped, even if it's
                a Promise.
            enqueue (callable, optional): see `Promise.__init__()`.
        Returns:
            Promise: new Promise already fulfilled.
        """
        return cls(lambda ok, error: ok(value), enqueue=enqueue,
                   _name='RESOLVE')

    @classmethod
    def reject(cls, reason, enqueue=None):
        """Create a Promise rejected for the reason specified.

        Args:
            reason: rejection value; it can be of any type.
            enqueue (callable, optional): see `Promise.__init__()`.
        Returns:
            Promise: new Promise already rejected.
        """
        return cls(lambda ok, error: error(reason), enqueue=enqueue,
                   _name='REJECT')

    def _settle(self, state, value):
        if self._state != self.PENDING:
            if config.get('log_resettlement'):
                log = _logger.warning
            else:
                log = _logger.debug
            log('Try to settle Promise %r already settled. New %s value will '
                'be ignored: %r', self, state, value)
            return

        self._state = state
        self._value = value

        # Free the references
        subscriptions, self._subscriptions = self._subscriptions, None
        for subscription in subscriptions:
            self._schedule(subscription)

    def _subscribe(self, subscription):
        if self._state == self.PENDING:
            self._subscriptions.append(subscription)
        else:
            self._schedule(subscription)

    def _schedule(self, subscription):
        self._enqueue(partial(self._notify, subscription))

    def _notify(self, subscription):
        """Call the callback matching the state, and settle the child."""
        if self._state == self.FULFILLED:
            callback, forward = subscription.on_fulfilled, subscription.fulfill
        else:
            callback, forward = subscription.on_rejected, subscription.reject

        if callback is None:
            return forward(self._value)

        try:
            result = callback(self._value)
        except Exception as error:
            _logger.debug('Callback %s of %r raised an error: %r',
                          getattr(callback, '__name__', '???'), self, error)
            return subscription.reject(rejection_value(error))
        subscription.fulfill(result)
