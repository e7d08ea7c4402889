# -*- coding: utf-8 -*-

from .__version__ import __version__
from .errors import DrainLimitError, Rejection
from .promise import Promise
from .scheduler import CallbackQueue, default_queue, loop_scheduler

__all__ = ['__version__', 'DrainLimitError', 'Rejection', 'Promise',
           'CallbackQueue', 'default_queue', 'loop_scheduler']
