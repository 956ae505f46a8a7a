# Copyright (c) 2013-2025 NASK. All rights reserved.

import logging
import os.path
import reprlib
import sys


TOPLEVEL_PACKAGE = 'cherrypie'


def get_logger(name=None):
    """
    Like logging.getLogger(...) but replacing '__main__' with a sensible name.

    For example, if the script path is '/whatever/cherrypie/tools/foo.py'
    get_logger('__main__') is equivalent to logging.getLogger('cherrypie.tools.foo').

    >>> get_logger('cherrypie.populator').name
    'cherrypie.populator'
    """
    if name == '__main__':
        # try to get the script path from __main__.__file__
        script_path = getattr(sys.modules['__main__'], '__file__', None)
        if not script_path:
            # or, if __main__ does not have a non-blank __file__ attribute,
            # extract the script path from sys.argv...
            script_path = sys.argv[0]
        # strip off the filename extension...
        remaining = os.path.splitext(script_path)[0]
        # ..and pop path name segments up to
        # (and including) the toplevel package name
        aggregated_segments = []
        while True:
            remaining, segment = os.path.split(remaining)
            segment = segment.replace('.', 'D')  # just in case of '.' or '..'
            aggregated_segments.insert(0, segment)
            if segment == TOPLEVEL_PACKAGE or remaining in ('', '/'):
                break
        name = '.'.join(aggregated_segments)
    return logging.getLogger(name)


class _LogSafeRepr(reprlib.Repr):

    def __init__(self):
        super(_LogSafeRepr, self).__init__()
        self.maxlevel = 3
        self.maxdict = 8
        self.maxlist = 8
        self.maxtuple = 8
        self.maxstring = 60
        self.maxother = 60


_log_safe_repr = _LogSafeRepr()


class log_safe(object):

    """
    A wrapper for values passed as logging arguments: its `__str__()`
    produces a shortened `repr()` of the wrapped value, and it does so
    lazily (i.e., only if the record is really going to be emitted).

    >>> str(log_safe({'session': {'user': {'name': 'Bruce Wayne'}}}))
    "{'session': {'user': {'name': 'Bruce Wayne'}}}"
    >>> str(log_safe(list(range(20))))
    '[0, 1, 2, 3, 4, 5, 6, 7, ...]'
    >>> str(log_safe({'a': {'b': {'c': {'d': 42}}}}))
    "{'a': {'b': {'c': {...}}}}"
    """

    __slots__ = ('_value',)

    def __init__(self, value):
        self._value = value

    def __str__(self):
        return _log_safe_repr.repr(self._value)

    __repr__ = __str__
