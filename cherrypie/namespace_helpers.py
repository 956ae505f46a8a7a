# Copyright (c) 2013-2025 NASK. All rights reserved.

"""
Namespace-related helpers: resolving dot-separated paths against nested
structures (mappings and sequences), and building nested ("namespaced")
containers.

>>> origin = {'session': {'user': {'name': 'Bruce Wayne', 'pets': ['Bat-Cat']}}}
>>> resolve(origin, 'session.user.name')
'Bruce Wayne'
>>> resolve(origin, 'session.user.pets.0')
'Bat-Cat'
>>> resolve(origin, 'session.customer.name')
<ABSENT>
>>> wrap_in_namespace('session.user', {'name': 'Bruce Wayne'})
{'session': {'user': {'name': 'Bruce Wayne'}}}
"""

from collections.abc import Mapping
from typing import (
    Any,
    Literal,
    Optional,
)

from cherrypie.common_helpers import is_seq


DEFAULT_PATH_SEPARATOR = '.'

PRESENCE_POLICIES = ('existence', 'truthiness')
DEFAULT_PRESENCE_POLICY = 'existence'

PresencePolicy = Literal['existence', 'truthiness']


class _AbsentType(object):

    """
    The type of the `ABSENT` sentinel (a singleton) -- the result of
    resolving a path that does not lead to anything.

    >>> ABSENT
    <ABSENT>
    >>> bool(ABSENT)
    False
    >>> _AbsentType() is ABSENT
    True
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(_AbsentType, cls).__new__(cls)
        return cls._instance

    def __repr__(self):
        return '<ABSENT>'

    def __bool__(self):
        return False

    def __reduce__(self):
        return (_AbsentType, ())


ABSENT = _AbsentType()


def is_present(value, presence_policy=DEFAULT_PRESENCE_POLICY):
    # type: (Any, PresencePolicy) -> bool
    """
    Tell whether the given (already looked up) value is to be treated
    as present, according to the given presence policy.

    >>> is_present(0), is_present(''), is_present(None), is_present(ABSENT)
    (True, True, True, False)
    >>> is_present(0, 'truthiness'), is_present('x', 'truthiness')
    (False, True)
    """
    if value is ABSENT:
        return False
    if presence_policy == 'truthiness':
        return bool(value)
    return True


def split_path(path, separator=DEFAULT_PATH_SEPARATOR):
    """
    >>> split_path('session.user.name')
    ['session', 'user', 'name']
    >>> split_path('name')
    ['name']
    >>> split_path('a/b', separator='/')
    ['a', 'b']
    """
    return path.split(separator)


def first_path_segment(path, separator=DEFAULT_PATH_SEPARATOR):
    """
    >>> first_path_segment('detail.action')
    'detail'
    >>> first_path_segment('sessionName')
    'sessionName'
    """
    return path.split(separator, 1)[0]


def lookup(container, key, presence_policy=DEFAULT_PRESENCE_POLICY):
    """
    Perform a single-level lookup -- never raising an exception.

    Mappings are looked up by key; (non-string) sequences are looked
    up by index, provided that `key` is an `int` or a string of decimal
    digits.  For anything else, or if the lookup fails, `ABSENT` is
    returned.

    >>> lookup({'a': 1}, 'a')
    1
    >>> lookup({'a': 1}, 'b')
    <ABSENT>
    >>> lookup(['x', 'y'], '1')
    'y'
    >>> lookup(['x', 'y'], '2')
    <ABSENT>
    >>> lookup('xy', '1')
    <ABSENT>
    >>> lookup({'a': ''}, 'a', 'truthiness')
    <ABSENT>
    """
    if isinstance(container, Mapping):
        # (note: the `in` check first -- so that, e.g., a `defaultdict`
        # is never modified by the lookup)
        try:
            if key not in container:
                return ABSENT
            value = container[key]
        except (KeyError, TypeError):
            return ABSENT
    elif is_seq(container):
        if isinstance(key, str):
            if not (key.isascii() and key.isdigit()):
                return ABSENT
            key = int(key)
        elif not isinstance(key, int) or isinstance(key, bool):
            return ABSENT
        try:
            value = container[key]
        except IndexError:
            return ABSENT
    else:
        return ABSENT
    if not is_present(value, presence_policy):
        return ABSENT
    return value


def resolve(origin, path,
            separator=DEFAULT_PATH_SEPARATOR,
            presence_policy=DEFAULT_PRESENCE_POLICY):
    # type: (Any, str, str, PresencePolicy) -> Any
    """
    Resolve the given `path` against `origin`.

    Args:
        `origin`:
            The (typically nested) structure to look into.
        `path`:
            A `separator`-separated path (by default, the separator is
            a dot, e.g.: `"session.user.name"`).

    Kwargs/args:
        `separator` (default: `"."`):
            The path separator.
        `presence_policy` (default: `"existence"`):
            Either `"existence"` (a key that exists is resolved whatever
            its value is) or `"truthiness"` (*falsy* values are treated
            as if they did not exist).

    Returns:
        The resolved value, or `ABSENT` if any of the segments of the
        path could not be resolved (then any further segments are not
        looked at).

    This function never raises an exception (neither modifies `origin`).

    >>> origin = {'a': {'b': {'c': 0}}, 'x': None}
    >>> resolve(origin, 'a.b.c')
    0
    >>> resolve(origin, 'a.b.c', presence_policy='truthiness')
    <ABSENT>
    >>> resolve(origin, 'a.z.c')
    <ABSENT>
    >>> resolve(origin, 'x') is None
    True
    >>> resolve(origin, 'x.y')
    <ABSENT>
    >>> resolve(None, 'x')
    <ABSENT>
    >>> resolve({'a': {'b': 1}}, 'a/b', separator='/')
    1
    """
    if not isinstance(path, str) or separator not in path:
        return lookup(origin, path, presence_policy)
    value = origin
    for segment in split_path(path, separator):
        value = lookup(value, segment, presence_policy)
        if value is ABSENT:
            break
    return value


def wrap_in_namespace(namespace, value=ABSENT,
                      separator=DEFAULT_PATH_SEPARATOR):
    # type: (str, Any, str) -> Optional[dict]
    """
    Make a nested ("namespaced") container and place the given `value`
    at its deepest level.

    Args:
        `namespace`:
            A `separator`-separated path (e.g., `"my.namespace"`).

    Kwargs/args:
        `value` (optional):
            The value to be placed at the end of the namespace (if it
            is neither a mapping nor a sequence, an empty `dict` is
            placed instead).
        `separator` (default: `"."`):
            The path separator.

    Returns:
        A new `dict`, or `None` if `namespace` is not a `str`.

    >>> wrap_in_namespace('a.b', {'c': 42})
    {'a': {'b': {'c': 42}}}
    >>> wrap_in_namespace('a.b', [{'c': 42}])
    {'a': {'b': [{'c': 42}]}}
    >>> wrap_in_namespace('a')
    {'a': {}}
    >>> wrap_in_namespace('a.b', None)
    {'a': {'b': {}}}
    >>> wrap_in_namespace(None, {'c': 42}) is None
    True
    """
    if not isinstance(namespace, str):
        return None
    if isinstance(value, Mapping) or is_seq(value):
        container = value
    else:
        container = {}
    for segment in reversed(split_path(namespace, separator)):
        container = {segment: container}
    return container
