# Copyright (c) 2013-2025 NASK. All rights reserved.

from collections.abc import Sequence


def ascii_str(obj):

    r"""
    Safely convert the given object to an ASCII-only :class:`str`.

    This function does its best to obtain a string representation
    (possibly :class:`str`-like or :class:`bytes`-like converted to str,
    though :func:`repr` can also be used as the last-resort fallback)
    and then escaping any non-ASCII characters -- *not raising* any
    encoding/decoding exceptions.

    >>> ascii_str('')
    ''
    >>> ascii_str('session.user')
    'session.user'
    >>> ascii_str('Ech, ale błąd!')
    'Ech, ale b\\u0142\\u0105d!'
    >>> ascii_str(b'Ech, ale b\xc5\x82\xc4\x85d!')
    'Ech, ale b\\u0142\\u0105d!'
    >>> ascii_str(42)
    '42'

    >>> class Nasty(object):
    ...     def __str__(self): raise ValueError
    ...     def __repr__(self): return 'really nasŧy'
    ...
    >>> ascii_str(Nasty())
    'really nas\\u0167y'
    """
    if isinstance(obj, str):
        s = obj
    else:
        if isinstance(obj, memoryview):
            obj = bytes(obj)
        if isinstance(obj, (bytes, bytearray)):
            s = obj.decode('utf-8', 'surrogateescape')
        else:
            try:
                s = str(obj)
            except ValueError:
                s = repr(obj)
    return s.encode('ascii', 'backslashreplace').decode('ascii')


def as_unicode(obj, decode_error_handling='strict'):

    r"""
    Convert the given object to a :class:`str` (possibly containing
    various **non**-ASCII characters).

    >>> as_unicode('Spąm.')
    'Spąm.'
    >>> as_unicode(b'Sp\xc4\x85m.')
    'Spąm.'
    >>> as_unicode(42)
    '42'
    """
    if isinstance(obj, memoryview):
        obj = bytes(obj)
    if isinstance(obj, (bytes, bytearray)):
        return obj.decode('utf-8', decode_error_handling)
    try:
        return str(obj)
    except ValueError:
        return repr(obj)


def is_seq(obj):
    """
    Check whether the given object is a sequence but *not* a string
    or a binary data object.

    >>> is_seq([1, 2, 3])
    True
    >>> is_seq((1, 2, 3))
    True
    >>> is_seq('123')
    False
    >>> is_seq(b'123')
    False
    >>> is_seq(bytearray(b'123'))
    False
    >>> is_seq({'1': 2})
    False
    >>> is_seq(123)
    False
    """
    return (isinstance(obj, Sequence)
            and not isinstance(obj, (str, bytes, bytearray, memoryview)))


def attr_repr(*attr_names):
    """
    Make a __repr__() implementation based on given attribute names.

    Any number of positional args:
        Names of instance attributes and/or class attributes.

    Returns:
        A function being the requested __repr__() implementation.

    >>> class Entry(object):
    ...    __repr__ = attr_repr('kind', 'path')
    ...    kind = 'path'
    ...    def __init__(self, path):
    ...        self.path = path
    >>> Entry('favourites.car')
    <Entry kind='path', path='favourites.car'>
    """
    format_repr = ('<{0.__class__.__qualname__} ' +
                   ', '.join('%s={0.%s!r}' % (name, name)
                             for name in attr_names) +
                   '>').format
    format_repr_fallback = object.__repr__

    def __repr__(self):
        # noinspection PyBroadException
        try:
            return format_repr(self)
        except Exception:
            return format_repr_fallback(self)

    return __repr__
