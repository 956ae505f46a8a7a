# Copyright (c) 2013-2025 NASK. All rights reserved.

from cherrypie.common_helpers import (
    ascii_str,
    as_unicode,
)


#
# Generic mix-ins
#

class _ErrorWithPublicMessageMixin(object):

    r"""
    A mix-in class that provides the :attr:`public_message` property.

    The value of this property is a :class:`str`.  It is taken either
    from the `public_message` constructor keyword argument or -- if the
    argument was not specified -- from the value of the
    :attr:`default_public_message` attribute.

    The public message should be a complete sentence (or several
    sentences): first word capitalized (if not being an identifier
    that begins with a lower case letter) + the period at the end.

    The :class:`str` conversion provided by the class uses the value
    of :attr:`public_message`:

    >>> class SomeError(_ErrorWithPublicMessageMixin, Exception):
    ...     pass
    ...
    >>> str(SomeError('a', 'b'))  # using attribute default_public_message
    'Model description error.'
    >>> str(SomeError('a', 'b', public_message='Spąm.'))
    'Spąm.'

    The :func:`repr` conversion results in a programmer-readable
    representation (containing the class name, :func:`repr`-formatted
    constructor arguments and the :attr:`public_message` property):

    >>> SomeError('a', 'b')   # using class's default_public_message
    <SomeError: args=('a', 'b'); public_message='Model description error.'>
    >>> SomeError('a', 'b', public_message='Spam.')
    <SomeError: args=('a', 'b'); public_message='Spam.'>
    """

    #: (overridable in subclasses)
    default_public_message = 'Model description error.'

    def __init__(self, *args, **kwargs):
        try:
            public_message = kwargs.pop('public_message')
        except KeyError:
            pass
        else:
            self._public_message = as_unicode(public_message)
        try:
            super(_ErrorWithPublicMessageMixin, self).__init__(*args, **kwargs)
        except TypeError:
            if kwargs:
                raise TypeError(
                    'illegal keyword arguments for {} constructor: {}'.format(
                        self.__class__.__name__,
                        ', '.join(sorted(map(repr, kwargs)))))
            else:
                raise

    @property
    def public_message(self):
        """The aforementioned property."""
        try:
            return self._public_message
        except AttributeError:
            # (in subclasses `default_public_message` can also be a @property)
            self._public_message = as_unicode(self.default_public_message)
            return self._public_message

    def __str__(self):
        return self.public_message

    def __repr__(self):
        return ('<{0.__class__.__name__}: args={0.args!r}; '
                'public_message={0.public_message!r}>'.format(self))


class _FieldNamesErrorMixin(object):
    """
    Mix-in for exception classes concerning particular field names.

    Each instance of such a class:

    * should be initialized with one (positional or keyword) argument:
      `field_names` -- a collection of the offending field names (each
      being a string);

    * exposes that argument, converted to a :class:`frozenset`, as the
      :attr:`field_names` attribute (for possible later inspection).
    """

    def __init__(self, field_names, *args, **kwargs):
        self.field_names = frozenset(field_names)
        super(_FieldNamesErrorMixin, self).__init__(field_names, *args, **kwargs)

    def _listing(self):
        return ', '.join(sorted('"{}"'.format(ascii_str(name))
                                for name in self.field_names))


#
# Actual exception classes
#

class CherrypieError(_ErrorWithPublicMessageMixin, Exception):

    """
    The base class for all *cherrypie*-specific exceptions.

    All of them signal *configuration* faults (malformed model
    descriptions, misused serializable lists, invalid settings), not
    problems with the transformed data (missing origin paths and
    namespaces are **not** errors; they just result in omitted fields
    or `None` models).

    >>> exc = CherrypieError('a', 'b')
    >>> exc.args
    ('a', 'b')
    >>> exc.public_message   # using attribute default_public_message
    'Model description error.'
    >>> str(exc)
    'Model description error.'

    >>> exc = CherrypieError('a', 'b', public_message='Spam.')
    >>> exc.public_message   # the message passed into the constructor
    'Spam.'
    >>> '{}'.format(exc)
    'Spam.'
    """


class SchemaError(CherrypieError, ValueError):

    """
    Raised when a model description is malformed.

    Typically, it is raised when a :class:`~cherrypie.description.ModelDescription`
    is being constructed (note: that also happens implicitly when a
    *legacy* (flat) description mapping is passed to `populate()` or
    `desolate()`).
    """

    default_public_message = 'Malformed model description.'


class ChildNotDeclaredError(_FieldNamesErrorMixin, SchemaError):

    r"""
    Raised when some keys of the *children* map are not declared as
    fields of the parent model description.

    >>> exc = ChildNotDeclaredError({'myAction', 'other'})
    >>> exc.field_names == {'myAction', 'other'}
    True
    >>> exc.public_message
    'Children "myAction", "other" declared in the children map but not in the parent model description.'
    >>> isinstance(exc, SchemaError) and isinstance(exc, ValueError)
    True
    """

    @property
    def default_public_message(self):
        """The aforementioned property."""
        return ('Children {} declared in the children map but not '
                'in the parent model description.'.format(self._listing()))


class InjectionSchemaError(SchemaError):

    """
    Raised when the *inject* directive of a model description is not a
    mapping of names to values.

    The offending object is exposed as the :attr:`inject` attribute.

    >>> exc = InjectionSchemaError(['not', 'a', 'mapping'])
    >>> exc.inject
    ['not', 'a', 'mapping']
    >>> exc.public_message
    'The inject directive must be a mapping (got a list).'
    """

    def __init__(self, inject, *args, **kwargs):
        self.inject = inject
        super(InjectionSchemaError, self).__init__(inject, *args, **kwargs)

    @property
    def default_public_message(self):
        """The aforementioned property."""
        return 'The inject directive must be a mapping (got a {}).'.format(
            ascii_str(type(self.inject).__qualname__))


class SerializationError(_FieldNamesErrorMixin, CherrypieError, ValueError):

    r"""
    Raised by the desolation machinery when some of the serializable
    field names refer to computed fields (such fields cannot be
    serialized as there is no inverse path to write them under).

    The optional `namespace` keyword argument (default: `None`) is
    exposed as the :attr:`namespace` attribute.

    >>> exc = SerializationError(['authorsCount'], namespace='book')
    >>> exc.field_names == {'authorsCount'}
    True
    >>> exc.namespace
    'book'
    >>> exc.public_message
    'Unable to serialize computed field(s) "authorsCount" (namespace: book).'
    """

    def __init__(self, field_names, *args, **kwargs):
        self.namespace = kwargs.pop('namespace', None)
        super(SerializationError, self).__init__(field_names, *args, **kwargs)

    @property
    def default_public_message(self):
        """The aforementioned property."""
        return 'Unable to serialize computed field(s) {} (namespace: {}).'.format(
            self._listing(),
            ascii_str(self.namespace))


class ConfigError(CherrypieError, ValueError):

    """
    Raised when *cherrypie* settings are invalid.

    >>> print(ConfigError('whatever', public_message='Bad setting.'))
    Bad setting.
    """

    default_public_message = 'Invalid cherrypie settings.'
