# Copyright (c) 2013-2025 NASK. All rights reserved.

"""
Model descriptions: the declarative schemas that drive both populating
(origin -> model) and desolating (model -> wire object).

A *model description* maps output field names to *field entries*, each
being an instance of one of the following classes:

* :class:`PathField` -- a (dot-separated) path into the origin;
* :class:`ComputedField` -- a function computing the value (called
  after all path fields have been populated);
* :class:`ChildField` -- a path field whose value is to be populated
  (or desolated) recursively, using a child model description.

Apart from fields, a description may specify the following directives:
`namespace`, `serializable`, `children`, `transfer_keys`,
`ignored_keys` and `inject` (see: :class:`ModelDescription`).

Descriptions can also be given in the *legacy* (flat) form: a single
mapping in which directives are keys with the reserved prefix (by
default: `"__"`) -- see: :meth:`ModelDescription.from_mapping`.

>>> desc = ModelDescription.from_mapping({
...     '__namespace': 'session.user',
...     'name': 'name',
...     'favCar': 'favourites.car',
...     'hobbies': 'hobbyList',
...     '__children': {
...         'hobbies': {'id': 'id', 'description': 'activity'},
...     },
...     '__serializable': ['name', 'favCar'],
... })
>>> desc.namespace
'session.user'
>>> desc.fields['favCar']
<PathField path='favourites.car'>
>>> desc.fields['hobbies']                          # doctest: +ELLIPSIS
<ChildField path='hobbyList', description=<ModelDescription ...>>
>>> sorted(desc.serializable_names)
['favCar', 'name']
"""

from collections.abc import (
    Callable,
    Iterable,
    Mapping,
)
from types import MappingProxyType
from typing import (
    Any,
    Final,
    Optional,
    Union,
)

from pyramid.decorator import reify

from cherrypie.common_helpers import (
    ascii_str,
    attr_repr,
    is_seq,
)
from cherrypie.exceptions import (
    ChildNotDeclaredError,
    InjectionSchemaError,
    SchemaError,
)
from cherrypie.log_helpers import (
    get_logger,
    log_safe,
)
from cherrypie.namespace_helpers import (
    DEFAULT_PATH_SEPARATOR,
    first_path_segment,
)


LOGGER = get_logger(__name__)


DEFAULT_META_KEY_PREFIX: Final[str] = '__'

# legacy directive name (without prefix) -> `ModelDescription` kwarg name
LEGACY_DIRECTIVE_NAMES: Final[Mapping[str, str]] = MappingProxyType({
    'namespace': 'namespace',
    'serializable': 'serializable',
    'children': 'children',
    'transferKeys': 'transfer_keys',
    'transfer_keys': 'transfer_keys',
    'ignoredKeys': 'ignored_keys',
    'ignored_keys': 'ignored_keys',
    'inject': 'inject',
})



#
# Field entries

class PathField(object):

    """
    A field whose value is looked up in the (namespace-reduced) origin.

    >>> PathField('favourites.car')
    <PathField path='favourites.car'>
    >>> PathField(42)                                   # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    cherrypie.exceptions.SchemaError: ...
    """

    __slots__ = ('path',)

    __repr__ = attr_repr('path')

    def __init__(self, path: str):
        if not isinstance(path, str):
            raise SchemaError(
                path,
                public_message=(
                    f'A field path should be a str (got: '
                    f'{ascii_str(repr(path))}).'))
        self.path = path

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.path == other.path

    def __hash__(self):
        return hash((type(self), self.path))


class ChildField(PathField):

    """
    A path field whose value is processed recursively with the child
    model description.

    When populating: a sequence value is populated element by element
    (elements whose model is `None` are dropped), a mapping value is
    populated as a whole (the raw value is kept if its model is
    `None`), any other value is kept as is.

    When desolating: the child model is desolated with the child
    description and placed under the key being the `path` (a child
    model missing from the parent model is desolated as an empty one).

    If `description` is a *legacy* mapping, it is parsed using the
    default meta key prefix (`"__"`); to use another prefix, pass a
    ready :class:`ModelDescription` (e.g., one made with
    :meth:`ModelDescription.from_mapping`).
    """

    __slots__ = ('description',)

    __repr__ = attr_repr('path', 'description')

    def __init__(self, path: str, description: 'ModelDescription'):
        super(ChildField, self).__init__(path)
        self.description = as_model_description(description)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return (self.path == other.path
                and self.description is other.description)

    def __hash__(self):
        return hash((type(self), self.path, id(self.description)))


class ComputedField(object):

    """
    A field whose value is computed by the given function.

    The function is called with one argument: a
    :class:`cherrypie.populator.ComputationContext` instance.  It is
    called only if the (namespace-reduced) origin is present; otherwise
    the field is just set to `None`.

    A computed field can never be desolated (serialized).

    >>> ComputedField(len)
    <ComputedField func=<built-in function len>>
    >>> ComputedField('not callable')                   # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    cherrypie.exceptions.SchemaError: ...
    """

    __slots__ = ('func',)

    __repr__ = attr_repr('func')

    def __init__(self, func: Callable[[Any], Any]):
        if not callable(func):
            raise SchemaError(
                func,
                public_message=(
                    f'A computed field function should be a callable '
                    f'(got: {ascii_str(repr(func))}).'))
        self.func = func

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.func == other.func

    def __hash__(self):
        return hash((type(self), self.func))


FieldEntry = Union[PathField, ChildField, ComputedField]


def as_field_entry(field_name, obj):
    """
    Convert the given object to a field entry.

    >>> as_field_entry('name', 'user.name')
    <PathField path='user.name'>
    >>> as_field_entry('size', len)
    <ComputedField func=<built-in function len>>
    >>> as_field_entry('weird', 42)                     # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    cherrypie.exceptions.SchemaError: ...
    """
    if isinstance(obj, (PathField, ComputedField)):
        return obj
    if isinstance(obj, str):
        return PathField(obj)
    if callable(obj):
        return ComputedField(obj)
    raise SchemaError(
        field_name, obj,
        public_message=(
            f'The entry of the field {ascii_str(repr(field_name))} should '
            f'be a path (str) or a computed field function (got: '
            f'{ascii_str(repr(obj))}).'))



#
# Model descriptions

class ModelDescription(object):

    """
    A model description.

    Args/kwargs:
        `fields` (default: `None` meaning: no fields):
            A mapping of output field names to field entries -- each
            being a :class:`PathField` or :class:`ComputedField` (or
            :class:`ChildField`) instance, or a `str` (interpreted as
            a path) or a callable (interpreted as a computed field's
            function).

    Kwargs:
        `namespace` (default: `None`):
            A (dot-separated) path the origin is reduced to before any
            field is resolved; it is also the path the desolated result
            is wrapped in.
        `serializable` (default: `None` meaning: all fields):
            A sequence of the names of fields to be desolated.
        `children` (default: `None`):
            A mapping of field names to child model descriptions (each
            being a :class:`ModelDescription` instance or a *legacy*
            description mapping); each of the keys must be the name of
            a field declared in `fields`.  Legacy mappings given
            here are parsed using the default meta key prefix.
        `transfer_keys` (default: `False`):
            Whether the origin items not covered by the fields are to
            be copied unchanged into the model.
        `ignored_keys` (default: empty):
            A collection of origin keys never to be copied (applicable
            only if `transfer_keys` is true).
        `inject` (default: `None`):
            A mapping whose items are to be merged verbatim into every
            populated model.

    Raises:
        :exc:`~cherrypie.exceptions.ChildNotDeclaredError` -- if any
            `children` key is not declared in `fields`;
        :exc:`~cherrypie.exceptions.InjectionSchemaError` -- if
            `inject` is not a mapping;
        :exc:`~cherrypie.exceptions.SchemaError` -- if any other part
            of the description is malformed.

    Instances should be treated as immutable (and are never modified by
    the *cherrypie* machinery), so it is safe to share them between
    threads.

    >>> desc = ModelDescription(
    ...     {'id': 'serverId', 'author': 'serverAuthor'},
    ...     namespace='awesome',
    ...     children={'author': ModelDescription({'name': 'authorName'})})
    >>> desc.fields['id']
    <PathField path='serverId'>
    >>> isinstance(desc.fields['author'], ChildField)
    True
    >>> desc.child_fields['author'].description.fields['name']
    <PathField path='authorName'>

    >>> ModelDescription({'id': 'id'}, children={'myAction': {}})  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    cherrypie.exceptions.ChildNotDeclaredError: ...
    """

    def __init__(self,
                 fields: Optional[Mapping[str, Any]] = None,
                 *,
                 namespace: Optional[str] = None,
                 serializable: Optional[Iterable[str]] = None,
                 children: Optional[Mapping[str, Any]] = None,
                 transfer_keys: bool = False,
                 ignored_keys: Iterable[str] = (),
                 inject: Optional[Mapping[str, Any]] = None):
        self._namespace = self._verified_namespace(namespace)
        self._serializable = self._verified_serializable(serializable)
        self._transfer_keys = bool(transfer_keys)
        self._ignored_keys = self._verified_ignored_keys(ignored_keys)
        self._inject = self._verified_inject(inject)
        self._fields = self._make_fields(fields, children)

    __repr__ = attr_repr('namespace', 'field_names')

    @classmethod
    def from_mapping(cls,
                     mapping: Mapping[str, Any],
                     meta_key_prefix: str = DEFAULT_META_KEY_PREFIX,
                     ) -> 'ModelDescription':
        """
        Make a :class:`ModelDescription` from a *legacy* (flat) mapping.

        Args:
            `mapping`:
                A mapping whose keys are either *directive keys*, i.e.,
                the names of directives (in their *camelCase* or
                *snake_case* variants) with `meta_key_prefix` prepended
                -- such as `"__namespace"` or `"__transferKeys"` -- or
                field names (all other keys).

        Kwargs/args:
            `meta_key_prefix` (default: `"__"`):
                The reserved prefix of directive keys.

        Unknown directive keys are ignored (a warning is logged).

        >>> desc = ModelDescription.from_mapping({
        ...     '__namespace': 'session',
        ...     '__transferKeys': True,
        ...     '__ignoredKeys': ['secret'],
        ...     'name': 'sessionName',
        ... })
        >>> desc.transfer_keys, sorted(desc.ignored_keys)
        (True, ['secret'])
        >>> ModelDescription.from_mapping(['not', 'a', 'mapping'])  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
          ...
        cherrypie.exceptions.SchemaError: ...
        """
        if not isinstance(mapping, Mapping):
            raise SchemaError(
                mapping,
                public_message=(
                    f'A model description should be a mapping (got: '
                    f'{ascii_str(repr(mapping))}).'))
        fields = {}
        directives = {}
        for key, value in mapping.items():
            if not isinstance(key, str):
                raise SchemaError(
                    key,
                    public_message=(
                        f'Model description keys should be strings '
                        f'(got: {ascii_str(repr(key))}).'))
            if not key.startswith(meta_key_prefix):
                fields[key] = value
                continue
            directive = LEGACY_DIRECTIVE_NAMES.get(key[len(meta_key_prefix):])
            if directive is None:
                LOGGER.warning(
                    'Ignoring unknown directive key %a in the model '
                    'description %s', key, log_safe(mapping))
                continue
            if directive in directives:
                raise SchemaError(
                    key,
                    public_message=(
                        f'The directive {directive!a} is specified more '
                        f'than once (the last time as {key!a}).'))
            directives[directive] = value
        children = directives.get('children')
        if isinstance(children, Mapping):
            directives['children'] = {
                name: as_model_description(child, meta_key_prefix)
                for name, child in children.items()}
        return cls(fields, **directives)


    #
    # Public properties

    @property
    def fields(self) -> Mapping[str, FieldEntry]:
        """An (immutable) ordered mapping: field name -> field entry."""
        return self._fields

    @property
    def namespace(self) -> Optional[str]:
        return self._namespace

    @property
    def serializable(self) -> Optional[tuple[str, ...]]:
        """The explicitly specified serializable field names (or `None`)."""
        return self._serializable

    @property
    def transfer_keys(self) -> bool:
        return self._transfer_keys

    @property
    def ignored_keys(self) -> frozenset[str]:
        return self._ignored_keys

    @property
    def inject(self) -> Mapping[str, Any]:
        return self._inject

    @reify
    def field_names(self) -> frozenset[str]:
        """
        Instance property: a :class:`frozenset` of all field names.
        """
        return frozenset(self._fields)

    @reify
    def path_fields(self) -> Mapping[str, PathField]:
        """
        Instance property: an ordered mapping of the names of all path
        fields (including child fields) to their entries.
        """
        return MappingProxyType({
            name: entry for name, entry in self._fields.items()
            if isinstance(entry, PathField)})

    @reify
    def child_fields(self) -> Mapping[str, ChildField]:
        """
        Instance property: an ordered mapping of the names of all child
        fields to their entries.
        """
        return MappingProxyType({
            name: entry for name, entry in self._fields.items()
            if isinstance(entry, ChildField)})

    @reify
    def computed_fields(self) -> Mapping[str, ComputedField]:
        """
        Instance property: an ordered mapping of the names of all
        computed fields to their entries.
        """
        return MappingProxyType({
            name: entry for name, entry in self._fields.items()
            if isinstance(entry, ComputedField)})

    @reify
    def computed_field_names(self) -> frozenset[str]:
        return frozenset(self.computed_fields)

    @reify
    def child_field_names(self) -> frozenset[str]:
        return frozenset(self.child_fields)

    @reify
    def serializable_names(self) -> frozenset[str]:
        """
        Instance property: a :class:`frozenset` of the names of the
        fields to be desolated (if `serializable` was not specified:
        all field names).
        """
        if self._serializable is None:
            return self.field_names
        return frozenset(self._serializable)


    #
    # Public methods

    def get_non_transferable_keys(self, separator: str = DEFAULT_PATH_SEPARATOR,
                                  ) -> frozenset[str]:
        """
        Get the :class:`frozenset` of origin keys that are never copied
        when `transfer_keys` is true: the field names, the paths of
        path fields (for child fields: only the first path segments),
        and the ignored keys.

        >>> desc = ModelDescription(
        ...     {'name': 'sessionName',
        ...      'car': 'favourites.car',
        ...      'action': 'detail.action'},
        ...     children={'action': ModelDescription({'id': 'actionId'})},
        ...     transfer_keys=True,
        ...     ignored_keys=['secret'])
        >>> sorted(desc.get_non_transferable_keys())
        ['action', 'car', 'detail', 'favourites.car', 'name', 'secret', 'sessionName']
        """
        described_keys = frozenset(
            first_path_segment(entry.path, separator)
            if isinstance(entry, ChildField)
            else entry.path
            for entry in self.path_fields.values())
        return self.field_names | described_keys | self._ignored_keys


    #
    # Private helpers

    @staticmethod
    def _verified_namespace(namespace):
        if namespace is not None and not isinstance(namespace, str):
            raise SchemaError(
                namespace,
                public_message=(
                    f'The namespace directive should be a str or None '
                    f'(got: {ascii_str(repr(namespace))}).'))
        return namespace

    @staticmethod
    def _verified_serializable(serializable):
        if serializable is None:
            return None
        if isinstance(serializable, (str, bytes, bytearray)) or not isinstance(
                serializable, Iterable):
            raise SchemaError(
                serializable,
                public_message=(
                    f'The serializable directive should be a sequence of '
                    f'field names (got: {ascii_str(repr(serializable))}).'))
        return tuple(serializable)

    @staticmethod
    def _verified_ignored_keys(ignored_keys):
        if ignored_keys is None:
            return frozenset()
        if isinstance(ignored_keys, (str, bytes, bytearray)) or not isinstance(
                ignored_keys, Iterable):
            raise SchemaError(
                ignored_keys,
                public_message=(
                    f'The ignored keys directive should be a collection of '
                    f'keys (got: {ascii_str(repr(ignored_keys))}).'))
        return frozenset(ignored_keys)

    @staticmethod
    def _verified_inject(inject):
        if inject is None:
            return MappingProxyType({})
        if not isinstance(inject, Mapping):
            raise InjectionSchemaError(inject)
        return MappingProxyType(dict(inject))

    @staticmethod
    def _make_fields(fields, children):
        if fields is None:
            fields = {}
        if not isinstance(fields, Mapping):
            raise SchemaError(
                fields,
                public_message=(
                    f'The fields of a model description should be given '
                    f'as a mapping (got: {ascii_str(repr(fields))}).'))
        if children is None:
            children = {}
        if not isinstance(children, Mapping):
            raise SchemaError(
                children,
                public_message=(
                    f'The children directive should be a mapping (got: '
                    f'{ascii_str(repr(children))}).'))
        undeclared = set(children).difference(fields)
        if undeclared:
            raise ChildNotDeclaredError(undeclared)
        result = {}
        for name, obj in fields.items():
            if not isinstance(name, str):
                raise SchemaError(
                    name,
                    public_message=(
                        f'Field names should be strings (got: '
                        f'{ascii_str(repr(name))}).'))
            entry = as_field_entry(name, obj)
            if name in children:
                if isinstance(entry, ComputedField):
                    LOGGER.debug(
                        'The child description of the field %a is ignored '
                        'as the field is a computed one', name)
                else:
                    entry = ChildField(entry.path, children[name])
            result[name] = entry
        return MappingProxyType(result)


def as_model_description(obj: Union[ModelDescription, Mapping[str, Any]],
                         meta_key_prefix: str = DEFAULT_META_KEY_PREFIX,
                         ) -> ModelDescription:
    """
    Get a :class:`ModelDescription` (returning the given one unchanged,
    or making a new one from the given *legacy* mapping).

    >>> desc = ModelDescription({'id': 'id'})
    >>> as_model_description(desc) is desc
    True
    >>> as_model_description({'id': 'id', '__namespace': 'x'}).namespace
    'x'
    """
    if isinstance(obj, ModelDescription):
        return obj
    return ModelDescription.from_mapping(obj, meta_key_prefix)
