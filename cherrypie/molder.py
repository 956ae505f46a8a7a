# Copyright (c) 2013-2025 NASK. All rights reserved.

"""
The *molder*: a facade binding together a :class:`Populator` and a
:class:`Desolator` sharing the same settings.

The module-level functions :func:`populate`, :func:`desolate`,
:func:`resolve` and :func:`serialize` use a default :class:`Molder`
(with default settings).

>>> origin = {'session': {'state': 'Active', 'detail': {'action': {'id': 1, 'name': 'login'}}}}
>>> description = {
...     '__namespace': 'session',
...     'state': 'state',
...     'action': 'detail.action',
...     '__children': {
...         'action': {'id': 'id', 'action': 'name'},
...     },
... }
>>> model = populate(description, origin)
>>> model
{'state': 'Active', 'action': {'id': 1, 'action': 'login'}}
>>> desolate(description, model)
{'session': {'state': 'Active', 'detail.action': {'id': 1, 'name': 'login'}}}
"""

from collections.abc import Iterable
from typing import (
    Any,
    Optional,
)

from cherrypie.config import MolderSettings
from cherrypie.desolator import (
    Desolator,
    WireObject,
)
from cherrypie.populator import Populator


class Molder(object):

    """
    Kwargs/args:
        `settings` (default: `None` meaning: default settings):
            A :class:`cherrypie.config.MolderSettings` instance.

    >>> molder = Molder(MolderSettings(path_separator='/'))
    >>> molder.populate({'city': 'address/city'}, {'address': {'city': 'Gotham'}})
    {'city': 'Gotham'}
    >>> molder.resolve({'address': {'city': 'Gotham'}}, 'address/city')
    'Gotham'
    """

    def __init__(self, settings: Optional[MolderSettings] = None):
        if settings is None:
            settings = MolderSettings()
        self._settings = settings
        self._populator = Populator(settings)
        self._desolator = Desolator(settings)

    def __repr__(self):
        return f'{self.__class__.__qualname__}({self._settings!r})'

    @classmethod
    def from_settings(cls, settings, /, **overriding_kwargs) -> 'Molder':
        """
        Make a :class:`Molder` from a *pyramid*-like `settings` mapping
        (see: :meth:`cherrypie.config.MolderSettings.from_settings`).
        """
        return cls(MolderSettings.from_settings(settings, **overriding_kwargs))

    @property
    def settings(self) -> MolderSettings:
        return self._settings

    def populate(self, description, origin) -> Optional[dict]:
        """See: :meth:`cherrypie.populator.Populator.populate`."""
        return self._populator.populate(description, origin)

    def desolate(self, description, model) -> WireObject:
        """See: :meth:`cherrypie.desolator.Desolator.desolate`."""
        return self._desolator.desolate(description, model)

    def resolve(self, origin, path: str) -> Any:
        """See: :meth:`cherrypie.populator.Populator.resolve`."""
        return self._populator.resolve(origin, path)

    def serialize(self, description, model, names: Iterable[str]) -> WireObject:
        """See: :meth:`cherrypie.desolator.Desolator.serialize`."""
        return self._desolator.serialize(description, model, names)


_default_molder = Molder()


def populate(description, origin) -> Optional[dict]:
    """
    Populate a model from the given origin, according to the given
    description -- using the default settings.

    See: :meth:`cherrypie.populator.Populator.populate`.
    """
    return _default_molder.populate(description, origin)


def desolate(description, model) -> WireObject:
    """
    Desolate the given model, according to the given description --
    using the default settings.

    See: :meth:`cherrypie.desolator.Desolator.desolate`.
    """
    return _default_molder.desolate(description, model)


def resolve(origin, path: str) -> Any:
    """
    Resolve the given dot-separated path against the given origin --
    using the default settings.

    >>> resolve({'a': [{'b': 'c'}]}, 'a.0.b')
    'c'
    """
    return _default_molder.resolve(origin, path)


def serialize(description, model, names: Iterable[str]) -> WireObject:
    """
    Reduce and rename the given model (or non-empty sequence of
    models) -- using the default settings.

    See: :meth:`cherrypie.desolator.Desolator.serialize`.
    """
    return _default_molder.serialize(description, model, names)
