# Copyright (c) 2013-2025 NASK. All rights reserved.

"""
Populating models: origin -> model.

>>> origin = {
...     'session': {
...         'user': {
...             'name': 'Bruce Wayne',
...             'nickname': 'Batman',
...             'mood': {'currentStatus': 'happy'},
...         },
...     },
... }
>>> def status_phrase(context):
...     status = context.resolve(context.origin, 'mood.currentStatus')
...     return '{} is {}'.format(context.model['nickname'], status)
...
>>> populator = Populator()
>>> populator.populate({
...     '__namespace': 'session.user',
...     'nickname': 'nickname',
...     'statusPhrase': status_phrase,
... }, origin)
{'nickname': 'Batman', 'statusPhrase': 'Batman is happy'}
"""

import dataclasses
import functools
from collections.abc import (
    Callable,
    Mapping,
)
from types import MappingProxyType
from typing import (
    Any,
    Optional,
)

from cherrypie.common_helpers import is_seq
from cherrypie.config import MolderSettings
from cherrypie.description import (
    ChildField,
    ModelDescription,
    as_model_description,
)
from cherrypie.log_helpers import (
    get_logger,
    log_safe,
)
from cherrypie.namespace_helpers import (
    ABSENT,
    is_present,
    lookup,
    resolve,
)


LOGGER = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class ComputationContext:

    """
    The argument passed to computed field functions.

    Fields:
        `model`:
            A read-only (but *live*) view of the model being populated,
            containing all path (and child) fields, transferred keys and
            the already computed fields (computed fields are evaluated
            in the order of their declaration).
        `origin`:
            The (namespace-reduced) origin.
        `resolve`:
            A function: `(origin, path) -> value or ABSENT` (resolving
            paths the same way the populator does).
        `populate`:
            A function: `(description, origin) -> model or None` (to
            populate any ad-hoc model description manually).
        `field_name`:
            The name of the computed field.
    """

    model: Mapping[str, Any]
    origin: Any
    resolve: Callable[[Any, str], Any]
    populate: Callable[[Any, Any], Optional[dict]]
    field_name: str


class Populator(object):

    """
    The engine that makes models from origins.

    Kwargs/args:
        `settings` (default: `None` meaning: default settings):
            A :class:`cherrypie.config.MolderSettings` instance.

    Instances keep no state between calls (apart from the settings),
    so they can be freely shared.
    """

    def __init__(self, settings: Optional[MolderSettings] = None):
        if settings is None:
            settings = MolderSettings()
        self._settings = settings
        self._resolve = functools.partial(
            resolve,
            separator=settings.path_separator,
            presence_policy=settings.presence_policy)

    def __repr__(self):
        return f'{self.__class__.__qualname__}({self._settings!r})'

    @property
    def settings(self) -> MolderSettings:
        return self._settings

    def resolve(self, origin: Any, path: str) -> Any:
        """
        Resolve the `path` against `origin` (according to the settings).

        Returns:
            The resolved value or
            :data:`~cherrypie.namespace_helpers.ABSENT`.
        """
        return self._resolve(origin, path)

    def populate(self, description, origin) -> Optional[dict]:
        """
        Populate a model.

        Args:
            `description`:
                A :class:`~cherrypie.description.ModelDescription` or a
                *legacy* description mapping.
                (note: a legacy mapping is parsed anew on each call, so
                for descriptions used repeatedly -- e.g., passed to
                `context.populate()` in computed fields -- it is better
                to convert them once, with
                :meth:`~cherrypie.description.ModelDescription.from_mapping`).
            `origin`:
                The origin (a nested structure of mappings, sequences
                and scalars; it is never modified).

        Returns:
            A new `dict` (the model), or `None` if the model would be
            empty.

        Raises:
            :exc:`~cherrypie.exceptions.SchemaError` -- if the given
            (*legacy*) description is malformed.

        Any exceptions from computed field functions are propagated.
        """
        description = as_model_description(description, self._settings.meta_key_prefix)
        sub_origin = self._get_sub_origin(description, origin)
        model = {}
        if sub_origin is ABSENT:
            for field_name in description.computed_fields:
                model[field_name] = None
        else:
            self._populate_path_fields(description, sub_origin, model)
            if description.transfer_keys:
                self._transfer_keys(description, sub_origin, model)
            self._populate_computed_fields(description, sub_origin, model)
        model.update(description.inject)
        if not model:
            return None
        return model


    #
    # Private helpers

    def _get_sub_origin(self, description: ModelDescription, origin: Any) -> Any:
        if description.namespace is None:
            sub_origin = origin
        else:
            sub_origin = self._resolve(origin, description.namespace)
            if sub_origin is ABSENT:
                LOGGER.debug('Namespace %a not found in the origin %s',
                             description.namespace, log_safe(origin))
        if sub_origin is None:
            return ABSENT
        return sub_origin

    def _populate_path_fields(self,
                              description: ModelDescription,
                              sub_origin: Any,
                              model: dict) -> None:
        presence_policy = self._settings.presence_policy
        for field_name, entry in description.path_fields.items():
            # (a key being the whole path takes precedence)
            value = lookup(sub_origin, entry.path, presence_policy)
            if value is ABSENT and self._settings.path_separator in entry.path:
                value = self._resolve(sub_origin, entry.path)
            if value is ABSENT:
                continue
            if isinstance(entry, ChildField):
                value = self._populate_child(field_name, entry, value)
            model[field_name] = value

    def _populate_child(self, field_name: str, entry: ChildField, value: Any) -> Any:
        if is_seq(value):
            child_models = []
            for element in value:
                child_model = self.populate(entry.description, element)
                if child_model is None:
                    LOGGER.debug('Dropping an element of the child field %a '
                                 '(its model is empty): %s',
                                 field_name, log_safe(element))
                    continue
                child_models.append(child_model)
            return child_models
        if isinstance(value, Mapping):
            child_model = self.populate(entry.description, value)
            if child_model is not None:
                return child_model
        return value

    def _transfer_keys(self,
                       description: ModelDescription,
                       sub_origin: Any,
                       model: dict) -> None:
        if not isinstance(sub_origin, Mapping):
            return
        presence_policy = self._settings.presence_policy
        non_transferable = description.get_non_transferable_keys(self._settings.path_separator)
        for key, value in sub_origin.items():
            if key in non_transferable or not is_present(value, presence_policy):
                continue
            model[key] = value

    def _populate_computed_fields(self,
                                  description: ModelDescription,
                                  sub_origin: Any,
                                  model: dict) -> None:
        model_view = MappingProxyType(model)
        for field_name, entry in description.computed_fields.items():
            context = ComputationContext(
                model=model_view,
                origin=sub_origin,
                resolve=self._resolve,
                populate=self.populate,
                field_name=field_name)
            model[field_name] = entry.func(context)
