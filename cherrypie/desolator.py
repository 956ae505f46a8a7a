# Copyright (c) 2013-2025 NASK. All rights reserved.

"""
Desolating models: model -> (reduced and renamed) wire object.

>>> desolator = Desolator()
>>> desolator.desolate({
...     '__namespace': 'awesome',
...     'id': 'serverId',
...     'text': 'serverText',
...     'author': 'serverAuthor',
...     '__children': {
...         'author': {'id': 'authorId', 'name': 'authorName'},
...     },
... }, {
...     'id': 'a0123',
...     'author': {'id': 'asdf1234', 'name': 'Roger Penrose'},
...     'noise': 'not described, so not serialized',
... })
{'awesome': {'serverId': 'a0123', 'serverAuthor': {'authorId': 'asdf1234', 'authorName': 'Roger Penrose'}}}
"""

from collections.abc import (
    Iterable,
    Mapping,
)
from typing import (
    Any,
    Optional,
    Union,
)

from cherrypie.common_helpers import is_seq
from cherrypie.config import MolderSettings
from cherrypie.description import (
    ModelDescription,
    PathField,
    as_model_description,
)
from cherrypie.exceptions import SerializationError
from cherrypie.log_helpers import get_logger
from cherrypie.namespace_helpers import (
    ABSENT,
    lookup,
    wrap_in_namespace,
)


LOGGER = get_logger(__name__)


WireObject = Union[dict, list]


class Desolator(object):

    """
    The engine that reduces models to wire objects.

    Kwargs/args:
        `settings` (default: `None` meaning: default settings):
            A :class:`cherrypie.config.MolderSettings` instance.
    """

    def __init__(self, settings: Optional[MolderSettings] = None):
        if settings is None:
            settings = MolderSettings()
        self._settings = settings

    def __repr__(self):
        return f'{self.__class__.__qualname__}({self._settings!r})'

    @property
    def settings(self) -> MolderSettings:
        return self._settings

    def desolate(self, description, model) -> WireObject:
        """
        Desolate the given model.

        Args:
            `description`:
                A :class:`~cherrypie.description.ModelDescription` or a
                *legacy* description mapping
                (parsed anew on each call; see the note in
                :meth:`cherrypie.populator.Populator.populate`).
            `model`:
                A model (typically, produced earlier by `populate()`)
                or a sequence of models.

        Returns:
            A new `dict` (or `list` of `dict`s, if `model` is a
            non-empty sequence and the description has no namespace):
            the model reduced to the serializable fields, renamed
            (each to its path) and, if the description specifies a
            namespace, wrapped in a nested container.

        Raises:
            :exc:`~cherrypie.exceptions.SerializationError` -- if any
            of the serializable fields is a computed one;
            :exc:`~cherrypie.exceptions.SchemaError` -- if the given
            (*legacy*) description is malformed.
        """
        description = as_model_description(description, self._settings.meta_key_prefix)
        names = description.serializable_names
        computed_names = names & description.computed_field_names
        if computed_names:
            raise SerializationError(computed_names, namespace=description.namespace)
        child_names = names & description.child_field_names
        base_names = names - child_names
        if is_seq(model) and model:
            result = [
                self._desolate_single(description, element, base_names, child_names)
                for element in model]
        else:
            result = self._desolate_single(description, model, base_names, child_names)
        if description.namespace is not None:
            result = wrap_in_namespace(
                description.namespace,
                result,
                separator=self._settings.path_separator)
        return result

    def serialize(self,
                  description,
                  model,
                  names: Iterable[str]) -> WireObject:
        """
        Reduce the given model (or each model in the given non-empty
        sequence) to the items whose keys are among `names`, renaming
        each key to the path of the corresponding field.

        Names that are not names of path fields are skipped.  This
        method never raises any exception (except that a malformed
        *legacy* description causes
        :exc:`~cherrypie.exceptions.SchemaError`).

        >>> Desolator().serialize(
        ...     {'id': 'serverId', 'text': 'serverText'},
        ...     [{'id': 'a1', 'text': 'Killed'}, {'id': 'b2', 'text': 'By'}],
        ...     ['text'])
        [{'serverText': 'Killed'}, {'serverText': 'By'}]
        """
        description = as_model_description(description, self._settings.meta_key_prefix)
        names = frozenset(names)
        if is_seq(model) and model:
            return [self._serialize_single(description, element, names)
                    for element in model]
        return self._serialize_single(description, model, names)


    #
    # Private helpers

    def _desolate_single(self,
                         description: ModelDescription,
                         model: Any,
                         base_names: frozenset[str],
                         child_names: frozenset[str]) -> dict:
        desolated = self._serialize_single(description, model, base_names)
        if not isinstance(model, Mapping):
            return desolated
        for name, entry in description.child_fields.items():
            if name not in child_names:
                continue
            child_model = lookup(model, name, self._settings.presence_policy)
            if child_model is ABSENT:
                # (desolated as an empty child model)
                child_model = {}
            desolated[entry.path] = self.desolate(entry.description, child_model)
        return desolated

    def _serialize_single(self,
                          description: ModelDescription,
                          model: Any,
                          names: frozenset[str]) -> dict:
        serialized = {}
        if not isinstance(model, Mapping):
            return serialized
        presence_policy = self._settings.presence_policy
        remaining = names
        for name in model:
            if name not in remaining:
                continue
            value = lookup(model, name, presence_policy)
            if value is ABSENT:
                continue
            entry = description.fields.get(name)
            if not isinstance(entry, PathField):
                LOGGER.debug('Skipping %a (not a path field of %r)', name, description)
                continue
            serialized[entry.path] = value
            remaining = remaining - {name}
        return serialized
