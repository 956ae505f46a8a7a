# Copyright (c) 2013-2025 NASK. All rights reserved.

"""
*cherrypie* settings.

The settings can be given directly (as `MolderSettings` constructor
arguments) or obtained from a *pyramid*-like `settings` mapping, i.e.,
a mapping of `"<section>.<option>"` string keys to (typically *raw*,
i.e., string) values -- such as the one a *pyramid* application gets
from its `*.ini` file:

>>> settings = MolderSettings.from_settings({
...     'cherrypie.path_separator': '/',
...     'cherrypie.presence_policy': 'truthiness',
...     'some_other_app.option': 'whatever',
... })
>>> settings.path_separator
'/'
>>> settings.meta_key_prefix
'__'
>>> settings.presence_policy
'truthiness'
"""

import dataclasses
from collections.abc import Mapping
from typing import (
    Any,
    Callable,
    ClassVar,
    Final,
    Optional,
)

from cherrypie.common_helpers import ascii_str
from cherrypie.description import DEFAULT_META_KEY_PREFIX
from cherrypie.exceptions import ConfigError
from cherrypie.log_helpers import get_logger
from cherrypie.namespace_helpers import (
    DEFAULT_PATH_SEPARATOR,
    DEFAULT_PRESENCE_POLICY,
    PRESENCE_POLICIES,
    PresencePolicy,
)


LOGGER = get_logger(__name__)


SETTINGS_SECTION: Final[str] = 'cherrypie'


def conv_non_empty_str(opt_value: str) -> str:
    value = str(opt_value)
    if not value:
        raise ValueError('should not be empty')
    if value != value.strip():
        raise ValueError('should not have leading/trailing whitespace')
    return value


def conv_presence_policy(opt_value: str) -> str:
    value = str(opt_value).strip().lower()
    if value not in PRESENCE_POLICIES:
        listing = ', '.join(map(ascii, PRESENCE_POLICIES))
        raise ValueError(f'should be one of: {listing}')
    return value


BASIC_CONVERTERS: Final[Mapping[str, Callable[[str], Any]]] = {
    'non_empty_str': conv_non_empty_str,
    'presence_policy': conv_presence_policy,
}


@dataclasses.dataclass(frozen=True)
class MolderSettings:

    """
    Immutable settings of a `cherrypie.molder.Molder`.

    Fields:
        `path_separator` (default: `"."`):
            The separator of segments of origin paths and namespaces.
        `meta_key_prefix` (default: `"__"`):
            The prefix of meta directive keys in *legacy* (flat) model
            description mappings (e.g., `"__namespace"`).
        `presence_policy` (default: `"existence"`):
            `"existence"` -- any value of an existing key (including
            `None`, `0`, `""` etc.) is treated as present; or
            `"truthiness"` -- *falsy* values are treated as absent.

    >>> MolderSettings()
    MolderSettings(path_separator='.', meta_key_prefix='__', presence_policy='existence')
    >>> MolderSettings(presence_policy='whatever')  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
      ...
    cherrypie.exceptions.ConfigError: ...
    """

    # option name -> converter spec (see: `BASIC_CONVERTERS`)
    OPT_CONVERTER_SPECS: ClassVar[Mapping[str, str]] = {
        'path_separator': 'non_empty_str',
        'meta_key_prefix': 'non_empty_str',
        'presence_policy': 'presence_policy',
    }

    path_separator: str = DEFAULT_PATH_SEPARATOR
    meta_key_prefix: str = DEFAULT_META_KEY_PREFIX
    presence_policy: PresencePolicy = DEFAULT_PRESENCE_POLICY

    def __post_init__(self):
        for opt_name, converter_spec in self.OPT_CONVERTER_SPECS.items():
            value = getattr(self, opt_name)
            if not isinstance(value, str):
                raise ConfigError(
                    opt_name, value,
                    public_message=(
                        f'The {opt_name!a} setting should be a str '
                        f'(got: {ascii_str(repr(value))}).'))
            converted = _apply_converter(opt_name, value, converter_spec)
            object.__setattr__(self, opt_name, converted)

    @classmethod
    def from_settings(cls, settings: Optional[Mapping[str, Any]] = None, /,
                      **overriding_kwargs) -> 'MolderSettings':
        """
        Make a `MolderSettings` instance from the `"cherrypie.*"` items
        of the given *pyramid*-like `settings` mapping.

        Any keyword arguments override the values found in `settings`.

        Raises:
            `ConfigError` -- if any of the `"cherrypie.*"` options is
            unknown or its value is invalid.

        >>> MolderSettings.from_settings({'cherrypie.bad_opt': 'x'})  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
          ...
        cherrypie.exceptions.ConfigError: ...
        """
        kwargs = {}
        prefix = SETTINGS_SECTION + '.'
        for key, value in (settings or {}).items():
            if not isinstance(key, str):
                LOGGER.warning('Ignoring non-`str` settings key %a', key)
                continue
            if not key.startswith(prefix):
                continue
            opt_name = key[len(prefix):]
            if opt_name not in cls.OPT_CONVERTER_SPECS:
                raise ConfigError(
                    key,
                    public_message=f'Unknown setting {key!a}.')
            kwargs[opt_name] = value
        kwargs.update(overriding_kwargs)
        settings_obj = cls(**kwargs)
        LOGGER.debug('%r made from settings', settings_obj)
        return settings_obj


def _apply_converter(opt_name, opt_value, converter_spec):
    converter = BASIC_CONVERTERS[converter_spec]
    try:
        return converter(opt_value)
    except (ValueError, TypeError) as exc:
        raise ConfigError(
            opt_name, opt_value,
            public_message=(
                f'Invalid value of the {opt_name!a} setting: '
                f'{ascii_str(repr(opt_value))} ({ascii_str(exc)}).')) from exc
