# Copyright (c) 2013-2025 NASK. All rights reserved.

"""
*cherrypie*: populate models from nested (JSON-like) origins and
desolate them back to wire objects -- in a declarative way, according
to *model descriptions*.
"""

from cherrypie.config import MolderSettings
from cherrypie.description import (
    ChildField,
    ComputedField,
    ModelDescription,
    PathField,
)
from cherrypie.exceptions import (
    ChildNotDeclaredError,
    CherrypieError,
    ConfigError,
    InjectionSchemaError,
    SchemaError,
    SerializationError,
)
from cherrypie.molder import (
    Molder,
    desolate,
    populate,
    resolve,
    serialize,
)
from cherrypie.namespace_helpers import (
    ABSENT,
    wrap_in_namespace,
)
from cherrypie.populator import ComputationContext
