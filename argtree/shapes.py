"""
argtree shapes: the validator contract consumed by the tree.

A command may carry a *shape*: an opaque handle that knows how to validate a
candidate input and how to describe its fields. argtree never validates by
itself; any validation library can be plugged in by subclassing Shape.

Contract
- Shape.validate(candidate) -> Outcome(value, issues)
  • success: issues is empty and value holds the typed result.
  • failure: issues is a non-empty sequence of Issue(path, message).
- Shape.describe() -> list[Field]
  • ordered field descriptions used by help, schema rendering and completion.

Helpers
- field(issue): dotted identifier for an issue path ("servers.0.host").
- missing(issue): whether an issue means “required value not provided”.
- enumeration(type): literal values of an enumeration-like type description
  ("'json' | 'table'" → ["json", "table"]), or [] for anything else.
"""
import re
from abc import ABC, abstractmethod
from collections import namedtuple
from collections.abc import Mapping

from .utils import Unset

Field = namedtuple("Field", ("name", "type", "optional", "default", "descr"), defaults=(False, Unset, None))
Field.__doc__ = """
Description of one input field.

Fields
- name: str, canonical (camelCase) field name.
- type: str, textual type description ("string", "number", "'a' | 'b'", ...).
- optional: bool.
- default: Unset when the field has no default.
- descr: str | None.
"""

Issue = namedtuple("Issue", ("path", "message"))
Issue.__doc__ = """
One validation problem.

Fields
- path: sequence of segments (keys, indices, or objects/mappings carrying a key).
- message: str.
"""

Outcome = namedtuple("Outcome", ("value", "issues"), defaults=((),))
Outcome.__doc__ = """
Result of Shape.validate(); issues is empty on success.
"""

# "expected non-undefined" issues, as phrased by common schema libraries
_MISSING = re.compile(r"Invalid key: Expected .+ but received (?:undefined|None)|(?:field )?required", re.IGNORECASE)


class Shape(ABC):
    """
    Abstract validator handle attached to commands and to program globals.
    """

    @abstractmethod
    def validate(self, candidate, /):
        """
        Validate a candidate mapping; return an Outcome (the result may be awaitable).
        """

    @abstractmethod
    def describe(self):
        """
        Return the ordered list of Field records this shape accepts.
        """


def _segment(segment):
    if isinstance(segment, Mapping):
        return str(segment["key"])
    if hasattr(segment, "key"):
        return str(segment.key)
    return str(segment)


def field(issue, /):
    """
    Map an issue path into a dotted field identifier; "" for root-level issues.
    """
    return ".".join(map(_segment, issue.path or ()))


def missing(issue, /):
    """
    Tell whether the issue reports a required value that was not provided.
    """
    return bool(_MISSING.fullmatch(issue.message.strip()))


def enumeration(type, /):
    """
    Extract literal values when every "|"-separated part is a quoted literal.
    """
    values = []
    parts = [part.strip() for part in type.split("|")]
    for part in parts:
        if len(part) >= 2 and part[0] == part[-1] and part[0] in "'\"":
            values.append(part[1:-1])
    return values if len(values) == len(parts) else []


__all__ = (
    "Shape",
    "Field",
    "Issue",
    "Outcome",
    "field",
    "missing",
    "enumeration",
)
