"""
argtree command tree: declare commands and groups.

What this module provides
- Command: a leaf node describing one invocable operation.
  • metadata: descr, aliases, examples, deprecated, hidden.
  • shape: optional validator handle (argtree.shapes.Shape) for its input.
  • positionals: ordered Positional declarations (the last one may be variadic).
- Group: a branch node holding named children (Command or Group, recursively).
  • metadata: descr, hidden. A group built without metadata is meta-less.
- Positional: one positional-argument declaration (name, descr, variadic).
  A trailing "..." on the name is the variadic marker ("files...").
- Factories: command(...), group(children, ...), positional(...).

Core ideas
- Explicit sum type: a node is a Command or a Group, fixed at construction;
  there is no third “plain mapping” variant to sniff at runtime.
- Read-only after construction: every field is exposed through mirrored
  properties that hand out copies, so routing, completion and selectors can
  share one tree without interfering.
- Programmer errors fail fast: bad metadata raises TypeError/ValueError at
  construction (e.g., a variadic positional that is not the last one).

Quick start
    from argtree import command, group, Positional

    tree = group({
        "user": group({
            "list": command("list users", aliases=["ls"]),
            "create": command("create a user", positionals=["name"]),
        }, descr="user management"),
        "cat": command("print files", positionals=[Positional("files...")]),
    })
"""
import functools
import operator
import re
from collections.abc import Iterable, Mapping

from rich.text import Text

from .shapes import Shape
from .utils import *


class NodeType(type):
    """
    Metaclass that turns tree declarations into introspectable, read-only nodes.

    Responsibilities
    - Provide stable, readable __repr__/__rich_repr__ for diagnostics and rich UI.
    - Expose selected fields as read-only properties using mirror() for all names
      listed in __introspectable__.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      for consistent, human-friendly labels in error messages.
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - command(descr='list users', aliases=['ls'], ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield a sequence of (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _process_text(cls, metadata, name):
    """
    Normalize an optional str | Text field: trimmed, non-empty, Unset kept as Unset.
    """
    if not isinstance(object := metadata[name], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} {name!r} must be a string")
    elif isinstance(object, str) and not (object := object.strip()):
        raise ValueError(f"{cls.__typename__} {name!r} cannot be empty")
    metadata[name] = object


def _process_bool(cls, metadata, name):
    if not isinstance(metadata[name], bool | Unset):
        raise TypeError(f"{cls.__typename__} {name!r} must be a boolean")


def _process_strings(cls, metadata, name):
    """
    Normalize an iterable of non-empty, unique strings into a tuple.
    """
    if isinstance(object := metadata[name], str) or not isinstance(object, Iterable):
        raise TypeError(f"{cls.__typename__} {name!r} must be an iterable of strings")
    seen = []
    for item in object:
        if not isinstance(item, str):
            raise TypeError(f"{cls.__typename__} {name!r} must be an iterable of strings")
        elif not (item := item.strip()):
            raise ValueError(f"{cls.__typename__} {name!r} must be an iterable of non-empty strings")
        elif item in seen:
            raise ValueError(f"{cls.__typename__} {name!r} cannot contain duplicates")
        seen.append(item)
    metadata[name] = tuple(seen)


def _process_positionals(cls, metadata):
    """
    Materialize positional declarations and enforce their ordering rules.

    Rules
    - items are Positional instances or plain names ("name", "files...").
    - names are unique within the command.
    - only the last declaration may be variadic.
    """
    if isinstance(object := metadata["positionals"], str) or not isinstance(object, Iterable):
        raise TypeError(f"{cls.__typename__} 'positionals' must be an iterable of positionals")

    positionals = []
    for item in object:
        if isinstance(item, str):
            item = Positional(item)
        elif not isinstance(item, Positional):
            raise TypeError(f"{cls.__typename__} 'positionals' must be an iterable of positionals")
        if any(item.name == other.name for other in positionals):
            raise ValueError(f"{cls.__typename__} positional {item.name!r} is already declared")
        positionals.append(item)

    check(positionals)
    metadata["positionals"] = tuple(positionals)


def _process_children(cls, metadata):
    """
    Validate child names and kinds, and reject aliases shared between siblings.
    """
    if not isinstance(object := metadata["children"], Mapping):
        raise TypeError(f"{cls.__typename__} 'children' must be a mapping of names to nodes")

    aliases = {}
    for name, child in object.items():
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} child names must be strings")
        elif not re.fullmatch(r"[^\s-]\S*", name):
            raise ValueError(f"{cls.__typename__} child name {name!r} must be non-empty and cannot start with '-'")
        if not isinstance(child, Command | Group):
            raise TypeError(f"{cls.__typename__} child {name!r} must be a command or a group")
        for alias in getattr(child, "aliases", ()):
            if alias in aliases:
                raise ValueError(f"{cls.__typename__} alias {alias!r} is shared by {aliases[alias]!r} and {name!r}")
            aliases[alias] = name

    metadata["children"] = dict(object)


def check(positionals, /):
    """
    Reject a variadic positional declared anywhere but last.

    Raises
    - ValueError: misconfigured declarations (programmer error, not user input).
    """
    for index, positional in enumerate(positionals):
        if positional.variadic and index != len(positionals) - 1:
            raise ValueError(f"positional variadic argument {positional.name!r} must be the last one")


class Positional(metaclass=NodeType):
    """
    One positional-argument declaration of a command.

    Parameters
    - name: str; an identifier, hyphens allowed inside ("source-file"). A
      trailing "..." marks the declaration as variadic and is stripped. The
      name is used verbatim as the key of the handler input.
    - descr: str | Text (optional short help).
    - variadic: bool; absorbs every remaining positional token as a list.
    """
    __introspectable__ = (
        "name",
        "descr",
        "variadic",
    )

    def __new__(cls, name, /, descr=Unset, *, variadic=Unset):
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")

        if (name := name.strip()).endswith("..."):
            if variadic is False:
                raise ValueError(f"{cls.__typename__} {name!r} is marked variadic but variadic=False was given")
            name, variadic = name[:-3], True

        if not re.fullmatch(r"[^\W\d](?:[\w-]*\w)?", name):
            raise ValueError(f"{cls.__typename__} 'name' must be an identifier, optionally hyphenated")

        metadata = {"name": name, "descr": descr, "variadic": variadic}
        _process_text(cls, metadata, "descr")
        _process_bool(cls, metadata, "variadic")

        self = super().__new__(cls)
        self._name = metadata["name"]
        self._descr = coalesce(metadata["descr"])
        self._variadic = coalesce(metadata["variadic"], False)
        return self

    @property
    def display(self):
        """
        The declared spelling, variadic marker included ("files...").
        """
        return self.name + "..." * self.variadic


class Command(metaclass=NodeType):
    """
    Leaf node: one invocable operation.

    Fields (read-only)
    - descr, aliases, examples, deprecated, hidden: metadata.
    - meta: mapping of the metadata fields that were explicitly given.
    - shape: validator handle (Shape) or None.
    - positionals: tuple of Positional declarations.
    """
    __introspectable__ = (
        "descr",
        "aliases",
        "examples",
        "deprecated",
        "hidden",
        "meta",
        "shape",
        "positionals",
    )

    __displayable__ = (
        "descr",
        "aliases",
        "hidden",
        "positionals",
    )

    def __new__(
            cls,
            /,
            descr=Unset,
            *,
            aliases=(),
            examples=(),
            deprecated=Unset,
            hidden=Unset,
            shape=Unset,
            positionals=(),
    ):
        metadata = {
            "descr": descr,
            "aliases": aliases,
            "examples": examples,
            "deprecated": deprecated,
            "hidden": hidden,
            "shape": shape,
            "positionals": positionals,
        }
        _process_text(cls, metadata, "descr")
        _process_strings(cls, metadata, "aliases")
        _process_strings(cls, metadata, "examples")
        _process_bool(cls, metadata, "deprecated")
        _process_bool(cls, metadata, "hidden")
        if not isinstance(metadata["shape"], Shape | Unset):
            raise TypeError(f"{cls.__typename__} 'shape' must be a shape")
        _process_positionals(cls, metadata)

        self = super().__new__(cls)
        self._meta = {
            name: metadata[name]
            for name in ("descr", "aliases", "examples", "deprecated", "hidden")
            if metadata[name] is not Unset and metadata[name] != ()
        }
        self._descr = coalesce(metadata["descr"])
        self._aliases = metadata["aliases"]
        self._examples = metadata["examples"]
        self._deprecated = coalesce(metadata["deprecated"], False)
        self._hidden = coalesce(metadata["hidden"], False)
        self._shape = coalesce(metadata["shape"])
        self._positionals = metadata["positionals"]
        return self


class Group(metaclass=NodeType):
    """
    Branch node: named children (commands or groups).

    Fields (read-only)
    - descr, hidden: metadata.
    - meta: mapping of the metadata fields that were explicitly given; empty
      for a meta-less group.
    - children: dict of name → node, in declaration order (a fresh copy each time).
    """
    __introspectable__ = (
        "descr",
        "hidden",
        "meta",
        "children",
    )

    def __new__(cls, children=Unset, /, descr=Unset, *, hidden=Unset):
        metadata = {
            "children": coalesce(children, {}),
            "descr": descr,
            "hidden": hidden,
        }
        _process_children(cls, metadata)
        _process_text(cls, metadata, "descr")
        _process_bool(cls, metadata, "hidden")

        self = super().__new__(cls)
        self._meta = {name: metadata[name] for name in ("descr", "hidden") if metadata[name] is not Unset}
        self._descr = coalesce(metadata["descr"])
        self._hidden = coalesce(metadata["hidden"], False)
        self._children = metadata["children"]
        return self

    def __getitem__(self, name, /):
        return self._children[name]

    def __contains__(self, name, /):
        return name in self._children

    def __len__(self):
        return len(self._children)

    def __bool__(self):
        return True


def command(descr=Unset, /, **options):
    """
    Declare a Command.

    Parameters
    - descr: str | Text (optional).
    - aliases, examples: Iterable[str].
    - deprecated, hidden: bool.
    - shape: Shape.
    - positionals: Iterable[Positional | str].
    """
    return Command(descr, **options)


def group(children=Unset, /, descr=Unset, **options):
    """
    Declare a Group from a mapping of names to nodes.

    Parameters
    - children: Mapping[str, Command | Group].
    - descr: str | Text (optional).
    - hidden: bool.
    """
    return Group(children, descr, **options)


def positional(name, /, descr=Unset, **options):
    """
    Declare a Positional ("name" or "name..." for a variadic one).
    """
    return Positional(name, descr, **options)


__all__ = (
    # Public API surface for consumers of argtree.commands.
    "Command",
    "Group",
    "Positional",
    "command",
    "group",
    "positional",
    "check",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del NodeType
