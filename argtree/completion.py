"""
argtree completion advisor: suggestions for a partially typed command line.

complete(tree, globals, words, current)
- words: the command line after the program name; current: index of the word
  under the cursor (it may equal len(words) when the cursor is on a new word).
- The context node comes from routing.walk() over the words before the cursor.
- After a "--flag" whose field is not boolean, only that field's enumeration
  literals are offered ([] when the field is not an enumeration).
- Otherwise: visible subcommands and their aliases, then BUILTINS, then the
  flags derived from the command's shape and from the globals shape.
- Every candidate list is filtered by the current (partial) word.
"""
from .commands import Command, Group
from .routing import names, walk
from .shapes import enumeration
from .utils import camelize, kebabize

BUILTINS = (
    "--help",
    "-h",
    "--version",
    "-v",
    "--schema",
    "--input",
)

_BOOLEANS = frozenset(("boolean", "bool"))


def fields(node, globals=None, /):
    """
    Fields a flag may target at node: the command's own (minus those bound to
    positional declarations), then the globals.
    """
    collected = []
    if isinstance(node, Command) and node.shape is not None:
        bound = {positional.name for positional in node.positionals}
        collected.extend(field for field in node.shape.describe() if field.name not in bound)
    if globals is not None:
        collected.extend(globals.describe())
    return collected


def _filter(candidates, prefix):
    return [candidate for candidate in candidates if candidate.startswith(prefix)]


def complete(tree, globals, words, current, /):
    """
    Return completion candidates for words[current].

    Examples (tree = {user: {list (aliases: ls), create}})
    - complete(tree, None, ["us"], 0)        → ["user"]
    - complete(tree, None, ["user", ""], 1)  → ["list", "ls", "create", "--help", ...]
    """
    word = words[current] if 0 <= current < len(words) else ""
    previous = words[current - 1] if 0 < current <= len(words) else ""
    node = walk(tree, words[:max(0, current)])

    if not word.startswith("-") and previous.startswith("--"):
        name = camelize(previous[2:])
        for field in fields(node, globals):
            if field.name == name:
                if field.type in _BOOLEANS:
                    break
                return _filter(enumeration(field.type), word)

    candidates = []
    if isinstance(node, Group):
        candidates.extend(names(node))
    candidates.extend(BUILTINS)
    candidates.extend("--" + kebabize(field.name) for field in fields(node, globals))

    return _filter(candidates, word)


__all__ = (
    "BUILTINS",
    "complete",
    "fields",
)
