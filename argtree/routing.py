"""
argtree routing: positionals against the command tree.

Scope
- resolve(tree, positionals): live routing; direct child names first, then
  command aliases; stops at the first Command or reports the first miss.
- walk(tree, words): best-effort routing used by completion; skips flags and,
  where it is unambiguous, the value that follows a flag.
- build(flags, positionals, declarations): merge flags and the command's
  positional tail into the candidate input handed to the validator.
- locate(path, handlers): find the handler for a resolved path.
- suggest(word, candidates): close matches for “did you mean” hints.

Routing misses are data, not exceptions: Resolution.failed carries the first
unmatched token and Resolution.node the group where routing stopped.
"""
import difflib
from collections import namedtuple
from collections.abc import Mapping

from .commands import Command, Group, check

OVERFLOW = "_positionals"
"""
Reserved input key collecting positional tokens beyond the declared ones.
"""

Resolution = namedtuple("Resolution", ("path", "command", "node", "remaining", "failed"))
Resolution.__doc__ = """
Outcome of resolve().

Fields
- path: list[str], canonical names from the root (aliases never appear).
- command: Command | None, set on success.
- node: the node where routing stopped (the Command, or the Group to suggest from).
- remaining: list[str], positionals left for the command; [] on a miss.
- failed: str | None, the first unmatched token.
"""


def lookup(group, word, /):
    """
    Find a child of group by name, then by command alias.

    Returns
    - (canonical name, node), or None when neither matches.
    """
    children = group.children
    if word in children:
        return word, children[word]
    for name, child in children.items():
        if isinstance(child, Command) and word in child.aliases:
            return name, child
    return None


def resolve(tree, positionals, /):
    """
    Route positionals from the root of tree.

    Examples (tree = {user: {list, get (aliases: g)}})
    - ["user", "g", "42"] → path ["user", "get"], remaining ["42"]
    - ["usr"]             → failed "usr", node = root group
    - ["user"]            → command None, failed None (group reached)
    """
    node, path = tree, []
    for index, word in enumerate(positionals):
        if isinstance(node, Command):
            return Resolution(path, node, node, list(positionals[index:]), None)
        if (found := lookup(node, word)) is None:
            return Resolution(path, None, node, [], word)
        name, node = found
        path.append(name)
    return Resolution(path, node if isinstance(node, Command) else None, node, [], None)


def walk(tree, words, /):
    """
    Best-effort routing over a partial command line; returns the context node.

    Rules
    - tokens starting with "-" are flags and never route.
    - the token after a flag is skipped as its value, unless the current node is
      a Command, the token itself starts with "-", or it names a child (or an
      alias) of the current group.
    - the first positional that does not route ends the walk.
    """
    node = tree
    index = 0
    while index < len(words):
        word = words[index]
        index += 1

        if word.startswith("-"):
            if (
                index < len(words) and
                not words[index].startswith("-") and
                isinstance(node, Group) and
                lookup(node, words[index]) is None
            ):
                index += 1
            continue

        if isinstance(node, Command) or (found := lookup(node, word)) is None:
            break
        node = found[1]

    return node


def build(flags, positionals, declarations, /):
    """
    Merge flags and positional tokens into one candidate input.

    Positional assignment happens after the flag copy, so a positional wins a
    name collision. The last declaration may be variadic and then takes every
    remaining token as a list; tokens nobody declared land under OVERFLOW.

    Raises
    - ValueError: a variadic declaration that is not the last one.
    """
    check(declarations)

    candidate = dict(flags)
    index = 0
    for declaration in declarations:
        if declaration.variadic:
            candidate[declaration.name] = list(positionals[index:])
            index = len(positionals)
        elif index < len(positionals):
            candidate[declaration.name] = positionals[index]
            index += 1

    if index < len(positionals):
        candidate[OVERFLOW] = list(positionals[index:])

    return candidate


def locate(path, handlers, /):
    """
    Find the handler for a command path.

    A dotted key ("user.create") is tried first, then nested mappings
    ({"user": {"create": ...}}). Anything that is not callable counts as absent.
    """
    if callable(handler := handlers.get(".".join(path))):
        return handler

    current = handlers
    for segment in path:
        if not isinstance(current, Mapping) or segment not in current:
            return None
        current = current[segment]

    return current if callable(current) else None


def suggest(word, candidates, /, limit=5):
    """
    Return up to `limit` close matches for a mistyped name.
    """
    return difflib.get_close_matches(word, list(candidates), limit)


def names(group, /):
    """
    Visible child names of a group, each followed by its command aliases.
    """
    for name, child in group.children.items():
        if child.hidden:
            continue
        yield name
        if isinstance(child, Command):
            yield from child.aliases


__all__ = (
    "OVERFLOW",
    "Resolution",
    "lookup",
    "resolve",
    "walk",
    "build",
    "locate",
    "suggest",
    "names",
)
