"""
argtree selectors: a small path-query language over the command tree.

Grammar
- A selector starts with "." and is a sequence of dot-separated segments.
  • name         → key step        (identifier: [A-Za-z0-9_-]+)
  • *            → wildcard step   (every child, one level)
  • {a, b, ...}  → set step        (listed children, in listed order)
  • ..           → recursive step  (the node itself and every descendant);
                   it may be followed directly by a segment (..create).
- "." alone selects the root (no steps).

Examples
    .user               the user group
    .user.{create,list} two commands under user
    .deploy.*           every direct child of deploy
    ..create            every node named create, at any depth
    .deploy..           deploy and everything below it

Operations
- parse(text) → list[Step]; raises SelectorSyntaxError with the character offset.
- match(tree, steps) → list[Match], in depth-first declared order.
- subset(tree, matches, depth) → a new Group holding only the matched branches.
- slice(node, depth) → a copy of node limited to depth levels of children.

Nothing here mutates the input tree; subset() and slice() build new groups.
"""
import re
from collections import namedtuple

from .commands import Command, Group
from .faults import FaultCode, SelectorSyntaxError, getdoc

Step = namedtuple("Step", ("kind", "names"))
Step.__doc__ = """
One selector step.

Fields
- kind: "key" | "wildcard" | "set" | "recursive".
- names: tuple[str, ...]; one name for key, the listed names for set, () otherwise.
"""

Match = namedtuple("Match", ("path", "node"))
Match.__doc__ = """
A selected node and the list of names leading to it from the root.
"""

_IDENTIFIER = re.compile(r"[A-Za-z0-9_-]+")

_HINT = "selectors are jq-like: .path, .*, .{a,b}, ..name"


def _fail(message, text, offset):
    raise SelectorSyntaxError(
        message,
        title="invalid selector",
        code=FaultCode.SELECTOR_SYNTAX,
        selector=text,
        offset=offset,
        hint=_HINT,
        docs=getdoc(FaultCode.SELECTOR_SYNTAX),
    )


def _spaces(text, index):
    while index < len(text) and text[index] == " ":
        index += 1
    return index


def _segment(text, index):
    """
    Parse one segment starting at index; return (step, next index).
    """
    if text.startswith("*", index):
        return Step("wildcard", ()), index + 1

    if text.startswith("{", index):
        index = _spaces(text, index + 1)
        if text.startswith("}", index):
            _fail("selector set cannot be empty", text, index)

        names = []
        while index < len(text):
            if not (found := _IDENTIFIER.match(text, index)):
                _fail(f"expected identifier at {index}", text, index)
            names.append(found[0])

            index = _spaces(text, found.end())
            if text.startswith(",", index):
                index = _spaces(text, index + 1)
                if index >= len(text):
                    _fail(f"expected identifier at {index}", text, index)
                continue
            if text.startswith("}", index):
                index += 1
                break
            _fail(f'expected "," or "}}" at {index}', text, index)
        else:
            # "{" ended the selector
            _fail("selector set cannot be empty", text, index)

        return Step("set", tuple(names)), index

    if not (found := _IDENTIFIER.match(text, index)):
        _fail(f"expected identifier at {index}", text, index)
    return Step("key", (found[0],)), found.end()


def parse(text, /):
    """
    Parse selector text into a list of steps.

    Raises
    - SelectorSyntaxError: empty text, missing leading ".", trailing ".",
      empty or unterminated "{...}" set, or an unexpected character.
    """
    if not text:
        _fail("selector is empty", text, 0)
    if not text.startswith("."):
        _fail('selector must start with "."', text, 0)

    steps = []
    index = 0
    while index < len(text):
        if text[index] != ".":
            _fail(f"unexpected character {text[index]!r} at {index}", text, index)

        if text.startswith("..", index):
            index += 2
            steps.append(Step("recursive", ()))
            if index >= len(text) or text[index] == ".":
                continue
            step, index = _segment(text, index)
            steps.append(step)
            continue

        index += 1
        if index >= len(text):
            if len(text) == 1:
                break
            _fail(f"expected identifier at {index}", text, index)

        step, index = _segment(text, index)
        steps.append(step)

    return steps


def _descend(found, into):
    into.append(found)
    if isinstance(found.node, Group):
        for name, child in found.node.children.items():
            _descend(Match(found.path + [name], child), into)


def match(tree, steps, /):
    """
    Apply steps to tree, starting from the root match Match([], tree).

    Branches that cannot continue (a missing name, a Command reached before the
    last step) simply drop out; the result may be empty.
    """
    current = [Match([], tree)]

    for step in steps:
        following = []
        for found in current:
            if step.kind == "recursive":
                _descend(found, following)
                continue
            if not isinstance(found.node, Group):
                continue

            children = found.node.children
            match step.kind:
                case "key" | "set":
                    for name in step.names:
                        if name in children:
                            following.append(Match(found.path + [name], children[name]))
                case "wildcard":
                    for name, child in children.items():
                        following.append(Match(found.path + [name], child))
                case _:
                    raise ValueError(f"unknown selector step kind {step.kind!r}")
        current = following

    return current


def _draft(node, depth):
    """
    Mutable stand-in for slice(node, depth): a Command, or (group, children).
    """
    if isinstance(node, Command):
        return node
    if depth <= 0:
        return node, {}
    return node, {name: _draft(child, depth - 1) for name, child in node.children.items()}


def _seal(draft):
    if isinstance(draft, Command):
        return draft
    group, children = draft
    return Group({name: _seal(child) for name, child in children.items()}, **group.meta)


def _graft(tree, drafts, path, depth):
    """
    Insert the branch leading to path into drafts; the matched node itself is
    sliced to depth. Waypoint groups keep their own metadata and nothing else.
    """
    original = tree
    for index, name in enumerate(path):
        if not isinstance(original, Group) or name not in original:
            return
        node = original[name]

        if index == len(path) - 1:
            drafts[name] = _draft(node, depth)
            return

        if name not in drafts:
            drafts[name] = node if isinstance(node, Command) else (node, {})
        if isinstance(drafts[name], Command):
            return
        original, drafts = node, drafts[name][1]


def slice(node, depth, /):
    """
    Copy node keeping depth levels of descendants.

    A Command is returned as is. A Group keeps its own metadata; at depth 0 it
    keeps no children.
    """
    return _seal(_draft(node, depth))


def subset(tree, matches, depth, /):
    """
    Build a new tree holding only the branches that lead to matches.

    - no matches      → an empty, meta-less group.
    - a root match    → slice(tree, depth).
    - otherwise       → a meta-less root with one branch per match.
    """
    if not matches:
        return Group({})
    if any(not found.path for found in matches):
        return slice(tree, depth)

    drafts = {}
    for found in matches:
        _graft(tree, drafts, found.path, depth)
    return Group({name: _seal(draft) for name, draft in drafts.items()})


__all__ = (
    "Step",
    "Match",
    "parse",
    "match",
    "subset",
    "slice",
)
