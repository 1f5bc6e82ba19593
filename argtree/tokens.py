"""
argtree token parser: argv into flags and positionals.

What this module provides
- parse(tokens): single left-to-right pass over an argv tail that produces a
  Tokens record (flags, positionals, raw). It knows nothing about the command
  tree; routing and input building happen later on the positionals.

Classification rules (first match wins at each position)
1. "--"                    → every remaining token is positional, verbatim.
2. "--no-name"             → flag name set to False.
3. "--name=value"          → value coerced and assigned (dot paths allowed).
4. "--name [value]"        → the next token is consumed as the value unless it
                             starts with "-"; otherwise the flag is True.
5. "-x [value]"            → same rule as (4), keyed by the single character.
6. "-abc"                  → a, b and c all become True; never takes a value.
7. anything else           → positional.

Values
- "5432" → 5432, "1.5" → 1.5, "true"/"false" → booleans, anything else stays
  a string ("1.0.0" included).
- Dot paths ("--db.host localhost") build nested dicts.
- Repeating a valued flag accumulates a list in encounter order.

Known quirk (kept on purpose)
- "--offset -10" parses "-10" as bundled short flags "-1 -0" and leaves offset
  True; negative values must be written inline: "--offset=-10".

The parser never raises: malformed input degrades to best-effort
classification.
"""
import re
from collections import namedtuple

from .utils import camelize

Tokens = namedtuple("Tokens", ("flags", "positionals", "raw"))
Tokens.__doc__ = """
Parsed argv.

Fields
- flags: dict[str, value]; canonical (camelCase) names, nested dicts for dot paths.
- positionals: list[str]; non-flag tokens in original order.
- raw: the original token list, untouched (same object).
"""

# Strict ASCII decimal literal; anything looser (hex, "1.0.0", " ") stays a string.
_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def coerce(value, /):
    """
    Lexically coerce a raw flag value.

    - strict decimal numbers → int (no fraction/exponent) or float
    - "true" / "false"      → True / False
    - everything else       → the original string (integers past the
      interpreter's digit limit included)
    """
    if _NUMBER.fullmatch(stripped := value.strip()):
        try:
            if not set(stripped) & set(".eE"):
                return int(stripped)
            return float(stripped)
        except ValueError:
            return value
    if value == "true":
        return True
    if value == "false":
        return False
    return value


def _keys(name):
    # "db.host-name" → ["db", "hostName"]
    return camelize(name).split(".")


def _target(flags, keys):
    """
    Walk (and create) nested dicts for every key but the last one.

    A path crossing a scalar replaces it with a dict; the last key is returned
    with its containing dict.
    """
    for key in keys[:-1]:
        if not isinstance(flags.get(key), dict):
            flags[key] = {}
        flags = flags[key]
    return flags, keys[-1]


def _assign(flags, name, value):
    """
    Store a valued assignment, accumulating repeats into a list.
    """
    flags, key = _target(flags, _keys(name))
    try:
        existing = flags[key]
    except KeyError:
        flags[key] = value
        return
    if isinstance(existing, list):
        existing.append(value)
    else:
        flags[key] = [existing, value]


def _toggle(flags, name, state):
    """
    Store a presence assignment (True/False); presence never accumulates.
    """
    flags, key = _target(flags, _keys(name))
    flags[key] = state


def parse(tokens, /):
    """
    Turn an argv tail into Tokens(flags, positionals, raw).

    Parameters
    - tokens: list[str], exactly as delivered by the host (no shell re-interpretation).

    Returns
    - Tokens with canonical flag names and the leftover positionals.

    Examples
    - parse(["--name", "john"])    → flags={"name": "john"}, positionals=[]
    - parse(["--no-verbose"])      → flags={"verbose": False}
    - parse(["-abc"])              → flags={"a": True, "b": True, "c": True}
    - parse(["--db.port", "5432"]) → flags={"db": {"port": 5432}}
    """
    flags = {}
    positionals = []

    index = 0
    while index < len(tokens):
        token = tokens[index]
        following = tokens[index + 1] if index + 1 < len(tokens) else None

        if token == "--":
            positionals.extend(tokens[index + 1:])
            break

        if token.startswith("--no-"):
            _toggle(flags, token[5:], False)
        elif token.startswith("--"):
            name, equals, value = token[2:].partition("=")
            if equals:
                _assign(flags, name, coerce(value))
            elif following is not None and not following.startswith("-"):
                _assign(flags, name, coerce(following))
                index += 1
            else:
                _toggle(flags, name, True)
        elif token.startswith("-") and len(token) == 2:
            if following is not None and not following.startswith("-"):
                _assign(flags, token[1], coerce(following))
                index += 1
            else:
                _toggle(flags, token[1], True)
        elif token.startswith("-") and len(token) > 2:
            for char in token[1:]:
                flags[char] = True
        else:
            positionals.append(token)
        index += 1

    return Tokens(flags, positionals, tokens)


__all__ = (
    "Tokens",
    "parse",
    "coerce",
)
