"""
argtree faults: the errors and warnings a program reports to its user.

- FaultCode numbers every fault so hosts can search, document or relabel them.
- CommandException and CommandWarning keep a message plus read-only options
  (title, code, hint, details, prog, shell, colorful, fancy) and render
  themselves with rich.
- trigger() is the one way a fault reaches the user; getdoc() looks up host
  documentation for a code.

The core modules (tokens, routing, selectors, completion) never exit the
process. Selector syntax problems raise SelectorSyntaxError and routing misses
are plain data on the Resolution record; argtree.programs turns misses,
validation issues and payload problems into faults.

Outside shell mode errors are raised and warnings go through warnings.warn.
In shell mode both are printed to stderr, and errors then exit with status 1.
"""
import copy
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    stable numeric identifiers for every fault argtree can surface.

    ranges
    - 1110x routing misses, 1115x selector syntax
    - 1116x/1117x input validation and --input payloads
    - 1119x dispatch (misplaced switches, missing handlers)
    - 121xx warnings

    a host may relabel codes with a __codes__ mapping in __main__; see normalize().
    """
    # --- routing errors (11xxx) ---
    UNKNOWN_COMMAND             = 11101
    UNKNOWN_SUBCOMMAND          = 11102

    # --- selector errors (11xxx) ---
    SELECTOR_SYNTAX             = 11151

    # --- input errors (11xxx) ---
    INVALID_INPUT               = 11161
    INVALID_GLOBALS             = 11162
    MALFORMED_PAYLOAD           = 11171
    PAYLOAD_CONFLICT            = 11172

    # --- dispatch errors (11xxx) ---
    MISPLACED_SWITCH            = 11191
    MISSING_HANDLER             = 11192

    # --- warnings (12xxx) ---
    DEPRECATED_COMMAND          = 12112

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, kind):
    """
    shared rich layout for errors and warnings: header, message, hint.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", True)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    prog = text(getattr(main, "__prog__", options.get("prog", "argtree")), styler("prog-name"))
    code = options.get("code")

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(code.normalize() if code else "", styler("code")),
        " | ",
        text(str(options.get("title", kind)).title(), styler(kind + "-title")),
        " ]"
    )
    message = text(fault.message, styler(kind + "-message"))
    renders = [message]
    for detail in options.get("details", ()):
        renders.append(Text.assemble("   ", text(detail, styler(kind + "-detail"))))
    if hint := options.get("hint"):
        renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

    if options.get("fancy", False):
        return Panel(Group(*renders), title=header, title_align="left")

    return Group(header, *renders)


class CommandException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "error-detail": "#FF8FA3",  # per-field detail lines
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        }, "error")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownCommandError(CommandException): ...
class UnknownSubcommandError(CommandException): ...
class InvalidInputError(CommandException): ...
class InvalidGlobalsError(CommandException): ...
class MalformedPayloadError(CommandException): ...
class PayloadConflictError(CommandException): ...
class MisplacedSwitchError(CommandException): ...
class MissingHandlerError(CommandException): ...


class SelectorSyntaxError(CommandException):
    """
    malformed selector text; carries the 0-based character offset of the problem.
    """

    @property
    def offset(self):
        return self.options.get("offset")


class CommandWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "warning-detail": "#D6D6DE dim",
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        }, "warning")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DeprecatedCommandWarning(CommandWarning): ...


def trigger(fault, /, **options):
    """
    Merge options into fault (through copy.replace) and surface the result.

    Any object with __trigger__ and __replace__ methods is accepted; options
    usually carry prog, shell, fancy and colorful plus whatever context the
    fault wants to show (hint, details, suggestions, path).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    Host documentation for code, read from a __docs__ mapping in __main__ (None when absent).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "CommandException",
    "UnknownCommandError",
    "UnknownSubcommandError",
    "SelectorSyntaxError",
    "InvalidInputError",
    "InvalidGlobalsError",
    "MalformedPayloadError",
    "PayloadConflictError",
    "MisplacedSwitchError",
    "MissingHandlerError",
    "CommandWarning",
    "DeprecatedCommandWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
