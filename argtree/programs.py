"""
argtree programs: run a command tree against a command line.

What this module provides
- Program: binds a tree to a name and version (plus optional globals shape,
  context factory and rendering options) and executes one invocation.
- Meta: the invocation metadata handed to handlers.

Invocation flow (Program.execute, driven by Program.run)
1. argv is parsed with argtree.tokens.parse.
2. "--_complete N -- words..." prints completion candidates, one per line.
3. "--help" / "-h" prints help for the deepest node the positionals reach.
4. With no positionals: "--version" / "-v" prints the version and
   "--schema[=selector]" prints the (selected part of the) tree.
5. Positionals are resolved; misses become UnknownCommandError or
   UnknownSubcommandError with “did you mean” hints, and reaching a group prints
   its help.
6. The input comes from "--input" (JSON or JSON5 text, @file or stdin) or from
   argtree.routing.build; it is validated with the command's shape, the flags
   with the globals shape, and the handler is called with input, context and meta.
   Validators, the context factory and the handler may be coroutine functions;
   they are all awaited on the one event loop running execute().

Faults are surfaced through argtree.faults.trigger: raised by default, or
printed to stderr with exit status 1 when the program runs in shell mode.
"""
import asyncio
import inspect
import json
import re
import shlex
import sys
from collections import defaultdict, namedtuple
from collections.abc import Iterable, Mapping
from pathlib import Path

import json5
from rich.box import ROUNDED
from rich.console import Console, Group as Renderables
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from . import selectors, shapes
from .commands import Command, Group
from .completion import complete
from .faults import *
from .routing import build, locate, names, resolve, suggest
from .tokens import parse
from .utils import *

Meta = namedtuple("Meta", ("path", "command", "raw"))
Meta.__doc__ = """
Invocation metadata passed to handlers.

Fields
- path: list[str], canonical command path.
- command: str, the path joined with spaces ("user create").
- raw: list[str], the argv the program was run with.
"""

RESERVED = frozenset(("help", "h", "version", "v", "schema", "input"))
"""
Option names owned by the program; a globals shape cannot declare them.
"""

_BOOLEANS = frozenset(("boolean", "bool"))

_PALETTE = {
    # === Head sections ===
    "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
    "version": "#737373",  # Dim gray
    "usage-label": "bold #00E6FF",  # CYAN → signature info color
    "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan
    "description-section": "italic #A3A3A3",  # Neutral gray
    "epilog-section": "#737373",  # Dim footer gray

    # === Sections ===
    "group-label": "bold #FFFFFF",  # Pure white headers
    "argument-description": "#9CA3AF",  # Muted gray
    "option-name": "bold #00E6FF",  # CYAN for options
    "metavar": "bold #FFD600",  # AMBER for parameters
    "options-hint": "#737373",

    # === Children table ===
    "children-title": "bold #FFFFFF",
    "children-table": "#4B5563",  # Slate border
    "children": "bold #36C5F0",  # Sky-blue subcommands
    "children-description": "#9CA3AF",
    "deprecated-tag": "bold #F97316",  # ORANGE for deprecated

    # === Examples ===
    "examples-dot": "#22C55E dim",
    "example": "#E5E7EB",

    # === Schema tree ===
    "schema-group": "bold #36C5F0",
    "schema-command": "bold #22C55E",
    "schema-parameters": "#FFD600",
    "schema-description": "#9CA3AF",
    "schema-guide": "#4B5563",

    # === Fancy panel ===
    "panel-title": "bold #FF4D94",  # Magenta branding
}


def _stylist(colorful):
    """
    Build the styler/text pair shared by the renderers.

    - Define a mapping named __styles__ in __main__ to override any palette entry.
    - When colorful is False, styling is suppressed.
    """
    styles = defaultdict(str, _PALETTE | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if isinstance(fragment, Text):
            return fragment.copy() if colorful else Text(fragment.plain)
        return Text(str(fragment), style if colorful else "")

    return styler, text


def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.
    """
    try:
        return ("first", "second", "third", "fourth", "fifth")[number - 1]
    except IndexError:
        pass
    if 10 < number % 100 < 20:
        return f"{number}th"
    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


async def _settle(value):
    # handlers, validators and context factories may be coroutine functions
    return await value if inspect.isawaitable(value) else value


def _describe(shape):
    return list(shape.describe()) if shape is not None else []


def _signature(field):
    """
    "name?: type = default" for schema rendering.
    """
    signature = f"{field.name}{"?" * field.optional}: {field.type}"
    if field.default is not Unset:
        signature += f" = {json.dumps(field.default, default=str)}"
    return signature


def _tokenize(prompt):
    """
    Normalize run()'s argv into a list of strings.

    - Unset: sys.argv[1:].
    - str: split with shlex.split.
    - Iterable[str]: used as is (empty words are kept for completion).
    """
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("run() argv must be a string or an iterable of strings")
        return tokens
    raise TypeError("run() argv must be a string or an iterable of strings")


class Program:
    """
    A runnable command-line program over a command tree.

    Parameters
    - tree: Group, the root of the command tree.
    - name: str, program name used in usage lines and fault headers.
    - version: str, printed by --version.
    - descr: str | Text, shown in root help.
    - globals: Shape validating the options every command accepts.
    - context: callable(globals) → context object (may be a coroutine function).
    - shell: bool, print faults and exit instead of raising them.
    - colorful / fancy: rendering switches (colors, rich panels).
    - limit: int, schema line budget before a compact outline is shown.
    """

    tree = mirror("tree")
    name = mirror("name")
    version = mirror("version")
    descr = mirror("descr")
    globals = mirror("globals")
    context = mirror("context")
    shell = mirror("shell")
    colorful = mirror("colorful")
    fancy = mirror("fancy")
    limit = mirror("limit")

    def __init__(
            self,
            tree,
            name,
            version,
            /,
            *,
            descr=Unset,
            globals=Unset,
            context=Unset,
            shell=False,
            colorful=True,
            fancy=False,
            limit=100,
    ):
        if not isinstance(tree, Group):
            raise TypeError("program 'tree' must be a group")

        if not isinstance(name, str):
            raise TypeError("program 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError("program 'name' cannot be empty")

        if not isinstance(version, str):
            raise TypeError("program 'version' must be a string")

        if not isinstance(descr, str | Text | Unset):
            raise TypeError("program 'descr' must be a string")

        if not isinstance(globals, shapes.Shape | Unset):
            raise TypeError("program 'globals' must be a shape")
        if reserved := [field.name for field in _describe(coalesce(globals)) if field.name in RESERVED]:
            raise ValueError("program 'globals' cannot declare reserved options: %s" % ", ".join(
                "--" + name for name in reserved
            ))

        if context is not Unset and not callable(context):
            raise TypeError("program 'context' must be callable")

        for option, value in (("shell", shell), ("colorful", colorful), ("fancy", fancy)):
            if not isinstance(value, bool):
                raise TypeError(f"program {option!r} must be a boolean")

        if not isinstance(limit, int) or isinstance(limit, bool):
            raise TypeError("program 'limit' must be an integer")
        elif limit <= 0:
            raise ValueError("program 'limit' must be positive")

        self._tree = tree
        self._name = name
        self._version = version
        self._descr = coalesce(descr)
        self._globals = coalesce(globals)
        self._context = coalesce(context)
        self._shell = shell
        self._colorful = colorful
        self._fancy = fancy
        self._limit = limit

    def __repr__(self):
        return f"program(name={self._name!r}, version={self._version!r})"

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this program's runtime options (prog, shell, colors).
        """
        trigger(
            fault,
            prog=self._name,
            shell=self._shell,
            fancy=self._fancy,
            colorful=self._colorful,
            **options,
        )

    def run(self, handlers, argv=Unset, /):
        """
        Execute one invocation on a fresh event loop and return its exit status.

        Hosts that already run an event loop await execute() instead.

        Parameters
        - handlers: Mapping of dotted paths ("user.create") or nested mappings
          ({"user": {"create": ...}}) to callables accepting input, context, meta.
        - argv: Unset (sys.argv[1:]), a shell-like string, or an iterable of strings.

        Returns
        - 0 on success; 1 when a non-root group was reached without a subcommand.

        Raises
        - CommandException subclasses (outside shell mode) for user errors.
        - RuntimeError: called while an event loop is running.
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.execute(handlers, argv))
        raise RuntimeError("run() cannot be called from a running event loop, await execute() instead")

    async def execute(self, handlers, argv=Unset, /):
        """
        Coroutine form of run(): one invocation on the running event loop.

        Shape validation, globals validation, the context factory and the
        handler are awaited in that order on this loop, so a context can hand
        loop-bound resources (sessions, connections) to the handler.
        """
        if not isinstance(handlers, Mapping):
            raise TypeError("execute() first argument must be a mapping of handlers")

        tokens = parse(_tokenize(argv))
        flags, positionals = tokens.flags, tokens.positionals

        if "_complete" in flags:
            return self._completer(flags["_complete"], positionals)

        if flags.get("help") or flags.get("h"):
            resolution = resolve(self._tree, positionals)
            self._helper(resolution.path, resolution.node)
            return 0

        if not positionals:
            if flags.get("version") or flags.get("v"):
                self._versioner()
                return 0
            if flags.get("schema"):
                return self._schemer(flags["schema"])

        resolution = resolve(self._tree, positionals)

        if resolution.path:
            for switch, keys in (("--version", ("version", "v")), ("--schema", ("schema",))):
                if any(flags.get(key) for key in keys):
                    self.trigger(MisplacedSwitchError(
                        "%r can only be used before any command" % switch,
                        title="misplaced switch",
                        code=FaultCode.MISPLACED_SWITCH,
                        switch=switch,
                        hint="run '%s %s' instead" % (self._name, switch),
                        docs=getdoc(FaultCode.MISPLACED_SWITCH),
                    ))
                    return 1

        if resolution.command is None:
            if resolution.failed is not None:
                self._unknown(resolution)
                return 1
            # a group was reached without choosing a subcommand
            self._helper(resolution.path, resolution.node)
            return 0 if not resolution.path else 1

        command = resolution.command
        route = " ".join(resolution.path)

        if command.deprecated:
            self.trigger(DeprecatedCommandWarning(
                "command %r is deprecated" % route,
                title="deprecated command",
                code=FaultCode.DEPRECATED_COMMAND,
                path=resolution.path,
                hint="run '%s %s --help' for details" % (self._name, route),
                docs=getdoc(FaultCode.DEPRECATED_COMMAND),
            ))

        if (handler := locate(resolution.path, handlers)) is None:
            self.trigger(MissingHandlerError(
                "no handler for command %r" % route,
                title="missing handler",
                code=FaultCode.MISSING_HANDLER,
                path=resolution.path,
                hint="register a callable under %r in the handlers mapping" % ".".join(resolution.path),
                docs=getdoc(FaultCode.MISSING_HANDLER),
            ))
            return 1

        flags = dict(flags)
        payload = Unset
        if "input" not in {field.name for field in _describe(command.shape)}:
            payload = flags.pop("input", Unset)

        if payload is not Unset:
            self._exclusive(flags, resolution.remaining)
            candidate = self._payload(payload)
        else:
            candidate = build(flags, resolution.remaining, command.positionals)

        input = await self._validate(resolution.path, command, candidate)
        options = await self._globalize(flags)

        context = await _settle(self._context(options)) if self._context is not None else None
        await _settle(handler(
            input=input,
            context=context,
            meta=Meta(resolution.path, route, tokens.raw),
        ))
        return 0

    def _unknown(self, resolution):
        """
        Report a routing miss with close-match suggestions.
        """
        nested = bool(resolution.path)
        kind = "subcommand" if nested else "command"
        route = " ".join([self._name, *resolution.path])
        suggestions = suggest(resolution.failed, names(resolution.node))
        try:
            hint = "did you mean %r? you can also run '%s --help' to see available %ss" % (
                suggestions[0], route, kind
            )
        except IndexError:
            hint = "run '%s --help' to see available %ss" % (route, kind)

        exception = UnknownSubcommandError if nested else UnknownCommandError
        code = FaultCode.UNKNOWN_SUBCOMMAND if nested else FaultCode.UNKNOWN_COMMAND
        self.trigger(exception(
            "unknown %s %r at %s position" % (kind, resolution.failed, _ordinal(len(resolution.path) + 1)),
            title="unknown %s" % kind,
            code=code,
            input=resolution.failed,
            path=resolution.path,
            suggestions=suggestions,
            hint=hint,
            docs=getdoc(code),
        ))

    def _exclusive(self, flags, remaining):
        """
        Reject positionals or command flags given next to --input.
        """
        known = {field.name for field in _describe(self._globals)}
        strays = [name for name in flags if name not in known]
        if not remaining and not strays:
            return

        details = []
        if remaining:
            details.append("cannot use positional arguments with --input")
        if strays:
            details.append("cannot use flags with --input: %s" % ", ".join("--" + kebabize(name) for name in strays))
        self.trigger(PayloadConflictError(
            "invalid --input usage",
            title="payload conflict",
            code=FaultCode.PAYLOAD_CONFLICT,
            details=details,
            hint="put every field of the command inside the JSON payload",
            docs=getdoc(FaultCode.PAYLOAD_CONFLICT),
        ))

    def _payload(self, value):
        """
        Read and decode an --input payload into a dict.

        - True (bare --input): read stdin.
        - "@path": read the file ("~" expands to the home directory).
        - any other string: the payload text itself.

        Payloads are JSON5, so plain JSON, comments and trailing commas are accepted.
        """
        def malformed(message, **options):
            self.trigger(MalformedPayloadError(
                message,
                title="malformed payload",
                code=FaultCode.MALFORMED_PAYLOAD,
                hint="pass a JSON object as a string, as @file, or through stdin",
                docs=getdoc(FaultCode.MALFORMED_PAYLOAD),
                **options,
            ))

        if value is True:
            raw = sys.stdin.read()
        elif isinstance(value, str) and value.startswith("@"):
            try:
                raw = Path(value[1:]).expanduser().read_text(encoding="utf-8")
            except OSError as error:
                return malformed("cannot read input file %r" % value[1:], details=[str(error)])
        elif isinstance(value, str):
            raw = value
        else:
            return malformed("invalid --input value (expected JSON string, @file, or stdin)")

        try:
            payload = json5.loads(raw)
        except ValueError as error:
            return malformed("invalid JSON input", details=[str(error)])

        if not isinstance(payload, dict):
            return malformed("JSON input must be an object")
        return payload

    async def _validate(self, path, command, candidate):
        """
        Validate the candidate input with the command's shape.

        Issues are reported in declaration order: positionals, then options,
        then anything else the shape complained about.
        """
        if command.shape is None:
            return candidate

        outcome = await _settle(command.shape.validate(candidate))
        if not outcome.issues:
            return outcome.value

        declared = {positional.name: positional.display for positional in command.positionals}
        order = list(declared)
        order += [field.name for field in _describe(command.shape) if field.name not in declared]

        issues = {}
        for issue in outcome.issues:
            issues.setdefault(shapes.field(issue), issue)
        order += [name for name in issues if name not in order]

        details = []
        absent = []
        for name in order:
            if (issue := issues.get(name)) is None:
                continue
            if name in declared:
                label = "<%s>" % declared[name]
            else:
                label = "--" + kebabize(name) if name else ""
            if shapes.missing(issue):
                message = "required"
                absent.append(label)
            else:
                message = re.sub(r"^Invalid \w+: ", "", issue.message)
            details.append("%s: %s" % (label, message) if label else message)

        if absent:
            details.insert(0, "missing required: %s" % ", ".join(absent))

        route = " ".join([self._name, *path])
        self.trigger(InvalidInputError(
            "invalid arguments for %r" % route,
            title="invalid input",
            code=FaultCode.INVALID_INPUT,
            details=details,
            missing=absent,
            hint="run '%s --help' to see the expected usage" % route,
            docs=getdoc(FaultCode.INVALID_INPUT),
        ))

    async def _globalize(self, flags):
        """
        Validate the flags with the globals shape; flags pass through without one.
        """
        if self._globals is None:
            return flags

        outcome = await _settle(self._globals.validate(flags))
        if not outcome.issues:
            return outcome.value

        details = []
        for issue in outcome.issues:
            name = shapes.field(issue)
            details.append("--%s: %s" % (kebabize(name), issue.message) if name else issue.message)
        self.trigger(InvalidGlobalsError(
            "global options validation failed",
            title="invalid global options",
            code=FaultCode.INVALID_GLOBALS,
            details=details,
            hint="run '%s --help' to see the global options" % self._name,
            docs=getdoc(FaultCode.INVALID_GLOBALS),
        ))

    def _completer(self, current, words):
        """
        Print completion candidates for words[current], one per line.
        """
        if not isinstance(current, int) or isinstance(current, bool):
            current = len(words)
        console = Console(highlight=False, soft_wrap=True)
        for candidate in complete(self._tree, self._globals, words, current):
            console.print(candidate, markup=False)
        return 0

    def _versioner(self):
        Console(highlight=False).print(self._version, markup=False)

    def _schemer(self, selector):
        """
        Render the tree (or the part picked by a selector) as a schema tree.

        When the rendering exceeds the line limit, a two-level outline is shown
        with selector hints instead.
        """
        tree = outline = self._tree
        if isinstance(selector, str):
            try:
                steps = selectors.parse(selector)
            except SelectorSyntaxError as error:
                self.trigger(error)
                return 1
            matches = selectors.match(self._tree, steps)
            tree = selectors.subset(self._tree, matches, 1)
            outline = selectors.subset(self._tree, matches, 2)
        else:
            outline = selectors.slice(self._tree, 2)

        console = Console(highlight=False)
        rendered = self._schema(tree)
        with console.capture() as capture:
            console.print(rendered)
        lines = capture.get().splitlines()

        if len(lines) <= self._limit:
            console.print(rendered)
            return 0

        console.print(Text("schema too large (%d lines), showing compact outline." % len(lines)))
        console.print(self._schema(outline, compact=True))
        if example := next((name for name, child in outline.children.items() if isinstance(child, Group)), None):
            console.print(Text("hint: use --schema=.%s" % example))
        console.print(Text("hint: selectors are jq-like (.path, .*, .{a,b}, ..name)"))
        return 0

    def _schema(self, root, *, compact=False):
        """
        Build a rich Tree for root; compact drops parameters and examples.
        """
        styler, text = _stylist(self._colorful)

        label = text(self._name, styler("program-name"))
        if self._descr:
            label = Text.assemble(label, "  ", text(self._descr, styler("schema-description")))
        schema = Tree(label, guide_style=styler("schema-guide"))

        if self._globals is not None and not compact and (fields := _describe(self._globals)):
            branch = schema.add(Text.assemble(
                text("$globals", styler("schema-group")),
                "  ",
                text("global options available to all commands", styler("schema-description")),
            ))
            for field in fields:
                branch.add(text(_signature(field), styler("schema-parameters")))

        def attach(parent, name, node):
            if isinstance(node, Command):
                label = text(name, styler("schema-command"))
                if not compact:
                    label.append_text(text("(%s)" % ", ".join(map(_signature, _describe(node.shape))), styler("schema-parameters")))
                if node.descr:
                    label.append("  ").append_text(text(node.descr, styler("schema-description")))
                if node.deprecated:
                    label.append("  ").append_text(text("[deprecated]", styler("deprecated-tag")))
                branch = parent.add(label)
                if not compact:
                    for example in node.examples:
                        branch.add(Text.assemble(text("e.g. ", styler("schema-description")), text(example, styler("example"))))
                return

            label = text(name, styler("schema-group"))
            if node.descr:
                label.append("  ").append_text(text(node.descr, styler("schema-description")))
            branch = parent.add(label)
            for key, child in node.children.items():
                attach(branch, key, child)

        for name, node in root.children.items():
            attach(schema, name, node)

        return schema

    def _options(self, fields, styler, text):
        """
        Two-column grid of option flags and their descriptions.
        """
        grid = Table.grid(padding=(0, 2), pad_edge=True)
        for field in fields:
            kebab = kebabize(field.name)
            flag = text("--" + kebab, styler("option-name"))
            if field.type not in _BOOLEANS:
                flag.append(" ").append_text(text("<%s>" % field.type, styler("metavar")))
            if not field.optional:
                flag.append(" (required)")

            descr = field.descr or ""
            if field.default is not Unset:
                descr += " (default: %s)" % json.dumps(field.default, default=str)
            if field.type.endswith("[]"):
                descr += " (repeatable)"
            elif field.type.startswith("{") and field.type.endswith("}"):
                descr += " (use --%s.<key>)" % kebab
            grid.add_row(flag, text(descr.strip(), styler("argument-description")))
        return grid

    def _helper(self, path, node):
        """
        Render help for node (a Command or a Group) reached through path.

        Palette keys
        - program-name, version, usage-label, usage-section, description-section, epilog-section
        - group-label, argument-description, option-name, metavar, options-hint
        - children-title, children-table, children, children-description, deprecated-tag
        - examples-dot, example, panel-title

        Customization
        - Define a mapping named __styles__ in __main__ to override any palette entry.
        - When colorful is False, styling is suppressed.
        """
        console = Console(highlight=False)
        styler, text = _stylist(self._colorful)
        route = " ".join([self._name, *path])
        width = console.width - 4 * self._fancy  # Account for panel gutters when fancy=True

        def label(title):
            return Text.assemble("\n", text(title, styler("group-label")), ":")

        renders = [Text.assemble(text(self._name, styler("program-name")), " ", text("v" + self._version, styler("version")))]
        if not path and self._descr:
            renders.append(text(self._descr, styler("description-section")))

        usage = Text.assemble("\n", text("usage", styler("usage-label")), ": ", text(route, styler("usage-section")))

        if isinstance(node, Command):
            fields = _describe(node.shape)
            bound = {positional.name for positional in node.positionals}

            for positional in node.positionals:
                usage.append(" ").append_text(text("<%s>" % positional.display, styler("metavar")))
            usage.append(" ").append_text(text("[options]", styler("options-hint")))
            renders.append(usage)

            if node.descr:
                renders.append(Text.assemble("\n", text(node.descr, styler("description-section"))))

            if node.positionals:
                grid = Table.grid(padding=(0, 2), pad_edge=True)
                for positional in node.positionals:
                    descr = positional.descr or next((field.descr for field in fields if field.name == positional.name and field.descr), "")
                    grid.add_row(text(positional.display, styler("metavar")), text(descr, styler("argument-description")))
                renders.extend((label("arguments"), grid))

            if options := [field for field in fields if field.name not in bound]:
                renders.extend((label("options"), self._options(options, styler, text)))

            if fields and "input" not in {field.name for field in fields}:
                grid = Table.grid(padding=(0, 2), pad_edge=True)
                grid.add_row(
                    Text.assemble(text("--input", styler("option-name")), " ", text("<json>", styler("metavar"))),
                    text("read command input from a JSON string, @file, or stdin", styler("argument-description")),
                )
                renders.extend((label("input"), grid))

            if node.examples:
                examples = Text()
                padding = len(dot := text(" • ", styler("examples-dot")))
                for example in map(lambda x: text(x, styler("example")), node.examples):
                    for index, segment in enumerate(example.wrap(console, width - padding)):
                        examples.append_text(dot if index == 0 else Text(" " * padding)).append_text(segment).append("\n")
                examples.rstrip()
                renders.extend((label("examples"), examples))
        else:
            usage.append(" ").append_text(text("<command>", styler("metavar")))
            usage.append(" ").append_text(text("[options]", styler("options-hint")))
            renders.append(usage)

            if node.descr and path:
                renders.append(Text.assemble("\n", text(node.descr, styler("description-section"))))

            table = Table(
                "name", "help",
                title=text("subcommands" if path else "commands", styler("children-title")),
                width=int(width * (2 / 3)),
                box=ROUNDED,
                style=styler("children-table"),
                header_style=styler("children-title"),
            )
            for name, child in node.children.items():
                if child.hidden:
                    continue
                if isinstance(child, Command):
                    display = ", ".join([*child.aliases, name])
                    descr = child.descr or "no description"
                else:
                    display = name
                    descr = child.descr or "%d subcommand%s" % (len(child), "s" * (len(child) != 1))
                help = text(descr, styler("children-description"))
                if isinstance(child, Command) and child.deprecated:
                    help.append(" ").append_text(text("[deprecated]", styler("deprecated-tag")))
                table.add_row(text(display, styler("children")), help)
            renders.append(Text(""))
            renders.append(table)
            renders.append(text(
                "run '%s <command> --help' for more information on a command" % route,
                styler("epilog-section"),
            ))

        if globals := _describe(self._globals):
            renders.extend((label("global options"), self._options(globals, styler, text)))

        renderable = Renderables(*renders)

        if self._fancy:
            renderable = Panel(
                renderable,
                title=Text.assemble("[", " ", f"{self._name} HELP".upper(), " ", "]", style=styler("panel-title")),
                title_align="left",
            )

        console.print(renderable)


__all__ = (
    "Meta",
    "Program",
    "RESERVED",
)
