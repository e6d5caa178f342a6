"""
Argot help and version text.

Both renderers are pure: they read a Schema (plus the command path used to
reach it) and return plain text. Printing, paging and colouring are the
caller's business; see argot.runner.

Help layout

    usage: mv [options] <src>... <dest>

    options:
       --force               overwrite destination
       -l, --log <level>     set log level
       -h, --help            Print help message

    arguments:
       <src>...              source(s)
       <dest>                destination

- "[options]" appears when the schema has any option-like spec; a selector
  is followed by " [...]".
- "arguments" lists only the positionals that carry help text; "commands"
  lists the subcommands of the final selector, aliases joined by ", ".
- The first column is padded to the widest entry across all sections and
  separated from the help text by five spaces; entries without help text
  are not padded.
- Every section, the usage line included, is followed by a blank line.
"""
from .commands import Schema, Selector
from .utils import Unset, coalesce


def _program(schema, path, /):
    return " ".join(path) if path else coalesce(schema.name, "<program>")


def _usage(schema, path, /):
    usage = ["usage: " + _program(schema, path)]
    if schema.switches:
        usage.append("[options]")
    for argument in schema.positionals:
        usage.append(argument.usage + (" [...]" if isinstance(argument, Selector) else ""))
    return " ".join(usage) + "\n\n"


def _section(title, width, rows, /):
    if not rows:
        return ""
    lines = [f"{title}:\n"]
    for usage, descr in rows:
        if descr is None:
            lines.append(f"   {usage}\n")
        else:
            lines.append(f"   {usage:<{width}}     {descr}\n")
    return "".join(lines) + "\n"


def render_help(schema, path=(), /):
    """
    Render the help text of 'schema' reached through the command 'path'
    (e.g. ("git", "commit")). Without a path the schema name is used.
    """
    if not isinstance(schema, Schema):
        raise TypeError("render_help() argument must be a schema")

    options = [(switch.usage, switch.descr) for switch in schema.switches]
    arguments = [(argument.usage, argument.descr) for argument in schema.positionals if argument.descr is not None]
    commands = []
    if (selector := schema.selector) is not None:
        commands = [(subcommand.usage, subcommand.descr) for subcommand in selector.subcommands]

    width = max((len(usage) for usage, _ in (*options, *arguments, *commands)), default=0)

    return "".join((
        _usage(schema, path),
        _section("options", width, options),
        _section("arguments", width, arguments),
        _section("commands", width, commands),
    ))


def render_version(schema, path=(), /):
    """
    Render "<program> <version>" for 'schema'.
    """
    if not isinstance(schema, Schema):
        raise TypeError("render_version() argument must be a schema")
    if schema.version is Unset:
        raise ValueError("render_version() schema has no version")
    return f"{_program(schema, path)} {schema.version}"


__all__ = (
    "render_help",
    "render_version",
)
