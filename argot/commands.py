"""
Argot schemas and subcommands.

Overview
- Schema: the declarative description of one command line. Holds the
  ordered options, the ordered positionals (possibly ending with a
  Selector), the auto help/version switches and the program metadata.
- Subcommand: one named (and optionally aliased) entry of a Selector,
  carrying its own nested Schema.
- Selector: the positional that picks a subcommand; whatever follows the
  chosen name is matched against that subcommand's schema.

Structural rules (checked on construction)
- Option names are unique across the whole schema (auto switches included).
- Result keys are unique across options and positionals and do not
  shadow ParseResult attributes (path, command, subresult, keys, ...).
- At most one variadic positional; a Selector counts as one and must be the
  final positional.
- Subcommand names and aliases are unique within a Selector.
- Every id listed in 'required' belongs to at least one argument's conflicts.

A Schema never changes after construction, so one instance can be shared
across any number of parses (and threads).

Quick example:
    >>> from argot import Schema, Flag, Option, Cardinal
    >>> schema = Schema(
    ...     Flag("--force", descr="overwrite destination"),
    ...     Option("-l", "--log", metavar="level", descr="set log level"),
    ...     Cardinal("src", nargs="+", descr="source(s)"),
    ...     Cardinal("dest", descr="destination"),
    ...     name="mv",
    ... )
"""
from collections.abc import Iterable

from .arguments import ArgumentType, Flag, Option, Cardinal, _NAME, _sanitize_metadata
from .results import reserved
from .utils import *


class Subcommand(metaclass=ArgumentType):
    """
    Named entry of a Selector.

    Parameters
    - name: canonical name, the one reported in results and command paths.
    - aliases: alternative spellings matched case-sensitively ("rm" for "remove").
    - schema: the nested Schema matched against the elements after the name.
    - descr: help text shown in the parent's "commands" section.
    """

    __introspectable__ = (
        "name",
        "aliases",
        "schema",
        "descr",
    )

    def __init__(self, name, /, *aliases, schema, descr=Unset):
        cls = type(self)
        for label in (name, *aliases):
            if not isinstance(label, str):
                raise TypeError(f"{cls.__typename__} names must be strings")
            elif not _NAME.fullmatch(label):
                raise ValueError(f"{cls.__typename__} name {label!r} must be a non-empty word not starting with '-'")
        if len(set((name, *aliases))) != len((name, *aliases)):
            raise ValueError(f"{cls.__typename__} names cannot contain duplicates")
        if not isinstance(schema, Schema):
            raise TypeError(f"{cls.__typename__} 'schema' must be a schema")

        metadata = {"descr": descr, "conflicts": ()}
        _sanitize_metadata(cls, metadata)

        self._name = name
        self._aliases = tuple(aliases)
        self._schema = schema
        self._descr = metadata["descr"]

    @property
    def names(self):
        return (self._name, *self._aliases)

    @property
    def usage(self):
        return ", ".join(self.names)


class Selector(metaclass=ArgumentType):
    """
    Positional that selects a subcommand.

    Behaves like a required (or, with optional=True, optional) positional
    that also absorbs the surplus of positional elements: the first of them
    names the subcommand, the rest are handed to its schema untouched.
    """

    __introspectable__ = (
        "name",
        "subcommands",
        "optional",
        "conflicts",
        "descr",
    )

    def __init__(self, name, /, *subcommands, optional=False, conflicts=(), descr=Unset):
        cls = type(self)
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        elif not _NAME.fullmatch(name):
            raise ValueError(f"{cls.__typename__} 'name' must be a non-empty word not starting with '-'")
        if not isinstance(optional, bool):
            raise TypeError(f"{cls.__typename__} 'optional' must be a boolean")
        if not subcommands:
            raise TypeError(f"{cls.__typename__} must specify at least one subcommand")

        table = {}
        for subcommand in subcommands:
            if not isinstance(subcommand, Subcommand):
                raise TypeError(f"{cls.__typename__} subcommands must be subcommand instances")
            for label in subcommand.names:
                if table.setdefault(label, subcommand) is not subcommand:
                    raise ValueError(f"{cls.__typename__} subcommand name {label!r} is already in use")

        metadata = {"descr": descr, "conflicts": conflicts}
        _sanitize_metadata(cls, metadata)

        self._name = name
        self._subcommands = tuple(subcommands)
        self._optional = optional
        self._conflicts = metadata["conflicts"]
        self._descr = metadata["descr"]
        self._table = table

    def lookup(self, name, /):
        """
        Return the subcommand called (or aliased) 'name', or None.
        """
        return self._table.get(name)

    @property
    def required(self):
        return not self._optional

    @property
    def variadic(self):
        return True

    @property
    def default(self):
        return None

    @property
    def key(self):
        return self._name.replace("-", "_")

    @property
    def label(self):
        return f"<{self._name}>"

    @property
    def usage(self):
        return self.label if self.required else f"[{self.label}]"


def _autoswitch(cls, option, default, what, /):
    """
    Internal: resolve an autohelp/autoversion setting into a Flag or None.
    """
    match option:
        case True:
            return default()
        case False:
            return None
        case Flag() if option.count:
            raise ValueError(f"{cls.__typename__} {what} switch cannot be a counting flag")
        case Flag():
            return option
        case _:
            raise TypeError(f"{cls.__typename__} 'auto{what}' must be a boolean or a flag")


class Schema(metaclass=ArgumentType):
    """
    Declarative description of a command line.

    Parameters
    - arguments: Flag, Option, Cardinal and Selector instances. Options keep
      their relative order, positionals keep theirs; the two may be mixed.
    - name: program name used in usage and version text.
    - version: program version; enables the version switch by default.
    - descr: one-line description of the program.
    - required: conflict-group ids that are choice groups, i.e. exactly one
      of their members must be supplied.
    - autohelp: True for "-h/--help", a Flag for custom names, False for none.
    - autoversion: like autohelp with "-V/--version"; defaults to whether a
      version is set.

    The help and version switches are appended after the declared options and
    never show up in parse results.
    """

    __introspectable__ = (
        "name",
        "version",
        "descr",
        "options",
        "positionals",
        "required",
        "helper",
        "versioner",
    )

    __displayable__ = (
        "name",
        "version",
        "descr",
        "options",
        "positionals",
    )

    def __init__(
            self,
            *arguments,
            name=Unset,
            version=Unset,
            descr=Unset,
            required=(),
            autohelp=True,
            autoversion=Unset,
    ):
        cls = type(self)

        for label, value in (("name", name), ("version", version)):
            if not isinstance(value, str | Unset):
                raise TypeError(f"{cls.__typename__} '{label}' must be a string")
            elif isinstance(value, str) and not value.strip():
                raise ValueError(f"{cls.__typename__} '{label}' cannot be empty")

        options, positionals = [], []
        for argument in arguments:
            match argument:
                case Flag() | Option():
                    options.append(argument)
                case Cardinal() | Selector():
                    positionals.append(argument)
                case _:
                    raise TypeError(f"{cls.__typename__} arguments must be flags, options, cardinals or selectors")

        helper = _autoswitch(cls, autohelp, lambda: Flag("-h", "--help", descr="Print help message"), "help")

        if autoversion is Unset:
            autoversion = version is not Unset
        elif autoversion is not False and version is Unset:
            raise ValueError(f"{cls.__typename__} version switch requires a 'version'")
        versioner = _autoswitch(
            cls, autoversion, lambda: Flag("-V", "--version", descr="Print version information"), "version"
        )

        switches = {}
        for option in (*options, *filter(None, (helper, versioner))):
            for label in option.names:
                if switches.setdefault(label, option) is not option:
                    raise ValueError(f"{cls.__typename__} option name {label!r} is already in use")

        keys = set()
        for argument in (*options, *positionals):
            if argument.key in keys:
                raise ValueError(f"{cls.__typename__} result key {argument.key!r} is already in use")
            elif reserved(argument.key):
                raise ValueError(f"{cls.__typename__} result key {argument.key!r} is reserved")
            keys.add(argument.key)

        variadics = [argument for argument in positionals if argument.variadic]
        if len(variadics) > 1:
            raise TypeError(f"{cls.__typename__} accepts at most one variadic positional (selectors included)")
        for position, argument in enumerate(positionals):
            if isinstance(argument, Selector) and position != len(positionals) - 1:
                raise TypeError(f"{cls.__typename__} selector must be the final positional")

        if isinstance(required, str) or not isinstance(required, Iterable):
            required = (required,)
        required = tuple(dict.fromkeys(required))
        groups = {conflict for argument in (*options, *positionals) for conflict in argument.conflicts}
        for group in required:
            if group not in groups:
                raise ValueError(f"{cls.__typename__} required group {group!r} has no members")

        metadata = {"descr": descr, "conflicts": ()}
        _sanitize_metadata(cls, metadata)

        self._name = name
        self._version = version
        self._descr = metadata["descr"]
        self._options = tuple(options)
        self._positionals = tuple(positionals)
        self._required = required
        self._helper = helper
        self._versioner = versioner
        self._switches = switches

    def lookup(self, name, /):
        """
        Return the option-like spec (auto switches included) named 'name', or None.
        """
        return self._switches.get(name)

    @property
    def switches(self):
        """
        Every option-like spec in help order: declared ones, then help, then version.
        """
        return self._options + tuple(filter(None, (self._helper, self._versioner)))

    @property
    def arguments(self):
        """
        Declared options then declared positionals; the order conflicts are checked in.
        """
        return self._options + self._positionals

    @property
    def selector(self):
        if self._positionals and isinstance(self._positionals[-1], Selector):
            return self._positionals[-1]
        return None

    def members(self, group, /):
        """
        Arguments belonging to conflict group 'group', in declaration order.
        """
        return tuple(argument for argument in self.arguments if group in argument.conflicts)


__all__ = (
    "Schema",
    "Subcommand",
    "Selector",
)
