"""
Argot parse results.

ParseResult is the read-only mapping a successful match produces. Its own
attribute names (path, command, subresult and the Mapping methods) are
reserved: a Schema refuses result keys that would shadow them, so attribute
access always agrees with item access.
"""
from collections.abc import Mapping


class ParseResult(Mapping):
    """
    Read-only outcome of a successful match.

    Keys are the result keys of the schema's arguments ("log", "no_checkout",
    "src"); the argument spec objects themselves are accepted as keys too.
    Attribute access mirrors item access (result.log). Values:

    - flag → bool; counting flag → int
    - single option → value or None; variadic option → list
    - required positional → value; optional positional → value or None
    - variadic positional → list
    - selector → canonical name of the chosen subcommand, or None

    When a subcommand was chosen, .command is that Subcommand and
    .subresult the nested ParseResult. .path lists the command names from
    the program down to this level.
    """

    def __init__(self, bindings, /, *, path=(), command=None, subresult=None):
        self._bindings = dict(bindings)
        self._keys = {argument.key: argument for argument in self._bindings}
        self._path = tuple(path)
        self._command = command
        self._subresult = subresult

    def _resolve(self, key, /):
        if isinstance(key, str):
            return self._keys[key]
        if key in self._bindings:
            return key
        raise KeyError(key)

    def __getitem__(self, key):
        value = self._bindings[self._resolve(key)]
        return list(value) if isinstance(value, list) else value

    def __iter__(self):
        return iter(self._keys)

    def __len__(self):
        return len(self._keys)

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}") from None

    @property
    def path(self):
        return self._path

    @property
    def command(self):
        return self._command

    @property
    def subresult(self):
        return self._subresult

    def __repr__(self):
        fields = [repr(dict(self))]
        if self._command is not None:
            fields.append(f"command={self._command.name!r}")
            fields.append(f"subresult={self._subresult!r}")
        return f"{type(self).__name__}({", ".join(fields)})"

    def __rich_repr__(self):
        yield from self.items()
        if self._command is not None:
            yield "command", self._command.name
            yield "subresult", self._subresult


def reserved(key, /):
    """
    Whether result key 'key' would be shadowed by a ParseResult attribute.
    """
    return key.startswith("_") or hasattr(ParseResult, key)


__all__ = (
    "ParseResult",
)
