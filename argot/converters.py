"""
Argot converters: turn the raw text of a value into a typed value.

Any callable taking one string works as a converter (str, int, float,
pathlib.Path, an Enum class, a lambda...). Whatever it raises is reported as
an invalid-value error carrying the converter's message; convert() is the
single place where that normalization happens.

Stock converters cover the cases where a bare builtin gives unfriendly
messages or the wrong semantics (bool("false") is True).
"""
import pathlib
from typing import Protocol, runtime_checkable


@runtime_checkable
class Converter[_T](Protocol):
    def __call__(self, text: str, /) -> _T: ...


class ConversionError(ValueError):
    """
    Raised by convert() (and the stock converters) when a text is rejected.
    """


def convert(converter, text, /):
    """
    Apply 'converter' to 'text', normalizing failures into ConversionError.

    The original exception is chained as __cause__; its message (or its type
    name when it has none) becomes the ConversionError message.
    """
    try:
        return converter(text)
    except ConversionError:
        raise
    except Exception as exception:
        raise ConversionError(str(exception) or type(exception).__name__) from exception


def integer(minimum=None, maximum=None):
    """
    Build a base-10 integer converter, optionally bounded (inclusive).
    """
    if minimum is not None and maximum is not None and minimum > maximum:
        raise ValueError("integer() minimum cannot exceed maximum")

    def integer(text, /):
        try:
            value = int(text, 10)
        except ValueError:
            raise ConversionError(f"{text!r} is not a valid integer") from None
        if minimum is not None and value < minimum:
            raise ConversionError(f"{value} is lower than {minimum}")
        if maximum is not None and value > maximum:
            raise ConversionError(f"{value} is greater than {maximum}")
        return value

    return integer


def boolean(text, /):
    """
    Accept exactly "true" or "false".
    """
    match text:
        case "true":
            return True
        case "false":
            return False
        case _:
            raise ConversionError(f"expected 'true' or 'false', got {text!r}")


def character(text, /):
    """
    Accept exactly one character.
    """
    if len(text) != 1:
        raise ConversionError(f"expected a single character, got {len(text)}")
    return text


def choice(*values):
    """
    Build a converter accepting only the given strings (case-sensitive).
    """
    if not values:
        raise TypeError("choice() requires at least one value")
    for value in values:
        if not isinstance(value, str):
            raise TypeError("choice() values must be strings")

    def choice(text, /):
        if text not in values:
            raise ConversionError(f"expected one of {", ".join(map(repr, values))}")
        return text

    return choice


def path(text, /):
    """
    Convert to a pathlib.Path; the empty string is rejected.
    """
    if not text:
        raise ConversionError("path cannot be empty")
    return pathlib.Path(text)


__all__ = (
    "Converter",
    "ConversionError",
    "convert",
    "integer",
    "boolean",
    "character",
    "choice",
    "path",
)
