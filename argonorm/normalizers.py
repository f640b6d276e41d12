r"""
Argonorm option value normalizers.

Overview
- Normalizer: the capability shared by every converter.
  • format(raw): turn the raw option text into a typed value, or raise ValidationError.
  • describe(): short, localized help text for the accepted format.
  • complete(prefix): shell completion candidates for a partially typed value.
  • normalizer(raw) is normalizer.format(raw), so instances can be handed to an
    argument front end as the 'type' converter of an option.

- Concrete normalizers
  • Default: identity pass-through.
  • KeyValueList: "a=1,b=[x,y]" mappings, falling back to JSON (inline or from a file).
  • List: comma-separated values with quoting/escaping (see tokenizer.split).
  • Number: strict integers.
  • Bool: true/t/yes/y/1 and false/f/no/n/0, case-insensitive.
  • File: the full contents of a file.
  • JSONInput: a JSON document given inline or as a path to a file.
  • Enum: exact membership in a fixed set of values.
  • EnumList: comma-separated combination of a fixed set of values.
  • DateTime: "YYYY-MM-DD HH:MM:SS" or ISO 8601, rewritten to canonical ISO 8601.

- Registration
  • NormalizerType (metaclass) derives a kebab-case __typename__ from the class
    name and records every concrete class in a read-only registry.
  • lookup(name) returns a registered class; normalizer(name, ...) builds one.

Invariants
- Instances are immutable after construction and keep no memory between calls.
- Absent input (None) is treated as empty by every normalizer.
- Rejections are always ValidationError; file I/O failures propagate as OSError.

Quick example:
    >>> KeyValueList()("name=web,ports=[80,443]")
    {'name': 'web', 'ports': ['80', '443']}
    >>> Enum(["json", "yaml"]).format("toml")
    Traceback (most recent call last):
    ...
    argonorm.faults.ValidationError: Value must be one of 'json', 'yaml'.
"""
import datetime
import functools
import glob
import json
import logging
import operator
import os.path
import re
from collections.abc import Iterable
from types import MappingProxyType

from .completion import finalize
from .faults import FaultCode, ValidationError
from .i18n import localize
from .tokenizer import split
from .utils import *

logger = logging.getLogger(__name__)

_registry = {}

registry = MappingProxyType(_registry)
"""Read-only view of every registered normalizer class, keyed by typename."""


class NormalizerType(type):
    """
    Metaclass that registers normalizers and makes them introspectable.

    Responsibilities
    - Derive __typename__ from the class name ("KeyValueList" -> "key-value-list",
      "JSONInput" -> "json-input") for messages, repr and the registry.
    - Expose the names listed in __introspectable__ as read-only properties
      mirroring the private "_<name>" fields.
    - Provide stable __repr__/__rich_repr__ implementations.
    - Register the class unless it is declared with abstract=True.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, *, abstract=False, **options):
        typename = re.sub(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])", "-", name).lower()
        if not abstract and typename in _registry:
            raise TypeError(f"normalizer {typename!r} is already registered")

        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": typename,
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
            **options,
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation, e.g. enum(allowed_values=('a', 'b')).
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        if not abstract:
            _registry[typename] = self

        return self


def _reject(code, title, hint, message, /):
    """
    Build the ValidationError raised for a rejected value.
    """
    logger.debug("value rejected (%s)", code.name.lower())
    return ValidationError(message, code=code, title=title, hint=hint)


def _expand(path, /):
    """
    Resolve a user path to an absolute one ("~" and relative segments expanded).
    """
    return os.path.abspath(os.path.expanduser(path or ""))


def _quoted(values, /):
    return ", ".join(f"'{value}'" for value in values)


def _sanitize_allowed_values(cls, allowed_values, /):
    """
    Internal: validate the allowed values of Enum/EnumList.

    - must be an iterable of strings (a bare string is rejected).
    - must contain at least one value.
    - duplicates are rejected; the order of declaration is kept.
    """
    if isinstance(allowed_values, str) or not isinstance(allowed_values, Iterable):
        raise TypeError(f"{cls.__typename__} 'allowed_values' must be an iterable of strings")

    sanitized = []
    for value in allowed_values:
        if not isinstance(value, str):
            raise TypeError(f"{cls.__typename__} 'allowed_values' must be an iterable of strings")
        elif value in sanitized:
            raise ValueError(f"{cls.__typename__} 'allowed_values' cannot contain duplicates")
        sanitized.append(value)

    if not sanitized:
        raise ValueError(f"{cls.__typename__} 'allowed_values' cannot be empty")
    return tuple(sanitized)


class Normalizer(metaclass=NormalizerType, abstract=True):
    """
    Base capability: raw option text in, typed value out.

    Subclasses override format() and, where meaningful, describe() and
    complete(). Instances are immutable: configuration is captured once in
    __init__ through object.__setattr__ and exposed through read-only
    properties declared in __introspectable__.
    """

    def describe(self):
        return ""

    def format(self, value, /):
        raise NotImplementedError(f"class {type(self).__name__} must implement method format")

    def complete(self, prefix, /):
        return []

    def __call__(self, value, /):
        return self.format(value)

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__typename__} normalizer is immutable")

    def __delattr__(self, name, /):
        raise AttributeError(f"{type(self).__typename__} normalizer is immutable")


class Default(Normalizer):
    def format(self, value, /):
        return value


class KeyValueList(Normalizer):
    """
    Mapping normalizer with two accepted grammars.

    Strict grammar: one or more comma-separated key=value pairs covering the
    whole input (a single trailing comma is tolerated).
    - key: any run of characters except ',' and '=' (trimmed).
    - value: a run of characters except ',' and '[' (trimmed), or a bracketed
      list "[x, y]" without nested brackets, split on commas into trimmed items
      (empty items between commas are dropped).
    - every scalar and list item loses its leading and trailing quote runs.
    - later duplicate keys overwrite earlier ones.

    When the strict grammar does not match, the input is read as JSON through
    JSONInput (so a path to a JSON file works too). When that fails as well a
    single generic ValidationError is raised.
    """

    def describe(self):
        return localize("Comma-separated list of key=value")

    def format(self, value, /):
        if not isinstance(value, str) or not value:
            return {}

        if (pairs := self._scan(value)) is not None:
            return dict(pairs)

        logger.debug("key=value grammar did not match (length=%d), trying json", len(value))
        try:
            return JSONInput().format(value)
        except ValidationError:
            raise _reject(
                FaultCode.INVALID_KEY_VALUE,
                "invalid key=value list",
                "use key=value pairs (e.g., a=1,b=[x,y]) or a JSON document",
                localize("Value must be defined as a comma-separated list of key=value or valid JSON."),
            ) from None

    @staticmethod
    def _scan(text, /):
        """
        Linear scan of the strict grammar; returns (key, value) pairs or None.
        """
        pairs = []
        index, length = 0, len(text)

        while index < length:
            # key: up to the first '=' (a ',' or the end of input means no pair)
            end = index
            while end < length and text[end] not in ",=":
                end += 1
            if end == index or end == length or text[end] != "=":
                return None
            key = text[index:end].strip()
            index = end + 1

            if index < length and text[index] == "[":
                end = index + 1
                while end < length and text[end] not in "[]":
                    end += 1
                if end == length or text[end] != "]":
                    return None
                value = [_unquote(item.strip()) for item in text[index + 1:end].split(",") if item]
                index = end + 1
            else:
                end = index
                while end < length and text[end] not in ",[":
                    end += 1
                if end == index:
                    return None
                value = _unquote(text[index:end].strip())
                index = end

            pairs.append((key, value))

            if index < length:
                if text[index] != ",":
                    return None
                index += 1

        return pairs


_QUOTES = re.compile(r"\A['\"]+|['\"]+\Z")


def _unquote(text, /):
    return _QUOTES.sub("", text)


class List(Normalizer):
    def describe(self):
        return localize(
            "Comma separated list of values. Values containing comma should be quoted or escaped with backslash"
        )

    def format(self, value, /):
        return split(value) if isinstance(value, str) and value else []


class Number(Normalizer):
    """
    Strict integer normalizer: ASCII decimal digits with an optional sign.
    """
    _INTEGER = re.compile(r"\s*[+-]?[0-9](?:_?[0-9])*\s*", re.ASCII)

    def format(self, value, /):
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str) and self._INTEGER.fullmatch(value):
            return int(value)
        raise _reject(
            FaultCode.NOT_NUMERIC,
            "numeric value required",
            "use a whole number (e.g., 42 or -7)",
            localize("Numeric value is required."),
        )


class Bool(Normalizer):
    TRUTHY = frozenset({"true", "t", "yes", "y", "1"})
    FALSY = frozenset({"false", "f", "no", "n", "0"})
    SPELLINGS = ("true/false", "yes/no", "1/0")

    def describe(self):
        return localize("One of %s.", ", ".join(self.SPELLINGS))

    def format(self, value, /):
        text = str(value).lower()
        if text in self.TRUTHY:
            return True
        if text in self.FALSY:
            return False
        raise _reject(
            FaultCode.NOT_BOOLEAN,
            "invalid boolean",
            "use yes or no",
            localize("Value must be one of %s.", ", ".join(self.SPELLINGS)),
        )

    def complete(self, prefix, /):
        return ["yes ", "no "]


class File(Normalizer):
    """
    Reads the whole file named by the value.

    The path is expanded ("~", relative segments) before reading. Missing or
    unreadable files raise the underlying OSError. Bytes that are not valid
    UTF-8 are kept as surrogate escapes, so the text encodes back to the exact
    file contents with errors="surrogateescape".
    """

    def format(self, path, /):
        return self._read(path, "surrogateescape")

    @staticmethod
    def _read(path, errors="strict", /):
        with open(_expand(path), encoding="utf-8", errors=errors, newline="") as file:
            return file.read()

    def complete(self, prefix, /):
        candidates = []
        for match in sorted(glob.glob(glob.escape(prefix or "") + "*")):
            if os.path.isdir(match):
                candidates.append(match + os.sep)
            else:
                candidates.append(match + " ")
        return candidates


def _nonfinite(literal, /):
    raise ValueError(f"{literal} is not a JSON value")


class JSONInput(File):
    """
    JSON document normalizer.

    The value is either a path to a file holding JSON, or the JSON text itself:
        /my/path/to/file.json
        '{"units": [{"name": "zip", "version": "9.0"}]}'
    """

    def format(self, value, /):
        if not isinstance(value, str):
            raise self._invalid()

        try:
            if value.strip() and os.path.exists(_expand(value)):
                logger.debug("reading json input from a file (path length=%d)", len(value))
                value = self._read(value)
            return json.loads(value, parse_constant=_nonfinite)
        except (ValueError, RecursionError):
            # undecodable file bytes and over-deep nesting count as malformed too
            raise self._invalid() from None

    @staticmethod
    def _invalid():
        return _reject(
            FaultCode.INVALID_JSON,
            "invalid json",
            "pass a JSON document or the path of a file containing one",
            localize("Unable to parse JSON input."),
        )


class Enum(Normalizer):
    __introspectable__ = (
        "allowed_values",
    )

    def __init__(self, allowed_values, /):
        object.__setattr__(self, "_allowed_values", _sanitize_allowed_values(type(self), allowed_values))

    def describe(self):
        return localize("Possible value(s): %s", _quoted(self._allowed_values))

    def format(self, value, /):
        if value in self._allowed_values:
            return value
        if len(self._allowed_values) == 1:
            message = localize("Value must be %s.", _quoted(self._allowed_values))
        else:
            message = localize("Value must be one of %s.", _quoted(self._allowed_values))
        raise _reject(FaultCode.INVALID_CHOICE, "invalid choice", "pick one of the possible values", message)

    def complete(self, prefix, /):
        return finalize(self._allowed_values)


class EnumList(Normalizer):
    """
    Comma-separated combination of allowed values.

    Items are deduplicated (first occurrence wins) and are not trimmed:
    "a, b" is rejected because " b" is not an allowed value.
    """
    __introspectable__ = (
        "allowed_values",
    )

    def __init__(self, allowed_values, /):
        object.__setattr__(self, "_allowed_values", _sanitize_allowed_values(type(self), allowed_values))

    def describe(self):
        return localize("Any combination (comma separated list) of %s", _quoted(self._allowed_values))

    def format(self, value, /):
        if not isinstance(value, str):
            return []

        items = value.split(",")
        while items and not items[-1]:
            items.pop()

        values = list(dict.fromkeys(items))
        if not all(item in self._allowed_values for item in values):
            raise _reject(
                FaultCode.INVALID_COMBINATION,
                "invalid combination",
                "separate allowed values with commas and no spaces",
                localize("Value must be a combination of %s.", _quoted(self._allowed_values)),
            )
        return values

    def complete(self, prefix, /):
        return finalize(self._allowed_values)


class DateTime(Normalizer):
    """
    Date/time normalizer producing canonical ISO 8601 text.

    Accepts "YYYY-MM-DD HH:MM:SS", "YYYY-MM-DD" and ISO 8601 forms. Values
    without an offset are taken as UTC; the result always carries one
    (e.g., "2024-01-01T10:00:00+00:00").
    """

    def describe(self):
        return localize("Date and time in YYYY-MM-DD HH:MM:SS or ISO 8601 format")

    def format(self, value, /):
        if value and isinstance(value, str):
            try:
                parsed = datetime.datetime.fromisoformat(value.strip())
            except ValueError:
                pass
            else:
                if parsed.tzinfo is None:
                    parsed = parsed.replace(tzinfo=datetime.timezone.utc)
                return parsed.isoformat()
        raise _reject(
            FaultCode.INVALID_DATE,
            "invalid date",
            "use YYYY-MM-DD HH:MM:SS or ISO 8601 (e.g., 2024-01-01T10:00:00Z)",
            localize("'%s' is not a valid date.", "" if value is None else value),
        )


def lookup(name, /):
    """
    Return the normalizer class registered under a typename (e.g., "enum-list").
    """
    if not isinstance(name, str):
        raise TypeError("lookup() argument must be a string")
    try:
        return _registry[name]
    except KeyError:
        raise KeyError(f"unknown normalizer {name!r}") from None


def normalizer(name, /, *args, **kwargs):
    """
    Build a registered normalizer by typename, forwarding construction arguments.

        >>> normalizer("enum", ["json", "yaml"])
        enum(allowed_values=('json', 'yaml'))
    """
    return lookup(name)(*args, **kwargs)


__all__ = (
    # Capability
    "Normalizer",

    # Normalizers
    "Default",
    "KeyValueList",
    "List",
    "Number",
    "Bool",
    "File",
    "JSONInput",
    "Enum",
    "EnumList",
    "DateTime",

    # Registration
    "registry",
    "lookup",
    "normalizer",
)
