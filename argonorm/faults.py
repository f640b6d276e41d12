"""
Argonorm faults (value rejections) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every rejection a
  normalizer can produce. Codes are grouped by domain to keep copy consistent
  and make logs/searches predictable.
- NormalizerException: base type that carries message + options and knows how
  to render itself through rich.
- ValidationError: the single rejection kind raised by normalizers. It is also
  a ValueError, so argparse-like front ends treat it as a conversion failure.
- trigger(): central entry point to surface a fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Integration
- Normalizers raise ValidationError with a localized message and code/title/hint options.
- The argument front end catches it and either re-raises or calls trigger(fault, shell=True)
  to print it on stderr and exit with status 1.
- I/O failures (missing or unreadable files) are not faults; they propagate as OSError.
"""
import copy
import os.path
import sys
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
    canonical fault codes raised by normalizers (stable identifiers).

    grouping (by high-level domain)
    - structured input (2110x)
      • INVALID_KEY_VALUE, INVALID_JSON, ILLEGAL_QUOTING
    - scalars (2111x)
      • NOT_NUMERIC, NOT_BOOLEAN, INVALID_DATE
    - membership (2112x)
      • INVALID_CHOICE, INVALID_COMBINATION
    """
    # --- structured input (21xxx) ---
    INVALID_KEY_VALUE   = 21101
    INVALID_JSON        = 21102
    ILLEGAL_QUOTING     = 21103

    # --- scalars (21xxx) ---
    NOT_NUMERIC         = 21111
    NOT_BOOLEAN         = 21112
    INVALID_DATE        = 21113

    # --- membership (21xxx) ---
    INVALID_CHOICE      = 21121
    INVALID_COMBINATION = 21122

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class NormalizerException(Exception):
    """
    base fault: a user-facing message plus read-only rendering options.

    options understood by the renderer
    - code (FaultCode), title (str), hint (str)
    - fancy (bool): render inside a panel
    - colorful (bool): apply styles (default True)
    - shell (bool): print and exit instead of raising when triggered
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if self.message is not Unset else ""

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", os.path.basename(sys.argv[0])), styler("prog-name"))

        header = [prog]
        if (code := self.options.get("code")) is not None:
            header.extend((" — ", text(code.normalize(), styler("code"))))
        if title := self.options.get("title"):
            header.extend((" | ", text(title.title(), styler("error-title"))))
        header = Text.assemble("[ ", *header, " ]")

        message = text(str(self), styler("error-message"))
        parts = [message]
        if hint := self.options.get("hint"):
            parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            return Panel(Group(*parts), title=header, title_align="left")

        return Group(header, *parts)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ValidationError(NormalizerException, ValueError): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see NormalizerException).
    - options are merged into a copy of the fault before triggering.
    - in shell mode, rendering happens via the rich stderr console followed by
      exit status 1; otherwise the fault is raised.
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
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "NormalizerException",
    "ValidationError",
    "trigger",
    "getdoc",
)
