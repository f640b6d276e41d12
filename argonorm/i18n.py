"""
Message localization for user-facing normalizer text.

Every description and rejection message goes through _() (translate only) or
localize() (translate, then %-format). Catalogs are looked up with gettext in
the domain named by __main__.__domain__ ("argonorm" by default) under
__main__.__localedir__ (system default when absent). Missing catalogs fall
back to the untranslated template.
"""
import functools
import gettext

DOMAIN = "argonorm"


@functools.cache
def _translation(domain, localedir, /):
    return gettext.translation(domain, localedir, fallback=True)


def translation():
    """
    return the gettext translation configured by the host application.
    """
    main = __import__("__main__")
    return _translation(getattr(main, "__domain__", DOMAIN), getattr(main, "__localedir__", None))


def _(message, /):
    return translation().gettext(message)


def localize(template, /, *args):
    """
    translate a template and %-format it with the given arguments.

    without arguments the translated template is returned untouched, so
    literal '%' characters need no escaping in that case.
    """
    message = _(template)
    return message % args if args else message


__all__ = (
    "DOMAIN",
    "translation",
    "localize",
    "_",
)
