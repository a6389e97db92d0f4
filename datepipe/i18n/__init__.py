"""
Internationalization support for datepipe.

Message translation goes through gettext; date rendering against CLDR
locale data lives in :mod:`datepipe.i18n.date_time`.
"""

import gettext
from pathlib import Path
from typing import Any, Optional

DOMAIN = "datepipe"

_translation: Optional[gettext.NullTranslations] = None


def setup_i18n(locale_dir: Optional[Path] = None, domain: str = DOMAIN) -> None:
    """
    Load the message catalog for the current environment locale.

    Args:
        locale_dir: Directory containing compiled translation files
        domain: Translation domain name
    """
    global _translation

    if locale_dir is None:
        locale_dir = Path(__file__).parent / "locale"

    # fallback=True hands back NullTranslations when no catalog exists
    _translation = gettext.translation(domain, localedir=str(locale_dir), fallback=True)


def _get_translation() -> gettext.NullTranslations:
    if _translation is None:
        setup_i18n()
    return _translation


def __(message: str) -> str:
    """
    Translate a message.

    Returns the original message when no translation is available.
    """
    return _get_translation().gettext(message)


def __x(message: str, **kwargs: Any) -> str:
    """
    Translate a message and substitute ``{name}`` parameters.

    Args:
        message: Message template to translate
        **kwargs: Parameters for substitution

    Returns:
        Translated and formatted message
    """
    translated = __(message)
    try:
        return translated.format(**kwargs)
    except (KeyError, ValueError):
        # A broken catalog entry must not hide the original message
        return message.format(**kwargs)
