"""Process-wide translation setup.

Translations are bound once per process by :func:`init`. Lookups made before
that use the default catalogue without binding it, so a configured
:func:`init` that runs later still takes effect.
"""

from __future__ import annotations

import gettext as _gettext
import logging
from pathlib import Path

from widgetforge_core.config import I18nConfig

logger = logging.getLogger(__name__)

GETTEXT_DOMAIN = "widgetforge"

_is_initialized = False
_translations: _gettext.NullTranslations = _gettext.NullTranslations()
_default_translations: _gettext.NullTranslations | None = None


def _load(cfg: I18nConfig) -> _gettext.NullTranslations:
    localedir = Path(cfg.locale_dir) if cfg.locale_dir else Path(__file__).parent / "locale"
    translations = _gettext.translation(cfg.domain, localedir=str(localedir), fallback=True)
    if isinstance(translations, _gettext.GNUTranslations):
        logger.info("Loaded '%s' translations from %s", cfg.domain, localedir)
    else:
        logger.debug("No '%s' catalogue under %s; using pass-through", cfg.domain, localedir)
    return translations


def init(config: I18nConfig | None = None) -> None:
    global _is_initialized, _translations

    if _is_initialized:
        return

    _translations = _load(config or I18nConfig(domain=GETTEXT_DOMAIN))
    _is_initialized = True


def is_initialized() -> bool:
    return _is_initialized


def reset() -> None:
    """Forget the bound catalogue. Only meant for tests."""

    global _is_initialized, _translations, _default_translations
    _is_initialized = False
    _translations = _gettext.NullTranslations()
    _default_translations = None


def _get_translations() -> _gettext.NullTranslations:
    global _default_translations

    if _is_initialized:
        return _translations
    if _default_translations is None:
        _default_translations = _load(I18nConfig(domain=GETTEXT_DOMAIN))
    return _default_translations


def gettext(message: str) -> str:
    return _get_translations().gettext(message)


def ngettext(singular: str, plural: str, n: int) -> str:
    return _get_translations().ngettext(singular, plural, n)


_ = gettext
