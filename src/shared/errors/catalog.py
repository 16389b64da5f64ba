"""Message catalog for localized error messages.

Errors look up their code here once, at construction. With no catalog
installed the lookup yields nothing and errors fall back to their rendered
envelope, so localization is strictly opt-in.

Usage:
    catalog = MessageCatalog(
        {
            "en": {"error.unauthenticated": "Please sign in."},
            "de": {"error.unauthenticated": "Bitte melden Sie sich an."},
        }
    )
    set_message_catalog(catalog)

    with use_locale("de"):
        UnauthenticatedError().localized_message  # "Bitte melden Sie sich an."
"""

import json
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path

from src.shared.context import locale_var
from src.shared.logging import get_logger

logger = get_logger(__name__)

_active_catalog: "MessageCatalog | None" = None


def normalize_locale(locale: str) -> str:
    """Normalize a locale tag: ``pt_BR`` and ``PT-br`` both become ``pt-br``."""
    return locale.strip().replace("_", "-").lower()


class MessageCatalog:
    """Per-locale mapping of error codes to user-facing messages."""

    def __init__(
        self,
        bundles: Mapping[str, Mapping[str, str]] | None = None,
        default_locale: str = "en",
    ) -> None:
        self.default_locale = normalize_locale(default_locale)
        self._bundles: dict[str, dict[str, str]] = {}
        for locale, messages in (bundles or {}).items():
            self.add(locale, messages)

    @property
    def locales(self) -> list[str]:
        """Locales with at least one bundle, sorted."""
        return sorted(self._bundles)

    def add(self, locale: str, messages: Mapping[str, str]) -> None:
        """Merge ``messages`` into the bundle for ``locale``."""
        self._bundles.setdefault(normalize_locale(locale), {}).update(messages)

    def lookup(self, code: str | None, locale: str | None = None) -> str | None:
        """Find the message for ``code``.

        Tries the exact locale, then its language part (``pt-br`` -> ``pt``),
        then the default locale.
        """
        if code is None:
            return None

        for candidate in self._candidates(locale):
            bundle = self._bundles.get(candidate)
            if bundle is not None and code in bundle:
                return bundle[code]
        return None

    def negotiate(self, accept_language: str | None) -> str:
        """Pick the best available locale for an ``Accept-Language`` header."""
        if not accept_language:
            return self.default_locale

        weighted: list[tuple[float, int, str]] = []
        for position, part in enumerate(accept_language.split(",")):
            tag, _, params = part.partition(";")
            tag = normalize_locale(tag)
            if not tag:
                continue
            quality = 1.0
            params = params.strip()
            if params.startswith("q="):
                try:
                    quality = float(params[2:])
                except ValueError:
                    continue
            if quality > 0:
                weighted.append((-quality, position, tag))

        for _, _, tag in sorted(weighted):
            if tag == "*":
                return self.default_locale
            if tag in self._bundles:
                return tag
            language = tag.split("-", 1)[0]
            if language in self._bundles:
                return language

        return self.default_locale

    def _candidates(self, locale: str | None) -> list[str]:
        candidates: list[str] = []
        if locale:
            normalized = normalize_locale(locale)
            candidates.append(normalized)
            language = normalized.split("-", 1)[0]
            if language != normalized:
                candidates.append(language)
        if self.default_locale not in candidates:
            candidates.append(self.default_locale)
        return candidates

    @classmethod
    def from_directory(cls, path: str | Path, default_locale: str = "en") -> "MessageCatalog":
        """Load every ``<locale>.json`` file in ``path``.

        Each file must hold a flat JSON object of code -> message.

        Raises:
            FileNotFoundError: if ``path`` is not a directory.
            ValueError: if a bundle is not a flat object of strings.
        """
        directory = Path(path)
        if not directory.is_dir():
            raise FileNotFoundError(f"Message catalog directory not found: {directory}")

        catalog = cls(default_locale=default_locale)
        for bundle_path in sorted(directory.glob("*.json")):
            data = json.loads(bundle_path.read_text(encoding="utf-8"))
            if not isinstance(data, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in data.items()
            ):
                raise ValueError(f"Invalid message bundle: {bundle_path}")
            catalog.add(bundle_path.stem, data)

        logger.info(
            "Message catalog loaded",
            path=str(directory),
            locales=catalog.locales,
        )
        return catalog


def set_message_catalog(catalog: MessageCatalog | None) -> None:
    """Install the process-wide catalog (``None`` disables localization)."""
    global _active_catalog
    _active_catalog = catalog


def get_message_catalog() -> MessageCatalog | None:
    """Return the installed catalog, if any."""
    return _active_catalog


def localize(code: str | None) -> str | None:
    """Look up ``code`` in the installed catalog for the current locale."""
    catalog = _active_catalog
    if catalog is None:
        return None
    return catalog.lookup(code, locale_var.get() or None)


@contextmanager
def use_locale(locale: str) -> Iterator[None]:
    """Scope the request locale for errors constructed inside the block."""
    token = locale_var.set(normalize_locale(locale))
    try:
        yield
    finally:
        locale_var.reset(token)
