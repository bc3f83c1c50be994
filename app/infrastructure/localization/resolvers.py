"""Culture resolution logic.

Provides the culture fallback chain used by lookups and the strategies for
choosing the request culture from a cookie, a query parameter or the
Accept-Language header.
"""

from typing import List, Optional, Sequence
from urllib.parse import unquote

from infrastructure.localization.models import normalize_culture
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class CultureChainResolver:
    """Computes the ordered culture fallback candidates for a culture.

    ``chain("fr-CA", True)`` is ``["fr-CA", "fr"]``; the invariant (root)
    culture is never included. Order is significant: callers use the chain
    as a priority list.
    """

    @staticmethod
    def parent(culture: str) -> str:
        """Return the parent culture ("zh-Hant-TW" -> "zh-Hant" -> "zh" -> "")."""
        culture = normalize_culture(culture)
        if "-" not in culture:
            return ""
        return culture.rsplit("-", 1)[0]

    def chain(self, culture: str, include_parents: bool) -> List[str]:
        """Build the culture lookup chain.

        Args:
            culture: Requested culture; always the first element.
            include_parents: Append each non-empty parent culture in order.

        Returns:
            Ordered list of culture names to evaluate.
        """
        culture = normalize_culture(culture)
        result = [culture]

        if not include_parents:
            return result

        parent = self.parent(culture)
        while parent:
            result.append(parent)
            parent = self.parent(parent)

        return result


def parse_culture_cookie(cookie_value: Optional[str]) -> Optional[str]:
    """Extract the UI culture from a culture cookie value.

    Accepts the ``c=fr-FR|uic=fr-FR`` format written by the culture endpoint;
    ``uic`` wins over ``c``. URL-encoded and quoted values are accepted, and
    so is a bare culture name.
    """
    if not cookie_value or not cookie_value.strip():
        return None

    cookie_value = unquote(cookie_value.strip().strip('"'))
    parts = {}
    for segment in cookie_value.split("|"):
        if "=" in segment:
            name, value = segment.split("=", 1)
            parts[name.strip().lower()] = value.strip()

    if not parts:
        return normalize_culture(cookie_value) or None

    culture = parts.get("uic") or parts.get("c")
    return normalize_culture(culture) or None


def make_culture_cookie(culture: str) -> str:
    """Build a culture cookie value for ``culture``."""
    culture = normalize_culture(culture)
    return f"c={culture}|uic={culture}"


class RequestCultureResolver:
    """Resolves the request culture from the available request inputs.

    Resolution order:
    1. Culture cookie
    2. Query string parameter
    3. Accept-Language header
    4. Default culture

    Values from the cookie and query string are only accepted when they match
    a supported culture (case-insensitive) when a supported list is given.
    """

    def __init__(
        self,
        default_culture: str = "en-US",
        supported_cultures: Optional[Sequence[str]] = None,
    ):
        self.default_culture = normalize_culture(default_culture)
        self.supported_cultures = [
            normalize_culture(c) for c in (supported_cultures or []) if c and c.strip()
        ]
        self.log = logger.bind(default_culture=self.default_culture)

    def match_supported(self, culture: Optional[str]) -> Optional[str]:
        """Return the supported spelling of ``culture``, or None if it is not supported."""
        culture = normalize_culture(culture)
        if not culture:
            return None
        if not self.supported_cultures:
            return culture
        for supported in self.supported_cultures:
            if supported.lower() == culture.lower():
                return supported
        return None

    def resolve_from_header(self, accept_language: Optional[str]) -> Optional[str]:
        """Resolve a culture from an Accept-Language header.

        Parses "fr-CA,fr;q=0.9,en;q=0.8" and returns the first supported
        culture by descending quality. A language-only range ("fr") matches a
        supported culture with the same language ("fr-FR"). Without a
        supported list, the highest-quality specific range is returned.

        Returns:
            Matching culture, or None if nothing matches.
        """
        if not accept_language:
            return None

        preferences = []
        for part in accept_language.split(","):
            lang_range = part.split(";")[0].strip()
            if not lang_range or lang_range == "*":
                continue
            quality = 1.0
            if ";" in part and "q=" in part:
                try:
                    quality = float(part.split("q=")[1])
                except ValueError:
                    quality = 1.0
            preferences.append((lang_range, quality))

        for lang_range, _ in sorted(preferences, key=lambda x: x[1], reverse=True):
            exact = self.match_supported(lang_range)
            if exact:
                return exact

            lang_code = normalize_culture(lang_range).split("-")[0].lower()
            for supported in self.supported_cultures:
                if supported.split("-")[0].lower() == lang_code:
                    return supported

        return None

    def resolve(
        self,
        cookie_value: Optional[str] = None,
        query_culture: Optional[str] = None,
        accept_language: Optional[str] = None,
    ) -> str:
        """Resolve the request culture following the documented order."""
        from_cookie = self.match_supported(parse_culture_cookie(cookie_value))
        if from_cookie:
            self.log.debug("culture_resolved_from_cookie", culture=from_cookie)
            return from_cookie

        from_query = self.match_supported(query_culture)
        if from_query:
            self.log.debug("culture_resolved_from_query", culture=from_query)
            return from_query

        from_header = self.resolve_from_header(accept_language)
        if from_header:
            self.log.debug("culture_resolved_from_header", culture=from_header)
            return from_header

        return self.default_culture
