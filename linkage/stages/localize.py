from __future__ import annotations

from typing import Iterable, Sequence

from linkage.context import Locale, Space
from linkage.models import LocalizableResource, Resource
from linkage.utils import get_logger

logger = get_logger(__name__)


def localize(resource: LocalizableResource, locales: Sequence[Locale]) -> None:
    """Rebuild ``resource.localized_fields`` from its raw per-locale fields.

    Each locale gets a fresh mapping; fields without a value for that locale are
    left out rather than set to ``None``.
    """
    raw = resource.raw_fields or {}
    for loc in locales:
        flat = {}
        for key, per_locale in raw.items():
            if not isinstance(per_locale, dict):
                continue
            value = per_locale.get(loc.code)
            if value is not None:
                flat[key] = value
        resource.localized_fields[loc.code] = flat


def localize_items(items: Iterable[Resource], space: Space) -> int:
    locales = space.locales
    codes = set(space.locale_codes())
    default = space.default_locale
    n = 0
    for item in items:
        if not isinstance(item, LocalizableResource):
            continue
        localize(item, locales)
        if default is not None and item.locale not in codes:
            item.locale = default.code
        n += 1
    logger.debug("localize: resources=%d locales=%d", n, len(locales))
    return n
