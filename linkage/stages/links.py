from __future__ import annotations

import typing as t
from dataclasses import dataclass

from linkage.models import LocalizableResource, Resource, ResourceType
from linkage.utils import get_logger

logger = get_logger(__name__)

ResourceMap = t.Dict[str, Resource]


@dataclass
class LinkStats:
    resolved: int = 0
    unresolved: int = 0
    dropped: int = 0

    def add(self, other: "LinkStats") -> None:
        self.resolved += other.resolved
        self.unresolved += other.unresolved
        self.dropped += other.dropped


# ---------- Matching ----------

def link_target(value: t.Any) -> t.Optional[t.Tuple[t.Optional[ResourceType], t.Any]]:
    """Return ``(linkType, id)`` if ``value`` is a link placeholder, else ``None``.

    An unrecognised ``linkType`` comes back as ``None`` in the first slot; the
    value is still a link, it just cannot match anything.
    """
    if not isinstance(value, dict):
        return None
    sys = value.get("sys")
    if not isinstance(sys, dict):
        return None
    if ResourceType.parse(sys.get("type")) is not ResourceType.Link:
        return None
    return ResourceType.parse(sys.get("linkType")), sys.get("id")


def is_link(value: t.Any) -> bool:
    return link_target(value) is not None


def match_link(placeholder: t.Any, assets: ResourceMap, entries: ResourceMap) -> t.Optional[Resource]:
    target = link_target(placeholder)
    if target is None:
        return None
    link_type, rid = target
    if link_type is ResourceType.Asset:
        return assets.get(rid)
    if link_type is ResourceType.Entry:
        return entries.get(rid)
    return None


# ---------- Resolution ----------

def _resolve_sequence(
    seq: t.Sequence[t.Any],
    assets: ResourceMap,
    entries: ResourceMap,
    nullify_unresolved: bool,
    stats: LinkStats,
) -> t.List[t.Any]:
    out: t.List[t.Any] = []
    for item in seq:
        if not is_link(item):
            out.append(item)
            continue
        match = match_link(item, assets, entries)
        if match is not None:
            out.append(match)
            stats.resolved += 1
        elif nullify_unresolved:
            stats.dropped += 1
        else:
            out.append(item)
            stats.unresolved += 1
    return out


def resolve_fields(
    fields: t.Dict[str, t.Any],
    assets: ResourceMap,
    entries: ResourceMap,
    *,
    nullify_unresolved: bool = False,
) -> LinkStats:
    """Resolve links in a single locale's field mapping, in place."""
    stats = LinkStats()
    remove: t.List[str] = []

    for key, value in list(fields.items()):
        if isinstance(value, dict):
            if not is_link(value):
                continue
            match = match_link(value, assets, entries)
            if match is not None:
                fields[key] = match
                stats.resolved += 1
            elif nullify_unresolved:
                remove.append(key)
            else:
                stats.unresolved += 1
        elif isinstance(value, (list, tuple)):
            fields[key] = _resolve_sequence(value, assets, entries, nullify_unresolved, stats)

    for key in remove:
        del fields[key]
    stats.dropped += len(remove)
    return stats


def resolve_links(
    resource: Resource,
    assets: ResourceMap,
    entries: ResourceMap,
    *,
    nullify_unresolved: bool = False,
) -> LinkStats:
    """Resolve links across every locale of ``resource``."""
    stats = LinkStats()
    if not isinstance(resource, LocalizableResource):
        return stats
    for code, fields in resource.localized_fields.items():
        s = resolve_fields(fields, assets, entries, nullify_unresolved=nullify_unresolved)
        if s.unresolved or s.dropped:
            logger.debug(
                "links: entry=%s locale=%s unresolved=%d dropped=%d",
                resource.id,
                code,
                s.unresolved,
                s.dropped,
            )
        stats.add(s)
    return stats
