from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

from linkage.errors import InvalidInputError
from linkage.models import Asset, Entry, Resource, ResourceArray, SyncedSpace
from linkage.utils import get_logger

logger = get_logger(__name__)

ResourceMap = Dict[str, Resource]


def _store(items: Optional[Iterable[Resource]], assets: ResourceMap, entries: ResourceMap) -> None:
    for item in items or ():
        # Later writes win, so callers seed includes first and overlay root items.
        if isinstance(item, Asset):
            assets[item.id] = item
        elif isinstance(item, Entry):
            entries[item.id] = item


def partition(batch) -> Tuple[ResourceMap, ResourceMap]:
    """Split a batch into ``id -> Asset`` and ``id -> Entry`` mappings.

    Synced spaces contribute only their items. Resource arrays are seeded from
    their includes and then overlaid with root items, so a root item replaces an
    included resource with the same id. Anything that is neither an asset nor an
    entry is ignored.
    """
    assets: ResourceMap = {}
    entries: ResourceMap = {}

    if isinstance(batch, SyncedSpace):
        items = batch.items
    elif isinstance(batch, ResourceArray):
        items = batch.items
        includes = batch.includes
        if includes is not None:
            _store(includes.assets, assets, entries)
            _store(includes.entries, assets, entries)
    else:
        raise InvalidInputError(f"Invalid input: {type(batch).__name__}")

    _store(items, assets, entries)

    logger.debug("partition: assets=%d entries=%d", len(assets), len(entries))
    return assets, entries
