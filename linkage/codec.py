"""Adapter between parsed JSON payloads and the resource model.

Only used by the command-line surface; the resolution stages work on model
objects and never look at raw payloads.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from linkage.errors import InvalidInputError
from linkage.models import (
    Asset,
    DeletedResource,
    Entry,
    Includes,
    LocalizableResource,
    Resource,
    ResourceArray,
    ResourceType,
    SyncedSpace,
)
from linkage.utils import get_logger

logger = get_logger(__name__)

DEFAULT_LOCALE = "en-US"

_CLASSES = {
    ResourceType.Asset: Asset,
    ResourceType.Entry: Entry,
    ResourceType.DeletedAsset: DeletedResource,
    ResourceType.DeletedEntry: DeletedResource,
}


def load_resource(obj: Dict[str, Any], *, locale: Optional[str] = None) -> Resource:
    """Build a resource from its JSON form.

    With ``locale`` set, ``fields`` are taken to be flat (query responses) and
    are stored under that locale. Without it they are per-locale mappings as
    returned by the sync API and land in ``raw_fields``.
    """
    sys = dict(obj.get("sys") or {})
    cls = _CLASSES.get(ResourceType.parse(sys.get("type")), Resource)
    if not issubclass(cls, LocalizableResource):
        return cls(sys=sys)

    fields = obj.get("fields") or {}
    if locale is None:
        return cls(sys=sys, raw_fields=dict(fields))

    code = sys.get("locale") or locale
    return cls(
        sys=sys,
        raw_fields={k: {code: v} for k, v in fields.items()},
        localized_fields={code: dict(fields)},
        locale=code,
    )


def _load_list(objs: Optional[List[dict]], locale: Optional[str]) -> Optional[List[Resource]]:
    if objs is None:
        return None
    return [load_resource(o, locale=locale) for o in objs]


def load_batch(payload: Dict[str, Any], *, locale: Optional[str] = None):
    if not isinstance(payload, dict):
        raise InvalidInputError("Invalid input: payload must be a JSON object")

    sys_type = ResourceType.parse((payload.get("sys") or {}).get("type"))
    if sys_type is ResourceType.Array and "nextSyncUrl" not in payload and "nextPageUrl" not in payload:
        code = locale or DEFAULT_LOCALE
        inc = payload.get("includes")
        includes = None
        if isinstance(inc, dict):
            includes = Includes(
                assets=_load_list(inc.get("Asset"), code),
                entries=_load_list(inc.get("Entry"), code),
            )
        batch = ResourceArray(
            items=_load_list(payload.get("items") or [], code),
            includes=includes,
            total=int(payload.get("total") or 0),
            skip=int(payload.get("skip") or 0),
            limit=int(payload.get("limit") or 100),
        )
        logger.info("codec: loaded array items=%d", len(batch.items))
        return batch

    if "items" in payload and ("nextSyncUrl" in payload or "nextPageUrl" in payload):
        batch = SyncedSpace(
            items=_load_list(payload["items"] or [], None),
            next_sync_url=payload.get("nextSyncUrl"),
            next_page_url=payload.get("nextPageUrl"),
        )
        logger.info("codec: loaded sync items=%d", len(batch.items))
        return batch

    raise InvalidInputError("Invalid input: unrecognised batch payload")


# ---------- Dump ----------

def _link_stub(res: Resource) -> dict:
    return {"sys": {"type": ResourceType.Link.value, "linkType": res.sys.get("type"), "id": res.id}}


def _dump_value(value: Any, seen: set) -> Any:
    if isinstance(value, Resource):
        return dump_resource(value, _seen=seen)
    if isinstance(value, dict):
        return {k: _dump_value(v, seen) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_dump_value(v, seen) for v in value]
    return value


def _expand(res: Resource, seen: set) -> dict:
    out: Dict[str, Any] = {"sys": dict(res.sys)}
    if isinstance(res, LocalizableResource):
        out["fields"] = {
            code: {k: _dump_value(v, seen) for k, v in fields.items()}
            for code, fields in res.localized_fields.items()
        }
    return out


def dump_resource(res: Resource, *, _seen: Optional[set] = None) -> dict:
    """Serialize a resource, expanding each linked resource once.

    Any resource already written (or pending) within the same dump comes back
    as a link stub, which keeps shared references and cycles linear in size.
    """
    seen = _seen if _seen is not None else set()
    if id(res) in seen:
        return _link_stub(res)
    seen.add(id(res))
    return _expand(res, seen)


def _dump_items(items) -> list:
    # Root items are always written in full; references to them become stubs.
    seen = {id(r) for r in items}
    return [_expand(r, seen) for r in items]


def dump_batch(batch) -> dict:
    if isinstance(batch, SyncedSpace):
        out = {"sys": {"type": ResourceType.Array.value}, "items": _dump_items(batch.items)}
        if batch.next_sync_url:
            out["nextSyncUrl"] = batch.next_sync_url
        if batch.next_page_url:
            out["nextPageUrl"] = batch.next_page_url
        return out
    if isinstance(batch, ResourceArray):
        return {
            "sys": {"type": ResourceType.Array.value},
            "total": batch.total,
            "skip": batch.skip,
            "limit": batch.limit,
            "items": _dump_items(batch.items),
        }
    raise InvalidInputError(f"Invalid input: {type(batch).__name__}")
