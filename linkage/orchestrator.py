import json
import time
import uuid
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Sequence

import yaml

from linkage.codec import dump_batch, load_batch
from linkage.context import ResolutionContext, Space
from linkage.models import SyncedSpace
from linkage.stages.links import LinkStats, resolve_links
from linkage.stages.localize import localize_items
from linkage.stages.partition import partition
from linkage.utils import get_logger, load_file, validate_config, write_output

logger = get_logger(__name__)


def resolve_batch(batch, context: ResolutionContext):
    """Run one resolution pass over ``batch`` and return it, mutated in place.

    Phases run strictly in order: partition, localize (synced spaces only), then
    link resolution over every entry. Raises ``InvalidInputError`` for an
    unsupported batch shape before anything is mutated.
    """
    t0 = time.monotonic()
    assets, entries = partition(batch)

    if isinstance(batch, SyncedSpace):
        localize_items(batch.items, context.space)

    stats = LinkStats()
    for entry in entries.values():
        stats.add(resolve_links(entry, assets, entries, nullify_unresolved=context.nullify_unresolved))

    logger.info(
        "resolve: assets=%d entries=%d resolved=%d unresolved=%d dropped=%d took_ms=%d",
        len(assets),
        len(entries),
        stats.resolved,
        stats.unresolved,
        stats.dropped,
        int((time.monotonic() - t0) * 1000),
    )
    return batch


def submit_batch(executor: Executor, batch, context: ResolutionContext) -> Future:
    """Schedule one resolution pass as a single task on a caller-owned executor."""
    return executor.submit(resolve_batch, batch, context)


def resolve_many(batches: Sequence[Any], context: ResolutionContext, *, max_workers: Optional[int] = None) -> List[Any]:
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [submit_batch(pool, b, context) for b in batches]
        return [f.result() for f in futures]


# ---------- Config-driven runs ----------

def _apply_overrides(cfg: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> None:
    if not overrides:
        return

    if overrides.get("nullify_unresolved") is not None:
        res = cfg.setdefault("resolution", {})
        res["nullify_unresolved"] = bool(overrides["nullify_unresolved"])
    if overrides.get("output_dir") is not None:
        out = cfg.setdefault("output", {})
        out["dir"] = overrides["output_dir"]


def build_context(cfg: Dict[str, Any]) -> ResolutionContext:
    return ResolutionContext(
        space=Space.model_validate(cfg.get("space") or {}),
        nullify_unresolved=bool((cfg.get("resolution") or {}).get("nullify_unresolved", False)),
    )


def _execute(cfg: Dict[str, Any], input_path: str, run_id: str, locale: Optional[str]) -> str:
    context = build_context(cfg)
    logger.info(
        "config loaded space=%s locales=%s nullify_unresolved=%s",
        context.space.id,
        ",".join(context.space.locale_codes()),
        context.nullify_unresolved,
    )

    if locale is None and context.space.default_locale is not None:
        locale = context.space.default_locale.code

    payload = json.loads(load_file(input_path))
    batch = load_batch(payload, locale=locale)
    resolve_batch(batch, context)

    out_cfg = cfg.get("output") or {"dir": "out"}
    path = write_output(dump_batch(batch), out_cfg, stem=f"resolved_{run_id}")
    logger.info("output written path=%s", path)
    return path


def run_once(
    config_path: str,
    input_path: str,
    *,
    locale: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> str:
    """Resolve the batch stored at ``input_path`` and return the written file path."""
    run_id = uuid.uuid4().hex[:8]
    logger.info("=== run start id=%s ===", run_id)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
        validate_config(cfg)
        _apply_overrides(cfg, overrides)
        return _execute(cfg, input_path, run_id, locale)

    except Exception as e:
        logger.error("Resolution failed: %s", e)
        raise
    finally:
        logger.info("=== run end id=%s ===", run_id)
