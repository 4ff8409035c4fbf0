"""Populate an empty ledger with the seed catalogue.

History is written oldest-first through the public write operations: the
oldest revision creates the fact, each later revision is appended with the
value it introduced, and the newest one also sets the fact's final
projection (current value, confidence, importance). Each append passes its
revision time as updated_at so last_updated reflects the seeded history
rather than the moment of seeding. Related keys are linked once every fact
exists.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Union

from ledger_system.config.logging import get_logger
from ledger_system.config.seed_facts import SEED_FACTS
from ledger_system.data_management.orm import utcnow
from ledger_system.data_management.schemas import CallerContext
from ledger_system.ledger import FactLedger

logger = get_logger("seed")

SEED_USER_ID = "seed"


def _revision_attrs(revision: Dict[str, Any], now: datetime) -> Dict[str, Any]:
    attrs = {k: v for k, v in revision.items() if k != "age_hours"}
    attrs["timestamp"] = now - timedelta(hours=revision["age_hours"])
    return attrs


async def seed_database(
    ledger: FactLedger,
    caller: Union[CallerContext, str, None] = SEED_USER_ID,
    catalogue: Optional[List[Dict[str, Any]]] = None,
) -> int:
    """
    Write the seed catalogue into an empty ledger.

    Does nothing when the ledger already holds any fact, active or not.

    Args:
        ledger: Target ledger (schema must exist)
        caller: Identified caller performing the writes
        catalogue: Entries to write, defaults to SEED_FACTS

    Returns:
        Number of facts created (0 when skipped)
    """
    existing = await ledger.facts.count_facts()
    if existing:
        logger.info(f"Ledger already holds {existing} facts, skipping seed")
        return 0

    entries = SEED_FACTS if catalogue is None else catalogue
    now = utcnow()
    ids_by_key: Dict[str, str] = {}

    for entry in entries:
        history = list(reversed(entry["revisions"]))
        initial, later = history[0], history[1:]
        initial_attrs = _revision_attrs(initial, now)

        fact = await ledger.create_fact(
            caller,
            {
                "headline": entry["headline"],
                "current_value": initial["new_value"] if later else entry["current_value"],
                "category": entry["category"],
                "importance": entry["importance"],
                "confidence": entry["confidence"],
                "tags": entry["tags"],
                "last_updated": initial_attrs["timestamp"],
            },
            initial_attrs,
            entry["sources"],
        )

        for position, revision in enumerate(later, start=1):
            newest = position == len(later)
            attrs = _revision_attrs(revision, now)
            await ledger.add_revision(
                caller,
                fact.id,
                attrs,
                new_current_value=entry["current_value"] if newest else revision["new_value"],
                new_confidence=entry["confidence"] if newest else None,
                new_importance=entry["importance"] if newest else None,
                updated_at=attrs["timestamp"],
            )

        ids_by_key[entry["key"]] = fact.id
        logger.debug(f"Seeded {entry['key']}", fact_id=fact.id, revisions=len(history))

    for entry in entries:
        for related_key in entry.get("related_keys", []):
            if related_key in ids_by_key:
                await ledger.link_related_facts(
                    caller, ids_by_key[entry["key"]], ids_by_key[related_key]
                )
            else:
                logger.warning(f"Unknown related key {related_key} on {entry['key']}")

    logger.info(f"Seeded {len(ids_by_key)} facts")
    return len(ids_by_key)
