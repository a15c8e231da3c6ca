"""Classification of untagged campaign-finance records.

Extraction sources return campaign-finance records without a
discriminant, so each record is assigned to a bucket by inspecting its
keys. The rules are evaluated in order and the first match wins.
"""

from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from typing import Any

from region_provider.observability.logging import get_logger
from region_provider.plugins.base import CampaignFinanceResult

logger = get_logger(__name__)


class CampaignFinanceKind(str, Enum):
    """Kind of campaign-finance record."""
    CONTRIBUTION = "contribution"
    EXPENDITURE = "expenditure"
    INDEPENDENT_EXPENDITURE = "independent_expenditure"
    COMMITTEE = "committee"


def _has(item: Mapping[str, Any], *keys: str) -> bool:
    return all(item.get(key) is not None for key in keys)


# Precedence order matters: first match wins.
CLASSIFICATION_RULES: tuple[tuple[CampaignFinanceKind, Callable[[Mapping[str, Any]], bool]], ...] = (
    (CampaignFinanceKind.CONTRIBUTION, lambda item: _has(item, "donorName")),
    (CampaignFinanceKind.EXPENDITURE, lambda item: _has(item, "payeeName")),
    (
        CampaignFinanceKind.INDEPENDENT_EXPENDITURE,
        lambda item: _has(item, "supportOrOppose", "committeeName"),
    ),
    (CampaignFinanceKind.COMMITTEE, lambda item: _has(item, "sourceSystem", "type")),
)

_BUCKETS = {
    CampaignFinanceKind.CONTRIBUTION: "contributions",
    CampaignFinanceKind.EXPENDITURE: "expenditures",
    CampaignFinanceKind.INDEPENDENT_EXPENDITURE: "independent_expenditures",
    CampaignFinanceKind.COMMITTEE: "committees",
}


def classify_item(item: Any) -> CampaignFinanceKind | None:
    """Classify one raw record.

    Args:
        item: Raw extracted record

    Returns:
        The record kind, or None when the record matches no known shape
    """
    if not isinstance(item, Mapping):
        return None

    matches = [kind for kind, predicate in CLASSIFICATION_RULES if predicate(item)]
    if not matches:
        return None

    if len(matches) > 1:
        logger.debug(
            "campaign_finance_item_ambiguous",
            matched=[kind.value for kind in matches],
            chosen=matches[0].value,
        )
    return matches[0]


def partition_campaign_finance(items: Iterable[Any]) -> CampaignFinanceResult:
    """Partition raw records into committees, contributions, expenditures
    and independent expenditures, preserving input order within each bucket.

    Records matching no shape are dropped.
    """
    result = CampaignFinanceResult()
    dropped = 0

    for item in items:
        kind = classify_item(item)
        if kind is None:
            dropped += 1
            logger.debug(
                "campaign_finance_item_unclassified",
                keys=[str(key) for key in item] if isinstance(item, Mapping) else type(item).__name__,
            )
            continue
        getattr(result, _BUCKETS[kind]).append(item)

    if dropped:
        logger.debug("campaign_finance_items_dropped", count=dropped)
    return result
