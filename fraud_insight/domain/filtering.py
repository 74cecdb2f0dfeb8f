"""Filter engine - narrows a transaction snapshot by the current view parameters"""

import logging
import math
from typing import List, Optional, Sequence

from fraud_insight.domain.models import FilterCriteria, FraudStatus, SortKey, TransactionRecord
from fraud_insight.utils.date_utils import parse_bound

logger = logging.getLogger(__name__)


def _parse_amount(name: str, value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    try:
        amount = float(value)
    except ValueError:
        amount = None
    if amount is None or not math.isfinite(amount):
        logger.warning("Ignoring malformed amount bound", extra={"field": name, "value": value})
        return None
    return amount


def _parse_date(name: str, value: Optional[str]):
    try:
        return parse_bound(value)
    except ValueError:
        logger.warning("Ignoring malformed date bound", extra={"field": name, "value": value})
        return None


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


def criteria_from_query(
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    min_amount: Optional[str] = None,
    max_amount: Optional[str] = None,
    fraud_status: str = "all",
    device: Optional[str] = None,
    customer_id: Optional[str] = None,
    sort_by: str = "date",
) -> FilterCriteria:
    """
    Build FilterCriteria from raw form/query strings.

    Malformed bounds are dropped (treated as unset) instead of failing the
    whole filter pass. Unknown status or sort values fall back to defaults.
    """
    try:
        status = FraudStatus(fraud_status)
    except ValueError:
        logger.warning("Unknown fraud status, using 'all'", extra={"value": fraud_status})
        status = FraudStatus.ALL

    try:
        sort_key = SortKey(sort_by)
    except ValueError:
        logger.warning("Unknown sort key, using 'date'", extra={"value": sort_by})
        sort_key = SortKey.DATE

    return FilterCriteria(
        date_from=_parse_date("date_from", date_from),
        date_to=_parse_date("date_to", date_to),
        min_amount=_parse_amount("min_amount", min_amount),
        max_amount=_parse_amount("max_amount", max_amount),
        fraud_status=status,
        device=_clean(device),
        customer_id=_clean(customer_id),
        sort_by=sort_key,
    )


def matches(record: TransactionRecord, criteria: FilterCriteria) -> bool:
    """True when the record satisfies every set predicate"""
    if criteria.date_from is not None and record.timestamp < criteria.date_from:
        return False
    if criteria.date_to is not None and record.timestamp > criteria.date_to:
        return False

    if criteria.min_amount is not None and record.amount < criteria.min_amount:
        return False
    if criteria.max_amount is not None and record.amount > criteria.max_amount:
        return False

    if criteria.fraud_status is FraudStatus.FRAUD and record.is_fraud is not True:
        return False
    if criteria.fraud_status is FraudStatus.SAFE and record.is_fraud is not False:
        return False

    # Substring predicates are case-insensitive; records without a device never match
    if criteria.device:
        if not record.device_model or criteria.device.lower() not in record.device_model.lower():
            return False
    if criteria.customer_id:
        if criteria.customer_id.lower() not in record.customer_id.lower():
            return False

    return True


def filter_records(records: Sequence[TransactionRecord], criteria: FilterCriteria) -> List[TransactionRecord]:
    """Return a new list of records matching all criteria, in input order"""
    return [record for record in records if matches(record, criteria)]
