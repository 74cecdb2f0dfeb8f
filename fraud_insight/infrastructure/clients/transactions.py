"""Transaction API client - paged snapshots and single-transaction analysis"""

from typing import Any, List

from fraud_insight.domain.exceptions import InvalidPayloadError
from fraud_insight.domain.models import TransactionAnalysis, TransactionRecord
from fraud_insight.infrastructure.clients.base import ApiClient
from fraud_insight.infrastructure.clients import parsing


def _items(data: Any) -> list:
    # Lists arrive either bare or as a page object with "content"
    if data is None:
        return []
    if isinstance(data, dict):
        return data.get("content") or []
    return data


class TransactionClient(ApiClient):
    """Client for the /transactions endpoints"""

    async def list_transactions(self, page: int = 0, size: int = 50) -> List[TransactionRecord]:
        data = await self._fetch_json("GET", "/transactions", params={"page": page, "size": size})
        try:
            return parsing.parse_transactions(_items(data))
        except (AttributeError, TypeError) as e:
            raise InvalidPayloadError(f"Invalid transaction list: {e}") from e

    async def get_fraudulent_transactions(self) -> List[TransactionRecord]:
        data = await self._fetch_json("GET", "/transactions/fraudulent")
        try:
            return parsing.parse_transactions(_items(data))
        except (AttributeError, TypeError) as e:
            raise InvalidPayloadError(f"Invalid transaction list: {e}") from e

    async def analyze_transaction(self, transaction_id: int) -> TransactionAnalysis:
        data = await self._fetch_json("POST", f"/transactions/{transaction_id}/analyze")
        try:
            return parsing.parse_analysis(data)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise InvalidPayloadError(f"Invalid analysis data: {e}") from e
