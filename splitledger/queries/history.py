"""
Transaction History Filter

Merges a group's transactions and settlements into one timeline and applies
the filters from the history view (participant, kind, amount range, date
range). The result is ordered newest first.

Filtering is DETERMINISTIC and works only on the records passed in; it
never reaches back into a data source.
"""

from datetime import date, datetime, time, timezone
from typing import Iterable, Optional

from splitledger.models.ledger import (
    HistoryEntry,
    HistoryQuery,
    Settlement,
    Transaction,
)


def _settlement_timestamp(settlement: Settlement) -> Optional[datetime]:
    if settlement.created_at is not None:
        return settlement.created_at
    if settlement.settlement_date is not None:
        return datetime.combine(settlement.settlement_date, time.min, tzinfo=timezone.utc)
    return None


class HistoryFilter:
    """
    Filters merged group history.

    Entries without a timestamp sort after dated ones and are dropped
    whenever a date bound is set. Naive timestamps are read as UTC.
    """

    def run(
        self,
        query: HistoryQuery,
        transactions: Iterable[Transaction],
        settlements: Iterable[Settlement],
    ) -> list[HistoryEntry]:
        """Apply ``query`` and return matching entries, newest first."""
        entries = self._merge(transactions, settlements)
        matching = [entry for entry in entries if self._matches(query, entry)]

        matching.sort(key=self._sort_key, reverse=True)

        if query.limit is not None:
            matching = matching[:query.limit]
        return matching

    def _merge(
        self,
        transactions: Iterable[Transaction],
        settlements: Iterable[Settlement],
    ) -> list[HistoryEntry]:
        entries = [
            HistoryEntry(
                entry_type="settlement",
                amount=settlement.amount,
                created_at=_settlement_timestamp(settlement),
                settlement=settlement,
            )
            for settlement in settlements
        ]
        entries.extend(
            HistoryEntry(
                entry_type="transaction",
                amount=transaction.amount,
                created_at=transaction.created_at,
                transaction=transaction,
            )
            for transaction in transactions
        )
        return entries

    def _matches(self, query: HistoryQuery, entry: HistoryEntry) -> bool:
        if query.participant_id and not self._involves(entry, query.participant_id):
            return False

        if query.kind:
            if entry.entry_type == "settlement":
                if query.kind != "settlement":
                    return False
            elif query.kind == "settlement":
                return False
            elif query.kind != "expense" and entry.transaction.kind.value != query.kind:
                return False

        if query.min_amount is not None and entry.amount < query.min_amount:
            return False
        if query.max_amount is not None and entry.amount > query.max_amount:
            return False

        if query.date_from or query.date_to:
            if entry.created_at is None:
                return False
            entry_date = entry.created_at.date()
            if query.date_from and entry_date < query.date_from:
                return False
            if query.date_to and entry_date > query.date_to:
                return False

        return True

    def _involves(self, entry: HistoryEntry, participant_id: str) -> bool:
        if entry.settlement is not None:
            return participant_id in (
                entry.settlement.from_participant_id,
                entry.settlement.to_participant_id,
            )
        transaction = entry.transaction
        return transaction.paid_by == participant_id or any(
            split.participant_id == participant_id for split in transaction.splits
        )

    @staticmethod
    def _sort_key(entry: HistoryEntry) -> tuple:
        # Undated entries go last once the order is reversed
        if entry.created_at is None:
            return (0, datetime.min.replace(tzinfo=timezone.utc))
        created_at = entry.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return (1, created_at)


def filter_history(
    transactions: Iterable[Transaction],
    settlements: Iterable[Settlement],
    participant_id: Optional[str] = None,
    kind: Optional[str] = None,
    min_amount: Optional[float] = None,
    max_amount: Optional[float] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> list[HistoryEntry]:
    """Shortcut for building a HistoryQuery and running it."""
    query = HistoryQuery(
        participant_id=participant_id,
        kind=kind,
        min_amount=min_amount,
        max_amount=max_amount,
        date_from=date_from,
        date_to=date_to,
    )
    return HistoryFilter().run(query, transactions, settlements)
