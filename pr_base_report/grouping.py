"""Grouping of records by canonical base label, and ranking within each group."""

from .aliases import BaseAliasTable
from .models import AggregateRecord, Grouping


def add_to_grouping(grouping: Grouping, record: AggregateRecord, aliases: BaseAliasTable) -> str:
    """Append a record to the bucket of its canonical base label.

    Returns:
        The canonical label the record was filed under
    """
    base = aliases.normalize(record.pull_request.base_label)
    grouping.setdefault(base, []).append(record)
    return base


def rank(grouping: Grouping) -> Grouping:
    """Sort every bucket in place, oldest update first.

    ``list.sort`` is stable, so records updated at the same instant keep
    the order they were collected in. Keys are neither added nor removed.
    """
    for records in grouping.values():
        records.sort(key=lambda record: record.pull_request.updated_at)
    return grouping
