"""Review activity summary of a pull request."""

from .models import AggregateRecord, ReviewSummary


def summarize(record: AggregateRecord) -> ReviewSummary:
    """Count the reviews of a record and the distinct logins that submitted them."""
    return record.summary
