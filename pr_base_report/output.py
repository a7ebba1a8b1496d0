"""Output formatting and display of the open PR report."""

from datetime import datetime, timedelta, timezone
from typing import List

from .models import AggregateRecord, Grouping

DRAFT_MARKER = '📌'

# Ages above this many hours are shown in days
HOURS_BEFORE_DAYS = 72


def format_age(age: timedelta) -> str:
    """Format an age rounded to the hour, e.g. `` 5h`` or `` 12d``."""
    hours = max(0, int(age.total_seconds() / 3600 + 0.5))
    if hours > HOURS_BEFORE_DAYS:
        return f"{hours // 24:3d}d"
    return f"{hours:3d}h"


class ReportFormatter:
    """Formats and prints the grouped open PR report."""

    def __init__(self, show_labels: bool = True):
        """Initialize the report formatter.

        Args:
            show_labels: Whether to append label names after the title
        """
        self.show_labels = show_labels

    def format_record(self, record: AggregateRecord, now: datetime) -> str:
        """Format a single pull request line."""
        pr = record.pull_request
        summary = record.summary
        draft = DRAFT_MARKER if pr.draft else ''

        line = (
            f"* ⏳ {format_age(now - pr.updated_at)} {draft}`@{pr.author}` "
            f"**{record.repository.name} {pr.number}** "
            f"💬 {summary.review_count}/👤 {summary.distinct_reviewer_count} "
            f"➕ {pr.additions} ➖ {pr.deletions} 📄 {pr.changed_files} | {pr.title}"
        )
        if self.show_labels and pr.labels:
            line += f" [{', '.join(pr.labels)}]"
        return line

    def format_report(self, grouping: Grouping, now: datetime = None) -> List[str]:
        """Format the whole report, one string per output line.

        Buckets are listed by label; records keep their ranked order.
        """
        now = now or datetime.now(timezone.utc)
        lines = ["## PR per base:"]

        if not grouping:
            lines.append("\nNo open PRs found.")
            return lines

        for base in sorted(grouping):
            records = grouping[base]
            lines.append(f"### {base}: {len(records)}")
            for record in records:
                lines.append(self.format_record(record, now))

        return lines

    def print_report(self, grouping: Grouping, now: datetime = None):
        """Print the report to stdout."""
        print()
        for line in self.format_report(grouping, now):
            print(line)
