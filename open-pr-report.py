#!/usr/bin/env python3
"""
Open PR Base Report
Lists open pull requests across an organization's repositories, grouped by base branch.
"""

import sys

from pr_base_report.cli import main


if __name__ == "__main__":
    sys.exit(main())
