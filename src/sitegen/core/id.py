"""Run identifiers.

Every compilation session gets a ULID-based run id so log lines from one run
can be correlated. ULIDs sort by creation time, which keeps run ids
chronological in log aggregation.
"""

from typing import NewType
from ulid import ULID

RunID = NewType("RunID", str)
"""Compilation run identifier"""


class Prefix:
    """ID prefix constants."""

    RUN = "run"


def new_run_id() -> RunID:
    """Generate new run ID."""
    return RunID(f"{Prefix.RUN}_{ULID()}")
