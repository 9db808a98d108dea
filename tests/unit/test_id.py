"""Tests for run identifiers."""

import pytest
from ulid import ULID

from sitegen.core.id import new_run_id


class TestGeneration:
    """Test run id generation."""

    @pytest.mark.unit
    def test_prefix_and_length(self):
        run_id = new_run_id()
        assert run_id.startswith("run_")
        assert len(run_id) == 4 + 26

    @pytest.mark.unit
    def test_ulid_part_parses(self):
        ULID.from_str(new_run_id().split("_", 1)[1])

    @pytest.mark.unit
    def test_unique(self):
        assert len({new_run_id() for _ in range(100)}) == 100
