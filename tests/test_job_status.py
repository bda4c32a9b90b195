"""
Unit tests for the job status vocabulary and page metadata parsing.
"""

import pytest

from wings_client.domain.errors import JobStatusError, ProtocolError
from wings_client.domain.models import JobStatus, PageMeta, PendingJob


class TestJobStatusParse:
    """Test the wire-to-enum mapping."""

    @pytest.mark.parametrize("wire", ["ready", "completed", "READY", " Completed "])
    def test_terminal_success(self, wire):
        """Test ready/completed map to READY."""
        assert JobStatus.parse(wire) is JobStatus.READY

    @pytest.mark.parametrize("wire", ["inprogress", "not-ready", "not ready", "not_ready", "InProgress"])
    def test_in_progress_spellings(self, wire):
        """Test every observed in-progress spelling maps to IN_PROGRESS."""
        status = JobStatus.parse(wire)
        assert status is JobStatus.IN_PROGRESS
        assert status.is_pending

    def test_no_variants(self):
        """Test the empty-result sentinel is terminal."""
        status = JobStatus.parse("no-variants")
        assert status is JobStatus.NO_VARIANTS
        assert status.is_terminal

    @pytest.mark.parametrize("wire", ["failed", "error", "", "queued"])
    def test_unknown_rejected(self, wire):
        """Test values outside the vocabulary are rejected at the boundary."""
        with pytest.raises(JobStatusError):
            JobStatus.parse(wire)

    def test_missing_status_rejected(self):
        """Test a response without status is rejected."""
        with pytest.raises(JobStatusError):
            JobStatus.of({"results": []})

    def test_non_mapping_response_rejected(self):
        """Test a list response cannot carry a status."""
        with pytest.raises(ProtocolError):
            JobStatus.of(["ready"])


class TestPageMeta:
    """Test last_page normalization."""

    @pytest.mark.parametrize("raw,expected", [
        ("true", True),
        ("false", False),
        ("True", True),
        ("FALSE", False),
        (True, True),
        (False, False),
        (1, True),
        (0, False),
    ])
    def test_flag_forms(self, raw, expected):
        """Test string, boolean and numeric flags."""
        assert PageMeta.of({"meta": {"last_page": raw}}).last_page is expected

    def test_missing_meta_is_single_page(self):
        """Test a response without meta is treated as the last page."""
        assert PageMeta.of({"status": "ready", "results": []}).last_page is True

    def test_garbage_flag_rejected(self):
        """Test an unrecognized flag is a protocol error."""
        with pytest.raises(JobStatusError):
            PageMeta.of({"meta": {"last_page": "maybe"}})


class TestPendingJob:
    """Test the pending sentinel."""

    def test_to_dict(self):
        """Test PendingJob serializes its resume information."""
        job = PendingJob(endpoint="e", arguments={"request_id": "r"}, attempts=3, last_status="inprogress")
        assert job.to_dict() == {
            "endpoint": "e",
            "arguments": {"request_id": "r"},
            "attempts": 3,
            "last_status": "inprogress",
        }
