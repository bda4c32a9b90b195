"""
Unit tests for request fingerprinting.

Fingerprints key the response cache, so they must ignore argument order but
distinguish any real difference in endpoint or arguments.
"""

from wings_client.infrastructure.fingerprint import canonical_request, request_fingerprint


class TestFingerprintStability:
    """Test order independence and determinism."""

    def test_key_order_is_irrelevant(self):
        """Test permuted argument insertion order yields the same fingerprint."""
        a = {"request_id": "abc123", "local_id": "S1", "page": 2}
        b = {"page": 2, "local_id": "S1", "request_id": "abc123"}
        assert request_fingerprint("samples/discovery/results", a) == request_fingerprint(
            "samples/discovery/results", b
        )

    def test_nested_key_order_is_irrelevant(self):
        """Test sorting applies at every nesting level."""
        a = {"filters": {"quality": {"min": 10, "max": 99}, "impact": "high"}}
        b = {"filters": {"impact": "high", "quality": {"max": 99, "min": 10}}}
        assert request_fingerprint("x", a) == request_fingerprint("x", b)

    def test_none_and_empty_arguments_match(self):
        """Test missing arguments fingerprint like an empty mapping."""
        assert request_fingerprint("individuals") == request_fingerprint("individuals", {})

    def test_fixed_length_hex_digest(self):
        """Test fingerprint is a 64-char hex digest."""
        fp = request_fingerprint("individuals", {"q": 1})
        assert len(fp) == 64
        int(fp, 16)


class TestFingerprintDistinctness:
    """Test different requests produce different fingerprints."""

    def test_different_endpoints(self):
        """Test same arguments on different endpoints differ."""
        args = {"local_id": "S1"}
        assert request_fingerprint("individuals", args) != request_fingerprint("families", args)

    def test_page_number_changes_fingerprint(self):
        """Test every page gets its own fingerprint."""
        base = {"request_id": "abc123", "local_id": "S1"}
        fp1 = request_fingerprint("samples/discovery/results", base)
        fp2 = request_fingerprint("samples/discovery/results", {**base, "page": 2})
        fp3 = request_fingerprint("samples/discovery/results", {**base, "page": 3})
        assert len({fp1, fp2, fp3}) == 3

    def test_value_types_are_distinguished(self):
        """Test a string and an integer with the same text differ."""
        assert request_fingerprint("x", {"pos": 1}) != request_fingerprint("x", {"pos": "1"})

    def test_equal_sets_share_a_fingerprint(self):
        """Test set arguments are keyed by their members, not their iteration order."""
        names = [f"chr{i}" for i in range(1, 9)]
        forward = set()
        for n in names:
            forward.add(n)
        backward = set()
        for n in reversed(names):
            backward.add(n)
        backward.update({"tmp1", "tmp2"})
        backward -= {"tmp1", "tmp2"}

        assert request_fingerprint("x", {"chrom": forward}) == request_fingerprint("x", {"chrom": backward})
        assert request_fingerprint("x", {"chrom": frozenset(names)}) == request_fingerprint("x", {"chrom": forward})

    def test_list_order_matters(self):
        """Test list values keep their order (only mapping keys are sorted)."""
        assert request_fingerprint("x", {"filters": ["1", "2"]}) != request_fingerprint("x", {"filters": ["2", "1"]})


class TestCanonicalForm:
    """Test the canonical serialization itself."""

    def test_compact_sorted_json(self):
        """Test the canonical text is compact with sorted keys."""
        text = canonical_request("e", {"b": 1, "a": 2})
        assert text == '{"arguments":{"a":2,"b":1},"endpoint":"e"}'

    def test_non_json_values_are_stringified(self):
        """Test values JSON cannot encode are rendered with str()."""
        from decimal import Decimal

        text = canonical_request("e", {"af": Decimal("0.5")})
        assert '"af":"0.5"' in text

    def test_sets_serialize_sorted(self):
        """Test a set argument becomes a sorted JSON array."""
        assert canonical_request("e", {"ids": {"b", "c", "a"}}) == '{"arguments":{"ids":["a","b","c"]},"endpoint":"e"}'
