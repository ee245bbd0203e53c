"""Tests for the ID generator utility functions."""

import re
from unittest import mock

from blog_services.utils.id_generator import generate_short_id, generate_unique_id


class TestGenerateShortId:
    """Tests for the generate_short_id function."""

    def test_default_length(self):
        """Four random bytes give eight hex characters."""
        assert len(generate_short_id()) == 8

    def test_custom_length(self):
        for num_bytes in [2, 8, 16]:
            assert len(generate_short_id(num_bytes)) == num_bytes * 2

    def test_format(self):
        assert re.match(r"^[0-9a-f]{8}$", generate_short_id()) is not None

    def test_uniqueness(self):
        ids = [generate_short_id(8) for _ in range(100)]
        assert len(ids) == len(set(ids)), "Generated IDs should be unique"


class TestGenerateUniqueId:
    """Tests for the generate_unique_id function."""

    def test_returns_free_id(self):
        assert generate_unique_id(set()) not in set()

    def test_skips_taken_ids(self):
        candidates = iter(["aaaaaaaa", "bbbbbbbb", "cccccccc"])
        with mock.patch("blog_services.utils.id_generator.secrets.token_hex", side_effect=lambda _n: next(candidates)):
            assert generate_unique_id({"aaaaaaaa", "bbbbbbbb"}) == "cccccccc"
