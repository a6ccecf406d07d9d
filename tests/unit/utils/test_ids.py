"""Tests for id generation."""
import re

from reading_tracker.utils.ids import generate_id


def test_format():
    assert re.fullmatch(r"user-\d{13,}-[0-9a-z]{7}", generate_id("user"))


def test_prefix_with_dashes():
    assert generate_id("reading-3").startswith("reading-3-")


def test_ids_are_unique():
    assert len({generate_id("note") for _ in range(200)}) == 200
