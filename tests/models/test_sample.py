"""
Tests for the Sample model
"""

import dataclasses

import pytest

from windowstats.models import Sample


class TestSample:
    def test_fields(self):
        sample = Sample(timestamp=10.0, value=2.5)
        assert sample.timestamp == 10.0
        assert sample.value == 2.5

    def test_immutable(self):
        sample = Sample(timestamp=10.0, value=2.5)
        with pytest.raises(dataclasses.FrozenInstanceError):
            sample.value = 3.0

    def test_value_equality(self):
        assert Sample(1.0, 2.0) == Sample(1.0, 2.0)
        assert Sample(1.0, 2.0) != Sample(1.0, 3.0)

    def test_age(self):
        assert Sample(timestamp=100.0, value=0.0).age(now=130.0) == 30.0
