from __future__ import annotations

import pytest

from ranlink.exceptions import ConfigurationError
from ranlink.rf.units import (
    DistanceUnit,
    FrequencyUnit,
    from_canonical_distance,
    from_canonical_frequency,
    to_canonical_distance,
    to_canonical_frequency,
)


def test_distance_conversion():
    assert to_canonical_distance(1.25, DistanceUnit.KM) == 1250.0
    assert to_canonical_distance(700, "m") == 700
    assert from_canonical_distance(1234.0, DistanceUnit.KM) == 1.23


def test_frequency_conversion():
    assert to_canonical_frequency(3.41, FrequencyUnit.GHZ) == pytest.approx(3410.0)
    assert to_canonical_frequency(1800, "MHz") == 1800
    assert from_canonical_frequency(28000.0, FrequencyUnit.GHZ) == 28.0


def test_unknown_unit():
    with pytest.raises(ConfigurationError):
        to_canonical_distance(1.0, "mi")
    with pytest.raises(ConfigurationError):
        to_canonical_frequency(1.0, "kHz")
