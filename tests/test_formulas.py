# -*- coding: utf-8 -*-
"""Tests for the formula engine."""

import math

import pytest

from lambda_em import formulas
from lambda_em.constants import FREQUENCIES_HZ
from lambda_em.formulas import FormulaResult
from lambda_em.formulas import apparent_conductivity
from lambda_em.formulas import apparent_resistivity
from lambda_em.formulas import compute
from lambda_em.formulas import exploration_depth
from lambda_em.formulas import secondary_field


def _reference(freq, rx_voltage_mv, intercoil, avg_res):
    """The formulas exactly as written in the field procedure."""
    rx_voltage_v = rx_voltage_mv / 1000
    ht = (100 * rx_voltage_v) / (4 * intercoil)
    term1 = 2 * ht
    term2 = (0.00000232 * intercoil) / math.pow(intercoil, 3)
    numerator = term1 - term2
    conductivity = (
        (numerator / 0.0000039478) * freq * math.pow(intercoil, 2)
    ) / 100000000
    resistivity = (1 / conductivity) * 10000
    depth = -(503 / 5) * math.sqrt(avg_res / freq)
    return conductivity, resistivity, depth


class TestWorkedExample:
    """813 Hz, 1.00 A, 50.00 mV, 10 m intercoil, 100 Ω·m."""

    def test_secondary_field(self):
        """Test Ht = (100 * 0.05) / (4 * 10)."""
        assert secondary_field(50.0, 10.0) == pytest.approx(0.125)

    def test_conductivity(self):
        """Test apparent conductivity in µS/cm."""
        result = compute(813, 1.0, 50.0, 10.0, 100.0)
        expected = (0.2499999768 / 0.0000039478 * 813 * 100) / 100000000
        assert result.conductivity == pytest.approx(expected, rel=1e-9)
        assert result.conductivity == pytest.approx(51.4844, rel=1e-3)

    def test_resistivity(self):
        """Test resistivity is 10000 / conductivity."""
        result = compute(813, 1.0, 50.0, 10.0, 100.0)
        assert result.resistivity == pytest.approx(10000 / result.conductivity)
        assert result.resistivity == pytest.approx(194.234, rel=1e-3)

    def test_depth(self):
        """Test exploration depth in meters."""
        result = compute(813, 1.0, 50.0, 10.0, 100.0)
        assert result.depth == pytest.approx(-35.25, rel=1e-3)
        assert result.depth == pytest.approx(-100.6 * math.sqrt(100 / 813))


class TestBitIdentity:
    """The engine must reproduce the reference expressions exactly."""

    @pytest.mark.parametrize("freq", FREQUENCIES_HZ)
    @pytest.mark.parametrize(
        ("rx_voltage", "intercoil", "avg_res"),
        [
            (50.0, 10.0, 100.0),
            (0.37, 3.66, 25.5),
            (812.45, 1.2, 1000.0),
            (-4.2, 7.0, 0.3),
        ],
    )
    def test_matches_reference(self, freq, rx_voltage, intercoil, avg_res):
        """Test every quantity is bit-identical to the reference."""
        result = compute(freq, 1.0, rx_voltage, intercoil, avg_res)
        assert tuple(result) == _reference(freq, rx_voltage, intercoil, avg_res)

    def test_deterministic(self):
        """Test repeated evaluation gives identical outputs."""
        first = compute(407, 0.98, 37.25, 3.66, 42.0)
        for _ in range(10):
            assert compute(407, 0.98, 37.25, 3.66, 42.0) == first

    def test_primary_term_uses_stated_form(self):
        """Test the primary field term is not simplified."""
        intercoil = 3.3
        stated = (0.00000232 * intercoil) / math.pow(intercoil, 3)
        conductivity = apparent_conductivity(813, 0.0, intercoil)
        expected = ((-stated / 0.0000039478) * 813 * math.pow(intercoil, 2)) / 100000000
        assert conductivity == expected


class TestExplorationDepth:
    """Tests for exploration_depth."""

    @pytest.mark.parametrize("freq", FREQUENCIES_HZ)
    @pytest.mark.parametrize("avg_res", [0.0, 0.5, 10.0, 100.0, 5000.0])
    def test_never_positive(self, freq, avg_res):
        """Test depth <= 0."""
        assert exploration_depth(avg_res, freq) <= 0

    def test_deeper_with_resistivity(self):
        """Test depth grows more negative with average resistivity."""
        depths = [exploration_depth(res, 254) for res in (1.0, 10.0, 100.0, 1000.0)]
        assert depths == sorted(depths, reverse=True)
        assert len(set(depths)) == len(depths)

    def test_deeper_at_low_frequency(self):
        """Test depth grows more negative as frequency decreases."""
        depths = [exploration_depth(100.0, freq) for freq in FREQUENCIES_HZ]
        assert depths == sorted(depths, reverse=True)

    def test_zero_resistivity(self):
        """Test a zero background resistivity gives a zero depth."""
        assert exploration_depth(0.0, 813) == 0.0


class TestNonFinite:
    """The engine does not guard against zero conductivity."""

    def test_zero_conductivity_raises(self):
        """Test resistivity of a zero conductivity divides by zero."""
        with pytest.raises(ZeroDivisionError):
            apparent_resistivity(0.0)

    def test_compute_propagates_zero_division(self, monkeypatch):
        """Test compute lets ZeroDivisionError through."""
        monkeypatch.setattr(formulas, "apparent_conductivity", lambda *_: 0.0)
        with pytest.raises(ZeroDivisionError):
            compute(813, 1.0, 50.0, 10.0, 100.0)

    def test_nan_propagates(self):
        """Test NaN inputs produce a non-finite result."""
        result = compute(813, 1.0, float("nan"), 10.0, 100.0)
        assert math.isnan(result.conductivity)
        assert not result.is_finite


class TestFormulaResult:
    """Tests for FormulaResult."""

    def test_fields(self):
        """Test named access."""
        result = FormulaResult(conductivity=1.0, resistivity=2.0, depth=-3.0)
        assert result.conductivity == 1.0
        assert result.resistivity == 2.0
        assert result.depth == -3.0
        assert result.is_finite

    def test_infinite(self):
        """Test is_finite detects infinity."""
        assert not FormulaResult(math.inf, 0.0, -1.0).is_finite
