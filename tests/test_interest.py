"""
Test suite for interest module

Tests simple, hybrid and compound interest, the anticipative
back-calculation and the normalization of arithmetic failures.
All expected amounts are computed by hand to the cent.
"""

import pytest
from decimal import Decimal
from datetime import date

import interest_calculator.interest as interest_module
from interest_calculator.errors import CalculationError, CalculationFailure, ErrorCode
from interest_calculator.interest import (
    calculate, power, round_money, anticipative_amounts, MAX_AMOUNT
)
from interest_calculator.methods import Convention
from interest_calculator.results import NormalResult, AnticipativeResult
from interest_calculator.validation import CalculationRequest


def make_request(method, start, end, principal, rate, anticipative=False) -> CalculationRequest:
    return CalculationRequest(
        method=method,
        start_date=start,
        end_date=end,
        principal=Decimal(principal),
        rate_percent=Decimal(rate),
        anticipative=anticipative
    )


class TestHelpers:
    """Test rounding and power helpers"""

    def test_round_money_half_up(self):
        assert round_money(Decimal('498.6301369')) == Decimal('498.63')
        assert round_money(Decimal('0.125')) == Decimal('0.13')
        assert round_money(Decimal('0.124999')) == Decimal('0.12')

    def test_power_integer_exponent(self):
        assert power(Decimal('1.05'), Decimal('1')) == Decimal('1.05')
        assert power(Decimal('1.1'), Decimal('2')) == Decimal('1.21')

    def test_power_fractional_exponent(self):
        """Test a non-integer exponent against a known square root"""
        assert power(Decimal('1.44'), Decimal('0.5')) == Decimal('1.2')

    def test_anticipative_amounts(self):
        implied, interest = anticipative_amounts(Decimal('1100.00'), Decimal('110.00'))
        assert implied == Decimal('1000.00')
        assert interest == Decimal('100.00')

    def test_degenerate_factor(self):
        """Test that 1 + rate factor == 0 raises a dedicated error"""
        with pytest.raises(CalculationError) as exc_info:
            anticipative_amounts(Decimal('500.00'), Decimal('-500.00'))
        assert exc_info.value.code == ErrorCode.DEGENERATE_ANTICIPATIVE_FACTOR


class TestSimpleInterest:
    """Test the linear conventions"""

    def test_act_365_scenario(self):
        """Test a full-year ACT/365 calculation"""
        result = calculate(make_request("ACT/365", date(2023, 1, 1), date(2023, 12, 31), '10000.00', '5.00'))

        assert isinstance(result, NormalResult)
        assert result.days == 364
        assert result.interest == Decimal('498.63')
        assert result.new_balance == Decimal('10498.63')
        assert result.method == Convention.ACT_365
        assert result.rate_percent == Decimal('5.00')
        assert result.principal == Decimal('10000.00')

    def test_act_act(self):
        result = calculate(make_request("1", date(2023, 1, 1), date(2023, 12, 31), '10000.00', '5.00'))

        assert result.days == 364
        assert result.interest == Decimal('498.63')

    def test_act_360(self):
        result = calculate(make_request("ACT360", date(2023, 1, 1), date(2023, 4, 1), '10000.00', '3.60'))

        assert result.days == 90
        assert result.interest == Decimal('90.00')
        assert result.new_balance == Decimal('10090.00')

    def test_thirty_360(self):
        """Test 30/360 over a month ending on the last day of February"""
        result = calculate(make_request("30/360", date(2023, 1, 31), date(2023, 2, 28), '12000.00', '12.00'))

        assert result.days == 30
        assert result.interest == Decimal('120.00')

    def test_thirty_365(self):
        result = calculate(make_request("30/365", date(2023, 1, 1), date(2024, 1, 1), '3650.00', '10.00'))

        assert result.days == 360
        assert result.interest == Decimal('360.00')

    def test_zero_rate(self):
        result = calculate(make_request("ACT/365", date(2023, 1, 1), date(2023, 6, 1), '1000.00', '0'))

        assert result.interest == Decimal('0.00')
        assert result.new_balance == Decimal('1000.00')

    def test_negative_zero_rate(self):
        """Test that a -0 rate yields unsigned zero amounts"""
        result = calculate(make_request("ACT/365", date(2023, 1, 1), date(2023, 12, 31), '10000.00', '-0'))

        assert str(result.rate_percent) == "0.00"
        assert str(result.interest) == "0.00"
        assert str(result.new_balance) == "10000.00"


class TestHybridInterest:
    """Test the 30/365-6 per-year accrual"""

    def test_across_leap_year(self):
        """Test 180 grid days in 2023 over 365 plus 180 in 2024 over 366"""
        result = calculate(make_request("30/365-6", date(2023, 7, 1), date(2024, 7, 1), '10000.00', '10.00'))

        assert result.days == 360
        assert result.interest == Decimal('984.95')
        assert result.new_balance == Decimal('10984.95')

    def test_single_year(self):
        result = calculate(make_request("6", date(2023, 3, 15), date(2023, 9, 15), '1000.00', '3.65'))

        assert result.days == 180
        assert result.interest == Decimal('18.00')


class TestCompoundInterest:
    """Test compounding over the ACT/ACT fraction"""

    def test_one_exact_year(self):
        result = calculate(make_request("compound", date(2022, 12, 31), date(2023, 12, 31), '10000.00', '5.00'))

        assert result.days == 365
        assert result.interest == Decimal('500.00')
        assert result.new_balance == Decimal('10500.00')

    def test_two_exact_years(self):
        """Test a normal year followed by a leap year"""
        result = calculate(make_request("KONFORMNE", date(2022, 12, 31), date(2024, 12, 31), '10000.00', '10.00'))

        assert result.days == 731
        assert result.interest == Decimal('2100.00')

    def test_below_simple_interest_under_one_year(self):
        start, end = date(2023, 1, 1), date(2023, 7, 1)
        compound = calculate(make_request("7", start, end, '10000.00', '8.00'))
        simple = calculate(make_request("1", start, end, '10000.00', '8.00'))

        assert compound.days == simple.days
        assert compound.interest < simple.interest

    def test_above_simple_interest_over_one_year(self):
        start, end = date(2020, 3, 1), date(2025, 3, 1)
        compound = calculate(make_request("7", start, end, '10000.00', '8.00'))
        simple = calculate(make_request("1", start, end, '10000.00', '8.00'))

        assert compound.interest > simple.interest


class TestAnticipative:
    """Test the anticipative back-calculation"""

    def test_thirty_360_scenario(self):
        """Test 44 grid days at 11%: 250000 / (1 + 121/9000) = 246683.477..."""
        result = calculate(make_request(
            "30/360", date(2023, 7, 1), date(2023, 8, 15), '250000.00', '11.00', anticipative=True
        ))

        assert isinstance(result, AnticipativeResult)
        assert result.days == 44
        assert result.final_amount == Decimal('250000.00')
        assert result.implied_principal == Decimal('246683.48')
        assert result.anticipative_interest == Decimal('3316.52')

    def test_inverts_normal_mode(self):
        """Test that a one-year 10% final amount of 1100 implies 1000"""
        result = calculate(make_request(
            "ACT/365", date(2023, 1, 1), date(2024, 1, 1), '1100.00', '10.00', anticipative=True
        ))

        assert result.implied_principal == Decimal('1000.00')
        assert result.anticipative_interest == Decimal('100.00')

    def test_zero_rate(self):
        result = calculate(make_request(
            "ACT/ACT", date(2023, 1, 1), date(2024, 1, 1), '1100.00', '0', anticipative=True
        ))

        assert result.implied_principal == Decimal('1100.00')
        assert result.anticipative_interest == Decimal('0.00')

    def test_degenerate_factor_reported(self, monkeypatch):
        """Test that a zero divisor surfaces as a failure value"""
        monkeypatch.setattr(interest_module, "raw_interest", lambda request, day_count: -request.principal)

        result = calculate(make_request(
            "ACT/365", date(2023, 1, 1), date(2024, 1, 1), '1100.00', '10.00', anticipative=True
        ))

        assert isinstance(result, CalculationFailure)
        assert result.code == ErrorCode.DEGENERATE_ANTICIPATIVE_FACTOR


class TestResultProperties:
    """Test invariants that hold for every convention"""

    @pytest.mark.parametrize("convention", list(Convention))
    @pytest.mark.parametrize("start,end,principal,rate", [
        (date(2023, 1, 1), date(2023, 12, 31), '10000.00', '5.00'),
        (date(2019, 2, 28), date(2024, 2, 29), '987654.32', '13.75'),
        (date(2023, 12, 31), date(2024, 1, 1), '0.01', '100'),
        (date(1950, 6, 15), date(2050, 6, 1), '1500000.00', '2.50'),
    ])
    def test_balances_add_up(self, convention, start, end, principal, rate):
        normal = calculate(make_request(str(convention.id), start, end, principal, rate))
        anticipative = calculate(make_request(str(convention.id), start, end, principal, rate, anticipative=True))

        assert normal.days >= 0
        assert normal.interest >= 0
        assert normal.new_balance == normal.principal + normal.interest
        assert anticipative.days == normal.days
        assert anticipative.implied_principal + anticipative.anticipative_interest == anticipative.final_amount
        assert anticipative.implied_principal <= anticipative.final_amount


class TestFailures:
    """Test failures returned by calculate"""

    def test_validation_failure_returned(self):
        result = calculate(make_request("ACT/365", date(2023, 5, 1), date(2023, 5, 1), '100.00', '5.00'))

        assert isinstance(result, CalculationFailure)
        assert result.code == ErrorCode.INVALID_DATE_ORDER

    def test_rate_too_large(self):
        result = calculate(make_request("ACT/365", date(2023, 1, 1), date(2023, 12, 31), '100.00', '150'))
        assert result.code == ErrorCode.RATE_TOO_LARGE

    def test_duration_too_large(self):
        result = calculate(make_request("ACT/365", date(2000, 1, 1), date(2101, 1, 1), '100.00', '5.00'))
        assert result.code == ErrorCode.DURATION_TOO_LARGE

    def test_result_out_of_range(self):
        """Test that a new balance beyond 17 integer digits is an overflow"""
        result = calculate(make_request(
            "ACT/365", date(2023, 1, 1), date(2024, 1, 1), str(MAX_AMOUNT), '100.00'
        ))

        assert isinstance(result, CalculationFailure)
        assert result.code == ErrorCode.ARITHMETIC_OVERFLOW
        assert result.code.number == 52999

    def test_decimal_signal_normalized(self, monkeypatch):
        """Test that decimal errors inside the engine become overflow failures"""
        def explode(*args, **kwargs):
            raise interest_module.InvalidOperation()

        monkeypatch.setattr(interest_module, "compute_day_count", explode)
        result = calculate(make_request("ACT/365", date(2023, 1, 1), date(2024, 1, 1), '100.00', '5.00'))

        assert result.code == ErrorCode.ARITHMETIC_OVERFLOW
