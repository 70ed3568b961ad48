"""
Unit tests for request value parsing.
"""

import pytest
from decimal import Decimal

from supermarket_pos.utils.number_format import parse_int, parse_decimal
from supermarket_pos.utils.formatters import money


class TestParseInt:

    @pytest.mark.parametrize('value,expected', [(3, 3), ('7', 7), (' 12 ', 12), (4.0, 4), (-2, -2)])
    def test_valid_values(self, value, expected):
        assert parse_int(value, 'quantity') == expected

    @pytest.mark.parametrize('value', [None, True, 'abc', '1.5', 2.5, [1], {}])
    def test_invalid_values(self, value):
        with pytest.raises(ValueError, match='quantity must be an integer'):
            parse_int(value, 'quantity')


class TestParseDecimal:

    def test_missing_values_use_default(self):
        assert parse_decimal(None, 'discount') == Decimal('0')
        assert parse_decimal('', 'discount') == Decimal('0')

    def test_float_keeps_its_short_representation(self):
        assert parse_decimal(0.1, 'discount') == Decimal('0.1')

    def test_strings_and_negatives_accepted(self):
        assert parse_decimal('20.50', 'discount') == Decimal('20.50')
        assert parse_decimal(-5, 'discount') == Decimal('-5')

    @pytest.mark.parametrize('value', ['ten', 'NaN', 'Infinity', True])
    def test_invalid_values(self, value):
        with pytest.raises(ValueError, match='discount must be a number'):
            parse_decimal(value, 'discount')


class TestMoney:

    def test_formats_with_symbol(self):
        assert money(Decimal('1500'), 'Rs.') == 'Rs. 1,500.00'

    def test_negative_and_empty(self):
        assert money(Decimal('-20.5')) == '-20.50'
        assert money(None) == '-'
