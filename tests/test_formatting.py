'''
Display formatting tests
'''

from decimal import Decimal

from scicalc.formatting import format_result, to_text


def test_small_magnitudes_are_exponential():
    assert format_result(Decimal('0.00000012345')) == '1.2345000000e-7'
    assert format_result(Decimal('-0.0000005')) == '-5.0000000000e-7'


def test_zero_is_exponential():
    assert format_result(Decimal(0)) == '0.0000000000e+0'
    assert format_result(Decimal('0E-5')) == '0.0000000000e+0'
    assert format_result(0) == '0'


def test_whole_numbers_are_grouped():
    assert format_result(Decimal('15890700')) == '15,890,700'
    assert format_result(Decimal('-1234.000')) == '-1,234'
    assert format_result(720) == '720'
    assert format_result(10 ** 20) == '100,000,000,000,000,000,000'


def test_huge_exact_integers_keep_every_digit():
    assert format_result(10 ** 21 + 1) == '1000000000000000000001'


def test_twelve_significant_digits():
    assert format_result(Decimal('3.14159265358979323846')) == \
        '3.14159265359'
    assert format_result(Decimal('0.1')) == '0.1'
    assert format_result(Decimal('2.00000000000004')) == '2'
    assert format_result(Decimal('100.000000000004')) == '100'


def test_huge_decimals_are_exponential():
    assert format_result(Decimal('1.5E+25')) == '1.5e+25'


def test_to_text():
    assert to_text(Decimal('1.500')) == '1.5'
    assert to_text(Decimal('1E+3')) == '1000'
    assert to_text(Decimal('-0.25')) == '-0.25'
    assert to_text(Decimal('1E-8')) == '0.00000001'
    assert to_text(3628800) == '3628800'
