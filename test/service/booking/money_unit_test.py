from decimal import Decimal

import pytest

from filmpass.platform.exception.exceptions import MalformedResponseError
from filmpass.service.booking.domain.value_object.money import (
    format_amount,
    to_major_units,
    to_minor_units,
)


@pytest.mark.unit
class TestToMajorUnits:
    @pytest.mark.parametrize(
        'raw, expected',
        [
            (1250, Decimal('12.50')),
            ('1250', Decimal('12.50')),
            (12.5, Decimal('12.50')),
            ('12.50', Decimal('12.50')),
            (12, Decimal('12.00')),
            (100, Decimal('100.00')),
            (101, Decimal('1.01')),
            (Decimal('9.99'), Decimal('9.99')),
        ],
    )
    def test_to_major_units(self, raw, expected: Decimal) -> None:
        """Test integers above the threshold are read as minor units"""
        assert to_major_units(raw) == expected

    def test_to_major_units__custom_threshold(self) -> None:
        """Test the threshold is configurable"""
        assert to_major_units(500, threshold=1000) == Decimal('500.00')
        assert to_major_units(1500, threshold=1000) == Decimal('15.00')

    @pytest.mark.parametrize('raw', [None, True, 'abc', '', float('nan')])
    def test_to_major_units__invalid(self, raw) -> None:
        """Test unparseable amounts fail loudly"""
        with pytest.raises(MalformedResponseError):
            to_major_units(raw)


@pytest.mark.unit
class TestDisplay:
    def test_format_amount__minor_and_major_units_render_alike(self) -> None:
        """Test 1250 and 12.5 both display as €12.50"""
        assert format_amount(1250, symbol='€') == '€12.50'
        assert format_amount(12.5, symbol='€') == '€12.50'

    def test_format_amount__uses_configured_symbol(self) -> None:
        assert format_amount(Decimal('7')) == '€7.00'

    def test_to_minor_units__rounds_half_up(self) -> None:
        assert to_minor_units(Decimal('12.5')) == 1250
        assert to_minor_units('0.005') == 1
        assert to_minor_units(25) == 2500
