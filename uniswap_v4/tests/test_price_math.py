"""
Price Math 테스트

price_math.py 변환 함수와 types.py 값 타입을 테스트합니다.
"""

import math
from decimal import Decimal

import pytest

from ..exceptions import DivisionByZero, InvalidInput, InvalidRange
from ..math.price_math import (
    common_reference_prices,
    price_to_sqrt_price_x96,
    price_with_decimals_to_sqrt_price_x96,
    ratio_to_sqrt_price_x96,
    round_trip_error_bound,
    sqrt_price_x96_to_price,
)
from ..math.types import Price, PriceRange, SqrtPriceX96

Q96 = 2 ** 96
ONE = 10 ** 18


class TestPriceToSqrtPriceX96:
    """price_to_sqrt_price_x96 테스트"""

    def test_price_one(self):
        """가격 1은 정확히 2^96"""
        assert price_to_sqrt_price_x96(Price(ONE)) == SqrtPriceX96(Q96)

    def test_perfect_square(self):
        """2.25 = 1.5^2 이므로 정확히 1.5 × 2^96"""
        assert price_to_sqrt_price_x96(Price(225 * 10 ** 16)).value == 3 * 2 ** 95

    def test_rounds_down(self):
        """결과는 참값 이하"""
        result = price_to_sqrt_price_x96(Price(2 * ONE)).value
        assert result <= math.sqrt(2) * Q96
        assert result == (math.isqrt(2 * ONE) << 96) // 10 ** 9

    def test_zero_price(self):
        assert price_to_sqrt_price_x96(Price(0)) == SqrtPriceX96(0)

    def test_overflow(self):
        """160비트를 넘으면 실패"""
        with pytest.raises(InvalidInput):
            price_to_sqrt_price_x96(Price(Price.MAX_VALUE))

    def test_rejects_untagged_value(self):
        with pytest.raises(TypeError):
            price_to_sqrt_price_x96(ONE)
        with pytest.raises(TypeError):
            price_to_sqrt_price_x96(SqrtPriceX96(Q96))


class TestSqrtPriceX96ToPrice:
    """sqrt_price_x96_to_price 테스트"""

    def test_q96_is_one(self):
        assert sqrt_price_x96_to_price(SqrtPriceX96(Q96)) == Price(ONE)

    def test_zero(self):
        assert sqrt_price_x96_to_price(SqrtPriceX96(0)) == Price(0)

    def test_price_1_5_roundtrip(self):
        """1.5 왕복 변환은 0.001% 이내, 원래 값 이하"""
        price = Price(15 * 10 ** 17)
        sqrt_price = price_to_sqrt_price_x96(price)
        assert sqrt_price == price_to_sqrt_price_x96(price)

        result = sqrt_price_x96_to_price(sqrt_price)
        assert result.value <= price.value
        assert (price.value - result.value) * 100000 <= price.value

    def test_rejects_price(self):
        with pytest.raises(TypeError):
            sqrt_price_x96_to_price(Price(ONE))


class TestRatioToSqrtPriceX96:
    """ratio_to_sqrt_price_x96 테스트"""

    def test_equal_amounts(self):
        assert ratio_to_sqrt_price_x96(1000, 1000).value == Q96

    def test_ratio(self):
        """amount1 / amount0 = 9 / 4"""
        assert ratio_to_sqrt_price_x96(4, 9).value == 3 * 2 ** 95

    def test_zero_amount0(self):
        with pytest.raises(DivisionByZero):
            ratio_to_sqrt_price_x96(0, 5)

    def test_division_by_zero_is_zero_division_error(self):
        with pytest.raises(ZeroDivisionError):
            ratio_to_sqrt_price_x96(0, 5)

    def test_zero_price(self):
        """가격이 0으로 내림되면 실패"""
        with pytest.raises(InvalidInput):
            ratio_to_sqrt_price_x96(ONE, 0)
        with pytest.raises(InvalidInput):
            ratio_to_sqrt_price_x96(10 ** 19, 1)

    def test_negative_amount(self):
        with pytest.raises(InvalidInput):
            ratio_to_sqrt_price_x96(-1, 1)


class TestPriceWithDecimals:
    """price_with_decimals_to_sqrt_price_x96 테스트"""

    def test_same_decimals(self):
        assert price_with_decimals_to_sqrt_price_x96(Price(ONE), 18, 18).value == Q96

    def test_token1_more_decimals(self):
        """USDC(6) / WETH(18): 가격 × 10^12"""
        result = price_with_decimals_to_sqrt_price_x96(Price(ONE), 6, 18)
        assert result.value == 10 ** 6 * Q96

    def test_token1_fewer_decimals(self):
        """WETH(18) / USDC(6), 3000 USDC per WETH: 가격 ÷ 10^12"""
        result = price_with_decimals_to_sqrt_price_x96(Price(3000 * ONE), 18, 6)
        assert result == price_to_sqrt_price_x96(Price(3000 * 10 ** 6))

    def test_negative_decimals(self):
        with pytest.raises(InvalidInput):
            price_with_decimals_to_sqrt_price_x96(Price(ONE), -1, 6)


class TestCommonReferencePrices:
    """common_reference_prices 테스트"""

    def test_one_to_one(self):
        assert common_reference_prices().one_to_one.value == Q96

    def test_ordering(self):
        prices = common_reference_prices()
        assert prices.one_to_two < prices.one_to_one < prices.two_to_one

    def test_reciprocal(self):
        """2:1 × 1:2 ≈ 2^192 (내림 오차 이내)"""
        prices = common_reference_prices()
        product = prices.two_to_one.value * prices.one_to_two.value
        assert product <= 2 ** 192
        assert (2 ** 192 - product) * 10 ** 8 < 2 ** 192


class TestRoundTripErrorBound:
    """round_trip_error_bound 테스트"""

    def test_zero(self):
        assert round_trip_error_bound(Price(0)) == 0

    def test_bound_holds(self):
        for raw in [1, 7, 10 ** 9, 15 * 10 ** 17, 3 * 10 ** 18 + 1, 10 ** 30 + 12345]:
            price = Price(raw)
            result = sqrt_price_x96_to_price(price_to_sqrt_price_x96(price))
            assert 0 <= raw - result.value <= round_trip_error_bound(price)


class TestValueTypes:
    """SqrtPriceX96, Price, PriceRange 테스트"""

    def test_sqrt_price_bounds(self):
        SqrtPriceX96(SqrtPriceX96.MAX_VALUE)
        with pytest.raises(InvalidInput):
            SqrtPriceX96(-1)
        with pytest.raises(InvalidInput):
            SqrtPriceX96(2 ** 160)

    def test_rejects_non_int(self):
        with pytest.raises(TypeError):
            SqrtPriceX96(1.5)
        with pytest.raises(TypeError):
            Price(True)

    def test_scale_metadata(self):
        assert SqrtPriceX96.RESOLUTION == 96
        assert Price.DECIMALS == 18
        assert Price.SCALE == ONE

    def test_mixed_comparison(self):
        """스케일이 다른 타입끼리는 비교할 수 없음"""
        with pytest.raises(TypeError):
            SqrtPriceX96(1) < Price(2)

    def test_price_from_decimal(self):
        assert Price.from_decimal("1.5") == Price(15 * 10 ** 17)
        assert Price.from_decimal(Decimal("0.000000000000000001")) == Price(1)
        assert Price.from_decimal(2) == Price(2 * ONE)
        assert Price.from_decimal(1.5) == Price(15 * 10 ** 17)

    def test_price_from_decimal_invalid(self):
        with pytest.raises(InvalidInput):
            Price.from_decimal("abc")
        with pytest.raises(InvalidInput):
            Price.from_decimal("-1")
        with pytest.raises(InvalidInput):
            Price.from_decimal("Infinity")

    def test_price_to_decimal(self):
        assert Price(15 * 10 ** 17).to_decimal() == Decimal("1.5")

    def test_price_range(self):
        price_range = PriceRange(SqrtPriceX96(100), SqrtPriceX96(200))
        assert price_range.contains(SqrtPriceX96(150))
        assert not price_range.contains(SqrtPriceX96(100))
        assert not price_range.contains(SqrtPriceX96(200))

    def test_price_range_invalid(self):
        with pytest.raises(InvalidRange):
            PriceRange(SqrtPriceX96(200), SqrtPriceX96(100))
        with pytest.raises(InvalidRange):
            PriceRange(SqrtPriceX96(100), SqrtPriceX96(100))
        with pytest.raises(TypeError):
            PriceRange(100, 200)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
