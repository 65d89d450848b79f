"""
Property-based tests for price and liquidity conversions.

Round trips must never over-report: converted prices, liquidity values and
token amounts are always less than or equal to the exact values.

Uses Hypothesis for property-based testing with random inputs.
"""

import pytest
from hypothesis import assume, given, settings, strategies as st

from ..math.liquidity_math import amounts_to_liquidity, liquidity_to_amounts
from ..math.price_math import (
    price_to_sqrt_price_x96,
    round_trip_error_bound,
    sqrt_price_x96_to_price,
)
from ..math.tick_oracle import get_sqrt_ratio_at_tick
from ..math.types import Price, SqrtPriceX96

ticks = st.integers(min_value=-50000, max_value=50000)
widths = st.integers(min_value=10, max_value=20000)
current_ticks = st.integers(min_value=-80000, max_value=80000)
amounts = st.integers(min_value=0, max_value=10 ** 30)


def _range(tick_lower: int, width: int):
    return (
        SqrtPriceX96(get_sqrt_ratio_at_tick(tick_lower)),
        SqrtPriceX96(get_sqrt_ratio_at_tick(tick_lower + width)),
    )


class TestPriceRoundTrip:
    """price -> sqrtPriceX96 -> price"""

    @given(raw=st.integers(min_value=0, max_value=10 ** 40))
    @settings(max_examples=200)
    def test_round_trip_never_exceeds_input(self, raw):
        price = Price(raw)
        result = sqrt_price_x96_to_price(price_to_sqrt_price_x96(price))
        assert result.value <= raw
        assert raw - result.value <= round_trip_error_bound(price)

    @given(raw=st.integers(min_value=10 ** 18, max_value=10 ** 40))
    @settings(max_examples=200)
    def test_relative_error_small(self, raw):
        """가격 1 이상에서는 상대 오차 4e-9 이하"""
        result = sqrt_price_x96_to_price(price_to_sqrt_price_x96(Price(raw)))
        assert (raw - result.value) * 10 ** 9 <= 4 * raw


class TestLiquidityProperties:
    """amounts_to_liquidity / liquidity_to_amounts"""

    @given(
        tick_lower=ticks, width=widths, current_tick=current_ticks,
        amount0=amounts, amount1=amounts, extra=amounts,
    )
    @settings(max_examples=200)
    def test_monotonic_in_amount0(self, tick_lower, width, current_tick, amount0, amount1, extra):
        lower, upper = _range(tick_lower, width)
        current = SqrtPriceX96(get_sqrt_ratio_at_tick(current_tick))

        base = amounts_to_liquidity(current, lower, upper, amount0, amount1)
        more = amounts_to_liquidity(current, lower, upper, amount0 + extra, amount1)
        assert more >= base

    @given(
        tick_lower=ticks, width=widths, current_tick=current_ticks,
        amount0=amounts, amount1=amounts, extra=amounts,
    )
    @settings(max_examples=200)
    def test_monotonic_in_amount1(self, tick_lower, width, current_tick, amount0, amount1, extra):
        lower, upper = _range(tick_lower, width)
        current = SqrtPriceX96(get_sqrt_ratio_at_tick(current_tick))

        base = amounts_to_liquidity(current, lower, upper, amount0, amount1)
        more = amounts_to_liquidity(current, lower, upper, amount0, amount1 + extra)
        assert more >= base

    @given(
        tick_lower=ticks, width=widths,
        current_sqrt=st.integers(min_value=get_sqrt_ratio_at_tick(-80000),
                                 max_value=get_sqrt_ratio_at_tick(80000)),
        amount0=amounts, amount1=amounts,
    )
    @settings(max_examples=300)
    def test_never_over_reports(self, tick_lower, width, current_sqrt, amount0, amount1):
        """유동성에서 다시 계산한 수량은 최대 수량 이하"""
        lower, upper = _range(tick_lower, width)
        current = SqrtPriceX96(current_sqrt)

        liquidity = amounts_to_liquidity(current, lower, upper, amount0, amount1)
        reported = liquidity_to_amounts(current, lower, upper, liquidity)
        assert reported.amount0 <= amount0
        assert reported.amount1 <= amount1

    @given(tick_lower=ticks, width=widths, current_tick=current_ticks,
           liquidity=st.integers(min_value=0, max_value=2 ** 100))
    @settings(max_examples=200)
    def test_single_sided_outside_range(self, tick_lower, width, current_tick, liquidity):
        lower, upper = _range(tick_lower, width)
        current = SqrtPriceX96(get_sqrt_ratio_at_tick(current_tick))
        assume(not lower < current < upper)

        amount0, amount1 = liquidity_to_amounts(current, lower, upper, liquidity)
        if current <= lower:
            assert amount1 == 0
        else:
            assert amount0 == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
