"""
Math layer for concentrated liquidity positions

고정소수점 가격/틱/유동성 계산:
- types: 스케일 메타데이터를 가진 값 타입
- price_math: Price ↔ sqrtPriceX96 변환
- tick_oracle: 정규 TickMath (온체인과 비트 단위 일치)
- tick_math: 틱 변환 위임, 근사 틱, 틱 간격 정렬
- liquidity_math: 유동성 ↔ 토큰 수량
"""

from .types import (
    SqrtPriceX96,
    Price,
    ReserveAmounts,
    PriceRange,
)
from .price_math import (
    ReferencePrices,
    price_to_sqrt_price_x96,
    sqrt_price_x96_to_price,
    ratio_to_sqrt_price_x96,
    price_with_decimals_to_sqrt_price_x96,
    common_reference_prices,
    round_trip_error_bound,
)
from .tick_oracle import (
    TickMathOracle,
    CanonicalTickMath,
    CANONICAL_TICK_MATH,
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
)
from .tick_math import (
    sqrt_price_x96_to_tick,
    tick_to_sqrt_price_x96,
    price_to_tick_approx,
    align_to_spacing,
    usable_tick_bounds,
    clamp_to_usable_range,
    tick_to_price,
    get_tick_spacing_for_fee,
)
from .liquidity_math import (
    get_amount0_delta,
    get_amount1_delta,
    get_liquidity_for_amount0,
    get_liquidity_for_amount1,
    amounts_to_liquidity,
    liquidity_to_amounts,
)
