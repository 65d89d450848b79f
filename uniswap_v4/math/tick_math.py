"""
Tick Math - Tick ↔ Price 변환 및 틱 간격 정렬

정확한 틱 변환은 tick_oracle의 정규 오라클에 위임합니다.
price_to_tick_approx()는 오라클과 무관한 근사 경로이므로
틱 경계처럼 정확해야 하는 곳에는 사용하지 마세요.

핵심 공식:
    price = 1.0001^tick
    tick = log₁.₀₀₀₁(price) = log₂(price) / log₂(1.0001)
"""

import logging
from typing import Optional, Tuple

from ..constants import MIN_TICK, MAX_TICK, PRICE_SCALE, TICK_SPACINGS
from ..exceptions import InvalidInput, InvalidRange
from .tick_oracle import (
    CANONICAL_TICK_MATH,
    LOG_SQRT10001_MULTIPLIER,
    TickMathOracle,
    log2_x64,
)
from .types import Price, SqrtPriceX96, unwrap

logger = logging.getLogger(__name__)

# 자주 쓰는 비율의 정확한 틱 (price_raw -> tick)
_EXACT_TICKS = {
    PRICE_SCALE: 0,
    2 * PRICE_SCALE: 6931,
    PRICE_SCALE // 2: -6931,
    3 * PRICE_SCALE // 2: 4055,
    3 * PRICE_SCALE // 4: -2877,
}


def sqrt_price_x96_to_tick(
    sqrt_price_x96: SqrtPriceX96,
    oracle: Optional[TickMathOracle] = None
) -> int:
    """sqrtPriceX96에서 틱 계산 (오라클 위임, 정확)"""
    value = unwrap(sqrt_price_x96, SqrtPriceX96, "sqrt_price_x96")
    oracle = oracle or CANONICAL_TICK_MATH
    return oracle.tick_at_sqrt_price(value)


def tick_to_sqrt_price_x96(
    tick: int,
    oracle: Optional[TickMathOracle] = None
) -> SqrtPriceX96:
    """틱에서 sqrtPriceX96 계산 (오라클 위임, 정확)"""
    oracle = oracle or CANONICAL_TICK_MATH
    return SqrtPriceX96(oracle.sqrt_price_at_tick(tick))


def price_to_tick_approx(price: Price) -> int:
    """가격에서 틱을 근사 계산

    정확한 값이 아닙니다. 정수 이진 로그로 log₂(price) / log₂(1.0001)를 구하고
    0 방향으로 버린 뒤 [MIN_TICK, MAX_TICK]로 제한합니다.
    1:1, 2:1, 1:2, 1.5:1, 3:4 비율은 미리 정한 틱을 그대로 반환합니다.

    Args:
        price: 18자리 고정소수점 가격 (amount1 / amount0)

    Returns:
        근사 틱 인덱스

    Raises:
        InvalidInput: 가격이 0인 경우
    """
    price_raw = unwrap(price, Price, "price")
    if price_raw == 0:
        raise InvalidInput("가격은 양수여야 합니다")

    if price_raw in _EXACT_TICKS:
        return _EXACT_TICKS[price_raw]

    ratio_x128 = (price_raw << 128) // PRICE_SCALE
    log_2 = log2_x64(ratio_x128, 64)

    # log₂(1.0001) = 2 × log₂(sqrt(1.0001)) 이므로 Q128 결과를 한 비트 더 내림
    if log_2 >= 0:
        tick = (log_2 * LOG_SQRT10001_MULTIPLIER) >> 129
    else:
        tick = -((-log_2 * LOG_SQRT10001_MULTIPLIER) >> 129)

    return max(MIN_TICK, min(MAX_TICK, tick))


def align_to_spacing(tick: int, tick_spacing: int, offset_ticks: int) -> Tuple[int, int]:
    """틱을 간격에 맞춰 내림 정렬하고 양쪽으로 offset_ticks 간격만큼 넓힌 범위

    lower = floor(tick / spacing) * spacing - offset_ticks * spacing
    upper = floor(tick / spacing) * spacing + offset_ticks * spacing

    결과를 MIN_TICK ~ MAX_TICK으로 제한하지 않습니다. 극단 가격 근처에서는
    호출자가 clamp_to_usable_range()를 적용해야 합니다.

    Args:
        tick: 기준 틱 (보통 현재 틱)
        tick_spacing: 틱 간격 (예: 60 for 0.3% fee)
        offset_ticks: 한쪽으로 넓힐 간격 수

    Returns:
        (lower_tick, upper_tick)
    """
    if tick_spacing <= 0:
        raise InvalidInput(f"틱 간격은 양수여야 합니다: {tick_spacing}")
    if offset_ticks < 0:
        raise InvalidInput(f"offset은 음수일 수 없습니다: {offset_ticks}")

    # Python의 floor division은 음수 틱도 -∞ 방향으로 내림
    aligned = (tick // tick_spacing) * tick_spacing
    width = offset_ticks * tick_spacing
    return aligned - width, aligned + width


def usable_tick_bounds(tick_spacing: int) -> Tuple[int, int]:
    """틱 간격의 배수 중 유효 범위 안에 있는 최소/최대 틱"""
    if tick_spacing <= 0:
        raise InvalidInput(f"틱 간격은 양수여야 합니다: {tick_spacing}")
    min_usable = -(-MIN_TICK // tick_spacing) * tick_spacing
    max_usable = (MAX_TICK // tick_spacing) * tick_spacing
    return min_usable, max_usable


def clamp_to_usable_range(tick_lower: int, tick_upper: int, tick_spacing: int) -> Tuple[int, int]:
    """정렬된 틱 범위를 사용 가능한 틱 범위로 제한

    Raises:
        InvalidRange: 제한 후 lower >= upper 인 경우
    """
    min_usable, max_usable = usable_tick_bounds(tick_spacing)
    lower = max(tick_lower, min_usable)
    upper = min(tick_upper, max_usable)

    if (lower, upper) != (tick_lower, tick_upper):
        logger.warning(
            "Tick range [%d, %d] clamped to [%d, %d] (spacing %d)",
            tick_lower, tick_upper, lower, upper, tick_spacing,
        )

    if lower >= upper:
        raise InvalidRange(f"제한된 틱 범위가 비어 있습니다: [{lower}, {upper}]")
    return lower, upper


def tick_to_price(tick: int, token0_decimals: int = 18, token1_decimals: int = 18) -> float:
    """틱을 human-readable 가격으로 변환 (리포팅용 float)

    price = 1.0001^tick × 10^(token0_decimals - token1_decimals)
    """
    return 1.0001 ** tick * (10 ** (token0_decimals - token1_decimals))


def get_tick_spacing_for_fee(fee_tier: int) -> int:
    """수수료 티어에 해당하는 기본 틱 간격 반환"""
    if fee_tier not in TICK_SPACINGS:
        raise InvalidInput(f"지원하지 않는 수수료 티어: {fee_tier}")
    return TICK_SPACINGS[fee_tier]
