"""
Position Planning - 포지션 범위 구성

현재 가격과 토큰 최대 수량에서 민트할 포지션의 틱 범위와 유동성을 계산합니다.
계산 결과(PositionPlan)는 포지션 매니저 호출을 구성하는 쪽에서 사용합니다.

흐름:
    현재 sqrtPriceX96 → 현재 틱 → 틱 간격 정렬 (→ 범위 제한)
    → 경계 sqrtPriceX96 → 유동성 → 실제 토큰 수량
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .config import settings
from .math.liquidity_math import amounts_to_liquidity, liquidity_to_amounts
from .math.tick_math import (
    align_to_spacing,
    clamp_to_usable_range,
    sqrt_price_x96_to_tick,
    tick_to_sqrt_price_x96,
)
from .math.tick_oracle import TickMathOracle
from .math.types import PriceRange, ReserveAmounts, SqrtPriceX96

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PositionPlan:
    """민트할 포지션 정보

    - tick_lower / tick_upper: 틱 간격에 정렬된 경계 틱
    - price_range: 경계 틱의 sqrtPriceX96 (오라클 값)
    - liquidity: 최대 수량을 넘지 않는 유동성
    - amounts: 해당 유동성이 실제로 차지하는 토큰 수량
    """
    tick_lower: int
    tick_upper: int
    price_range: PriceRange
    liquidity: int
    amounts: ReserveAmounts


def plan_position(
    current_sqrt_price: SqrtPriceX96,
    amount0_max: int,
    amount1_max: int,
    tick_spacing: Optional[int] = None,
    offset_ticks: Optional[int] = None,
    clamp: Optional[bool] = None,
    oracle: Optional[TickMathOracle] = None
) -> PositionPlan:
    """현재 가격 주변의 대칭 범위로 포지션 계산

    Args:
        current_sqrt_price: 현재 sqrtPriceX96
        amount0_max: token0 최대 수량 (최소 단위)
        amount1_max: token1 최대 수량 (최소 단위)
        tick_spacing: 틱 간격 (기본값: settings.DEFAULT_TICK_SPACING)
        offset_ticks: 한쪽으로 넓힐 간격 수 (기본값: settings.DEFAULT_RANGE_OFFSET)
        clamp: 유효 틱 범위로 제한할지 여부 (기본값: settings.CLAMP_TICK_RANGE)
        oracle: 틱 오라클 (기본값: 정규 TickMath)

    Returns:
        PositionPlan

    Raises:
        InvalidRange: 범위가 비어 있는 경우 (offset_ticks = 0 등)
        OutOfTickRange: 제한하지 않은 경계 틱이 유효 범위를 벗어난 경우
    """
    if tick_spacing is None:
        tick_spacing = settings.DEFAULT_TICK_SPACING
    if offset_ticks is None:
        offset_ticks = settings.DEFAULT_RANGE_OFFSET
    if clamp is None:
        clamp = settings.CLAMP_TICK_RANGE

    current_tick = sqrt_price_x96_to_tick(current_sqrt_price, oracle)
    tick_lower, tick_upper = align_to_spacing(current_tick, tick_spacing, offset_ticks)
    if clamp:
        tick_lower, tick_upper = clamp_to_usable_range(tick_lower, tick_upper, tick_spacing)

    price_range = PriceRange(
        tick_to_sqrt_price_x96(tick_lower, oracle),
        tick_to_sqrt_price_x96(tick_upper, oracle),
    )
    liquidity = amounts_to_liquidity(
        current_sqrt_price, price_range.lower, price_range.upper, amount0_max, amount1_max
    )
    amounts = liquidity_to_amounts(
        current_sqrt_price, price_range.lower, price_range.upper, liquidity
    )

    logger.debug(
        "Planned position: tick=%d range=[%d, %d] liquidity=%d amounts=(%d, %d)",
        current_tick, tick_lower, tick_upper, liquidity, amounts.amount0, amounts.amount1,
    )
    return PositionPlan(tick_lower, tick_upper, price_range, liquidity, amounts)


def amounts_for_position(
    current_sqrt_price: SqrtPriceX96,
    tick_lower: int,
    tick_upper: int,
    liquidity: int,
    oracle: Optional[TickMathOracle] = None
) -> ReserveAmounts:
    """기존 포지션의 유동성이 현재 가격에서 차지하는 토큰 수량"""
    return liquidity_to_amounts(
        current_sqrt_price,
        tick_to_sqrt_price_x96(tick_lower, oracle),
        tick_to_sqrt_price_x96(tick_upper, oracle),
        liquidity,
    )
