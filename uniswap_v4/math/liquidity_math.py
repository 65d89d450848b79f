"""
Liquidity Math - 유동성 계산

집중화된 유동성(Concentrated Liquidity) 계산.
특정 가격 범위에서의 토큰 수량과 유동성 간의 변환.

References:
- Uniswap V4 Periphery: src/libraries/LiquidityAmounts.sol
- 백서 Section 6.2.1: Concentrated Liquidity

핵심 공식:
    L = Δy / (√P_upper - √P_lower)  # token1 기준
    L = Δx / (1/√P_lower - 1/√P_upper)  # token0 기준

모든 나눗셈은 내림이므로 유동성과 토큰 수량은 항상 실제보다 작거나 같게 계산됩니다.
호출자가 공급한 것보다 많은 가치를 요청하는 일이 없어야 합니다.
"""

from typing import Tuple

from ..constants import Q96, RESOLUTION, UINT128_MAX
from ..exceptions import DivisionByZero, InvalidInput, InvalidRange, LiquidityOverflow
from .types import ReserveAmounts, SqrtPriceX96, unwrap


def get_amount0_delta(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, liquidity: int) -> int:
    """유동성에서 amount0 계산 (내림)

    공식: Δx = L * (√P_b - √P_a) / (√P_a * √P_b)

    Raises:
        DivisionByZero: 하한 sqrtPriceX96이 0인 경우
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96
    if sqrt_ratio_a_x96 == 0:
        raise DivisionByZero("sqrtPriceX96이 0이면 amount0을 계산할 수 없습니다")

    numerator1 = liquidity << RESOLUTION
    numerator2 = sqrt_ratio_b_x96 - sqrt_ratio_a_x96

    return (numerator1 * numerator2 // sqrt_ratio_b_x96) // sqrt_ratio_a_x96


def get_amount1_delta(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, liquidity: int) -> int:
    """유동성에서 amount1 계산 (내림)

    공식: Δy = L * (√P_b - √P_a)
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    return liquidity * (sqrt_ratio_b_x96 - sqrt_ratio_a_x96) // Q96


def get_liquidity_for_amount0(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, amount0: int) -> int:
    """amount0에서 유동성 계산

    공식: L = Δx * √P_a * √P_b / (√P_b - √P_a)
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96
    if sqrt_ratio_a_x96 == sqrt_ratio_b_x96:
        raise DivisionByZero("동일한 sqrtPriceX96 사이의 유동성은 정의되지 않습니다")

    intermediate = sqrt_ratio_a_x96 * sqrt_ratio_b_x96 // Q96
    return amount0 * intermediate // (sqrt_ratio_b_x96 - sqrt_ratio_a_x96)


def get_liquidity_for_amount1(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, amount1: int) -> int:
    """amount1에서 유동성 계산

    공식: L = Δy / (√P_b - √P_a)
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96
    if sqrt_ratio_a_x96 == sqrt_ratio_b_x96:
        raise DivisionByZero("동일한 sqrtPriceX96 사이의 유동성은 정의되지 않습니다")

    return amount1 * Q96 // (sqrt_ratio_b_x96 - sqrt_ratio_a_x96)


def _unwrap_range(
    current: SqrtPriceX96,
    lower: SqrtPriceX96,
    upper: SqrtPriceX96
) -> Tuple[int, int, int]:
    sqrt_current = unwrap(current, SqrtPriceX96, "current")
    sqrt_lower = unwrap(lower, SqrtPriceX96, "lower")
    sqrt_upper = unwrap(upper, SqrtPriceX96, "upper")
    if sqrt_lower >= sqrt_upper:
        raise InvalidRange(f"하한이 상한보다 작아야 합니다: lower={sqrt_lower}, upper={sqrt_upper}")
    return sqrt_current, sqrt_lower, sqrt_upper


def amounts_to_liquidity(
    current: SqrtPriceX96,
    lower: SqrtPriceX96,
    upper: SqrtPriceX96,
    amount0_max: int,
    amount1_max: int
) -> int:
    """토큰 최대 수량에서 유동성 계산

    현재 가격과 범위, 두 토큰 최대 수량이 주어졌을 때
    어느 최대 수량도 넘지 않는 가장 큰 유동성을 계산합니다.

    Args:
        current: 현재 sqrtPriceX96
        lower: 하한 sqrtPriceX96
        upper: 상한 sqrtPriceX96
        amount0_max: token0 최대 수량
        amount1_max: token1 최대 수량

    Returns:
        유동성 (범위 내일 때는 두 제약 조건 중 작은 값)

    Raises:
        InvalidRange: lower >= upper 인 경우
        LiquidityOverflow: 결과가 uint128을 초과하는 경우
    """
    sqrt_current, sqrt_lower, sqrt_upper = _unwrap_range(current, lower, upper)
    if amount0_max < 0 or amount1_max < 0:
        raise InvalidInput(f"토큰 수량은 음수일 수 없습니다: {amount0_max}, {amount1_max}")

    if sqrt_current <= sqrt_lower:
        # 가격이 범위 아래: token0만 사용
        liquidity = get_liquidity_for_amount0(sqrt_lower, sqrt_upper, amount0_max)

    elif sqrt_current < sqrt_upper:
        # 가격이 범위 내: 양쪽 토큰 사용, 작은 값 반환
        liquidity0 = get_liquidity_for_amount0(sqrt_current, sqrt_upper, amount0_max)
        liquidity1 = get_liquidity_for_amount1(sqrt_lower, sqrt_current, amount1_max)
        liquidity = min(liquidity0, liquidity1)

    else:
        # 가격이 범위 위: token1만 사용
        liquidity = get_liquidity_for_amount1(sqrt_lower, sqrt_upper, amount1_max)

    if liquidity > UINT128_MAX:
        raise LiquidityOverflow(f"유동성이 uint128 범위를 초과했습니다: {liquidity}")
    return liquidity


def liquidity_to_amounts(
    current: SqrtPriceX96,
    lower: SqrtPriceX96,
    upper: SqrtPriceX96,
    liquidity: int
) -> ReserveAmounts:
    """유동성에서 토큰 수량 계산

    현재 가격과 범위, 유동성이 주어졌을 때
    포지션이 보유한 토큰 수량을 계산합니다.

    Returns:
        ReserveAmounts(amount0, amount1)
        현재 가격이 상한 이상이면 amount0 = 0, 하한 이하이면 amount1 = 0
    """
    sqrt_current, sqrt_lower, sqrt_upper = _unwrap_range(current, lower, upper)
    if liquidity < 0 or liquidity > UINT128_MAX:
        raise InvalidInput(f"유동성이 uint128 범위를 벗어났습니다: {liquidity}")

    if sqrt_current <= sqrt_lower:
        # 가격이 범위 아래: token0만 보유
        amount0 = get_amount0_delta(sqrt_lower, sqrt_upper, liquidity)
        amount1 = 0

    elif sqrt_current < sqrt_upper:
        # 가격이 범위 내: 양쪽 토큰 보유
        amount0 = get_amount0_delta(sqrt_current, sqrt_upper, liquidity)
        amount1 = get_amount1_delta(sqrt_lower, sqrt_current, liquidity)

    else:
        # 가격이 범위 위: token1만 보유
        amount0 = 0
        amount1 = get_amount1_delta(sqrt_lower, sqrt_upper, liquidity)

    return ReserveAmounts(amount0, amount1)
