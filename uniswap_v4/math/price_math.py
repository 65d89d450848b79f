"""
Price Math - Price ↔ sqrtPriceX96 변환

Uniswap의 가격은 sqrtPriceX96 형식으로 저장됩니다.
sqrtPriceX96 = sqrt(price) * 2^96

모든 변환은 정수 연산만 사용하며 항상 내림(floor)합니다.
결과는 수학적 참값보다 크지 않으므로, 왕복 변환은 정확히 일치하지 않고
round_trip_error_bound() 만큼의 손실이 생길 수 있습니다.

핵심 공식:
    sqrtPriceX96 = floor(sqrt(price_raw)) * 2^96 / 10^9
    price_raw = (sqrtPriceX96 * 10^9 / 2^96)^2
"""

import math
from typing import NamedTuple

from ..constants import RESOLUTION, SQRT_PRICE_SCALE
from ..exceptions import DivisionByZero, InvalidInput
from .types import Price, SqrtPriceX96, unwrap


class ReferencePrices(NamedTuple):
    """자주 쓰는 기준 sqrtPriceX96 값"""
    one_to_one: SqrtPriceX96
    two_to_one: SqrtPriceX96
    one_to_two: SqrtPriceX96


def price_to_sqrt_price_x96(price: Price) -> SqrtPriceX96:
    """가격을 sqrtPriceX96으로 변환

    정밀도를 위해 2^96을 먼저 곱한 뒤 10^9로 나눕니다.

    Args:
        price: 18자리 고정소수점 가격

    Returns:
        sqrtPriceX96 (내림)

    Raises:
        InvalidInput: 결과가 160비트를 초과하는 경우
    """
    price_raw = unwrap(price, Price, "price")
    sqrt_price_x96 = (math.isqrt(price_raw) << RESOLUTION) // SQRT_PRICE_SCALE
    return SqrtPriceX96(sqrt_price_x96)


def sqrt_price_x96_to_price(sqrt_price_x96: SqrtPriceX96) -> Price:
    """sqrtPriceX96을 가격으로 변환

    price_to_sqrt_price_x96()의 정확한 역함수가 아닙니다 (양방향 모두 내림).
    """
    value = unwrap(sqrt_price_x96, SqrtPriceX96, "sqrt_price_x96")
    sqrt_price = (value * SQRT_PRICE_SCALE) >> RESOLUTION
    return Price(sqrt_price * sqrt_price)


def ratio_to_sqrt_price_x96(amount0: int, amount1: int) -> SqrtPriceX96:
    """토큰 수량 비율(amount1 / amount0)에서 sqrtPriceX96 계산

    Raises:
        DivisionByZero: amount0이 0인 경우
        InvalidInput: 수량이 음수이거나 비율이 0으로 내림되는 경우
    """
    if amount0 < 0 or amount1 < 0:
        raise InvalidInput(f"토큰 수량은 음수일 수 없습니다: amount0={amount0}, amount1={amount1}")
    if amount0 == 0:
        raise DivisionByZero("amount0이 0이면 가격을 정의할 수 없습니다")

    price_raw = amount1 * Price.SCALE // amount0
    if price_raw == 0:
        raise InvalidInput(f"비율이 0입니다: amount0={amount0}, amount1={amount1}")

    return price_to_sqrt_price_x96(Price(price_raw))


def price_with_decimals_to_sqrt_price_x96(
    price: Price,
    decimals0: int,
    decimals1: int
) -> SqrtPriceX96:
    """토큰 소수점 자릿수를 반영해 sqrtPriceX96 계산

    프로토콜의 가격은 최소 단위 수량의 비율이므로
    price_raw = price × 10^(decimals1 - decimals0) 로 보정합니다.

    Args:
        price: Human-readable 가격 (token1/token0, 18자리 고정소수점)
        decimals0: token0 소수점 자릿수 (예: WETH = 18)
        decimals1: token1 소수점 자릿수 (예: USDC = 6)

    Returns:
        sqrtPriceX96
    """
    price_raw = unwrap(price, Price, "price")
    if decimals0 < 0 or decimals1 < 0:
        raise InvalidInput(f"소수점 자릿수는 음수일 수 없습니다: {decimals0}, {decimals1}")

    if decimals1 >= decimals0:
        adjusted = price_raw * 10 ** (decimals1 - decimals0)
    else:
        adjusted = price_raw // 10 ** (decimals0 - decimals1)

    return price_to_sqrt_price_x96(Price(adjusted))


def common_reference_prices() -> ReferencePrices:
    """1:1, 2:1, 1:2 기준 sqrtPriceX96

    1:1은 정확히 2^96 입니다.
    """
    return ReferencePrices(
        one_to_one=price_to_sqrt_price_x96(Price(Price.SCALE)),
        two_to_one=price_to_sqrt_price_x96(Price(2 * Price.SCALE)),
        one_to_two=price_to_sqrt_price_x96(Price(Price.SCALE // 2)),
    )


def round_trip_error_bound(price: Price) -> int:
    """price -> sqrtPriceX96 -> price 왕복 변환의 최대 손실 (최소 단위)

    s = floor(sqrt(price_raw)) 라 하면 역변환의 sqrt 값은 s 또는 s - 1 이므로
    손실은 (s + 1)^2 - (s - 1)^2 = 4s 미만입니다.
    왕복 결과는 항상 원래 가격 이하입니다.
    """
    price_raw = unwrap(price, Price, "price")
    return 4 * math.isqrt(price_raw)
