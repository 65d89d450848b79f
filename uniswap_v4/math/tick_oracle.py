"""
Tick Oracle - 정규(canonical) 틱 수학

배포된 프로토콜의 TickMath 라이브러리와 비트 단위로 동일한 구현.
틱 경계의 sqrtPriceX96은 온체인 상태와 정확히 일치해야 하므로,
틱 변환은 항상 이 오라클을 통해서만 수행합니다.

References:
- Uniswap V4 Core: src/libraries/TickMath.sol (V3 TickMath와 동일)

핵심 공식:
    sqrtPriceX96 = sqrt(1.0001^tick) * 2^96
    tick = floor(log_sqrt(1.0001)(sqrtPriceX96 / 2^96))
"""

from typing import Protocol

from ..constants import MIN_TICK, MAX_TICK, MIN_SQRT_RATIO, MAX_SQRT_RATIO, UINT256_MAX
from ..exceptions import OutOfTickRange

# 1 / log2(sqrt(1.0001)), Q64 x Q128 -> Q128 tick
LOG_SQRT10001_MULTIPLIER: int = 255738958999603826347141
TICK_LOW_ERROR: int = 3402992956809132418596140100660247210
TICK_HIGH_ERROR: int = 291339464771989622907027621153398088495


class TickMathOracle(Protocol):
    """틱 ↔ sqrtPriceX96 변환 오라클 인터페이스

    RPC로 온체인 라이브러리를 호출하는 구현 등으로 교체할 수 있습니다.
    """

    def tick_at_sqrt_price(self, sqrt_price_x96: int) -> int:
        ...

    def sqrt_price_at_tick(self, tick: int) -> int:
        ...


def log2_x64(ratio_x128: int, precision_bits: int) -> int:
    """Q128.128 값의 이진 로그 (Q64.64, 부호 있음)

    정수부는 최상위 비트 위치로, 소수부는 제곱을 반복해 한 비트씩 구합니다.

    Args:
        ratio_x128: 양수인 Q128.128 값
        precision_bits: 계산할 소수부 비트 수 (최대 64)
    """
    msb = ratio_x128.bit_length() - 1

    if msb >= 128:
        r = ratio_x128 >> (msb - 127)
    else:
        r = ratio_x128 << (127 - msb)

    log_2 = (msb - 128) << 64

    for i in range(precision_bits):
        r = (r * r) >> 127
        f = r >> 128
        log_2 |= f << (63 - i)
        r >>= f

    return log_2


def get_sqrt_ratio_at_tick(tick: int) -> int:
    """틱에서 sqrtPriceX96 계산

    Solidity TickMath.getSqrtRatioAtTick()과 동일한 구현.

    Args:
        tick: 틱 인덱스 (-887272 ~ 887272)

    Returns:
        sqrtPriceX96 (Q64.96 형식, 올림)

    Raises:
        OutOfTickRange: 틱이 유효 범위를 벗어난 경우
    """
    if tick < MIN_TICK or tick > MAX_TICK:
        raise OutOfTickRange(f"틱이 유효 범위를 벗어났습니다: {tick} (범위: {MIN_TICK} ~ {MAX_TICK})")

    abs_tick = abs(tick)

    # 매직 넘버: 1 / sqrt(1.0001)^(2^i) (Q128.128)
    ratio = 0x100000000000000000000000000000000 if abs_tick & 0x1 == 0 \
        else 0xfffcb933bd6fad37aa2d162d1a594001

    if abs_tick & 0x2:
        ratio = (ratio * 0xfff97272373d413259a46990580e213a) >> 128
    if abs_tick & 0x4:
        ratio = (ratio * 0xfff2e50f5f656932ef12357cf3c7fdcc) >> 128
    if abs_tick & 0x8:
        ratio = (ratio * 0xffe5caca7e10e4e61c3624eaa0941cd0) >> 128
    if abs_tick & 0x10:
        ratio = (ratio * 0xffcb9843d60f6159c9db58835c926644) >> 128
    if abs_tick & 0x20:
        ratio = (ratio * 0xff973b41fa98c081472e6896dfb254c0) >> 128
    if abs_tick & 0x40:
        ratio = (ratio * 0xff2ea16466c96a3843ec78b326b52861) >> 128
    if abs_tick & 0x80:
        ratio = (ratio * 0xfe5dee046a99a2a811c461f1969c3053) >> 128
    if abs_tick & 0x100:
        ratio = (ratio * 0xfcbe86c7900a88aedcffc83b479aa3a4) >> 128
    if abs_tick & 0x200:
        ratio = (ratio * 0xf987a7253ac413176f2b074cf7815e54) >> 128
    if abs_tick & 0x400:
        ratio = (ratio * 0xf3392b0822b70005940c7a398e4b70f3) >> 128
    if abs_tick & 0x800:
        ratio = (ratio * 0xe7159475a2c29b7443b29c7fa6e889d9) >> 128
    if abs_tick & 0x1000:
        ratio = (ratio * 0xd097f3bdfd2022b8845ad8f792aa5825) >> 128
    if abs_tick & 0x2000:
        ratio = (ratio * 0xa9f746462d870fdf8a65dc1f90e061e5) >> 128
    if abs_tick & 0x4000:
        ratio = (ratio * 0x70d869a156d2a1b890bb3df62baf32f7) >> 128
    if abs_tick & 0x8000:
        ratio = (ratio * 0x31be135f97d08fd981231505542fcfa6) >> 128
    if abs_tick & 0x10000:
        ratio = (ratio * 0x9aa508b5b7a84e1c677de54f3e99bc9) >> 128
    if abs_tick & 0x20000:
        ratio = (ratio * 0x5d6af8dedb81196699c329225ee604) >> 128
    if abs_tick & 0x40000:
        ratio = (ratio * 0x2216e584f5fa1ea926041bedfe98) >> 128
    if abs_tick & 0x80000:
        ratio = (ratio * 0x48a170391f7dc42444e8fa2) >> 128

    if tick > 0:
        ratio = UINT256_MAX // ratio

    # Q128.128 -> Q64.96 (올림)
    return (ratio >> 32) + (1 if ratio % (1 << 32) != 0 else 0)


def get_tick_at_sqrt_ratio(sqrt_price_x96: int) -> int:
    """sqrtPriceX96에서 틱 계산

    Solidity TickMath.getTickAtSqrtRatio()과 동일한 구현.
    get_sqrt_ratio_at_tick(tick) <= sqrt_price_x96 을 만족하는 가장 큰 틱을 반환합니다.

    Raises:
        OutOfTickRange: sqrtPriceX96이 [MIN_SQRT_RATIO, MAX_SQRT_RATIO) 밖인 경우
    """
    if sqrt_price_x96 < MIN_SQRT_RATIO or sqrt_price_x96 >= MAX_SQRT_RATIO:
        raise OutOfTickRange(f"sqrtPriceX96이 유효 범위를 벗어났습니다: {sqrt_price_x96}")

    # TickMath는 소수부 14비트만 계산하고 오차 범위로 보정
    log_2 = log2_x64(sqrt_price_x96 << 32, 14)
    log_sqrt10001 = log_2 * LOG_SQRT10001_MULTIPLIER

    tick_low = (log_sqrt10001 - TICK_LOW_ERROR) >> 128
    tick_high = (log_sqrt10001 + TICK_HIGH_ERROR) >> 128

    if tick_low == tick_high:
        return tick_low

    if get_sqrt_ratio_at_tick(tick_high) <= sqrt_price_x96:
        return tick_high
    else:
        return tick_low


class CanonicalTickMath:
    """TickMath 라이브러리 기반 기본 오라클"""

    def tick_at_sqrt_price(self, sqrt_price_x96: int) -> int:
        return get_tick_at_sqrt_ratio(sqrt_price_x96)

    def sqrt_price_at_tick(self, tick: int) -> int:
        return get_sqrt_ratio_at_tick(tick)


CANONICAL_TICK_MATH = CanonicalTickMath()
