"""
Uniswap V4 상수 정의

고정소수점 가격/틱/유동성 계산에 사용되는 상수들:
- Q96: sqrt price 인코딩에 사용 (2^96)
- PRICE_DECIMALS: 사람이 읽는 가격의 고정소수점 자릿수 (18)
- MIN_TICK / MAX_TICK: 프로토콜이 허용하는 틱 범위
- TICK_SPACINGS: 각 수수료 티어별 틱 간격
"""

from typing import Dict

# Fixed-point 인코딩 상수
RESOLUTION: int = 96
Q96: int = 2 ** 96

# 가격 고정소수점 (18자리)
PRICE_DECIMALS: int = 18
PRICE_SCALE: int = 10 ** PRICE_DECIMALS
# sqrt(PRICE_SCALE), sqrt 변환 시 스케일 보정에 사용
SQRT_PRICE_SCALE: int = 10 ** (PRICE_DECIMALS // 2)

# 틱 범위 상수
MIN_TICK: int = -887272
MAX_TICK: int = 887272

# TickMath 경계값 (MIN_TICK, MAX_TICK에서의 sqrtPriceX96)
MIN_SQRT_RATIO: int = 4295128739
MAX_SQRT_RATIO: int = 1461446703485210103287273052203988822378723970342

# 수수료 티어 (hundredths of a bip)
# 500 = 0.05%, 3000 = 0.30%, 10000 = 1.00%
FEE_TIERS: Dict[int, str] = {
    100: "0.01%",
    500: "0.05%",
    3000: "0.30%",
    10000: "1.00%",
}

# 각 수수료 티어별 기본 틱 간격
TICK_SPACINGS: Dict[int, int] = {
    100: 1,
    500: 10,
    3000: 60,
    10000: 200,
}

# 정수 폭 상한
UINT128_MAX: int = 2 ** 128 - 1
UINT160_MAX: int = 2 ** 160 - 1
UINT256_MAX: int = 2 ** 256 - 1
