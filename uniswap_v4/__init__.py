"""
Uniswap V4 Concentrated Liquidity Math

풀 초기화, 포지션 민트에 필요한 가격/틱/유동성 값을
온체인 수준 정밀도(정수 고정소수점)로 계산하는 라이브러리.
"""

__version__ = "0.1.0"
__author__ = "Zekiya"

from .constants import Q96, MIN_TICK, MAX_TICK, FEE_TIERS, TICK_SPACINGS
