"""
고정소수점 값 타입 정의

정수를 그대로 주고받으면 스케일(2^96 vs 10^18)이 섞여도 알 수 없으므로,
스케일 메타데이터를 가진 불변 타입으로 감쌉니다.
다른 타입을 넘기면 TypeError가 발생합니다.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar, NamedTuple, Union

from ..constants import (
    RESOLUTION,
    PRICE_DECIMALS,
    PRICE_SCALE,
    UINT160_MAX,
    UINT256_MAX,
)
from ..exceptions import InvalidInput, InvalidRange


def _check_uint(name: str, value: int, max_value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name}은(는) int여야 합니다: {type(value).__name__}")
    if value < 0 or value > max_value:
        raise InvalidInput(f"{name} 값이 범위를 벗어났습니다: {value} (범위: 0 ~ {max_value})")


def unwrap(value, expected_type: type, name: str) -> int:
    """태그 타입에서 정수 값을 꺼냄 (타입이 다르면 TypeError)"""
    if not isinstance(value, expected_type):
        raise TypeError(f"{name}은(는) {expected_type.__name__}이어야 합니다: {type(value).__name__}")
    return value.value


@dataclass(frozen=True, order=True)
class SqrtPriceX96:
    """sqrt(amount1 / amount0) * 2^96 (Q64.96)

    160비트 부호 없는 정수에 들어가야 합니다.
    """
    value: int

    RESOLUTION: ClassVar[int] = RESOLUTION
    MAX_VALUE: ClassVar[int] = UINT160_MAX

    def __post_init__(self):
        _check_uint("sqrtPriceX96", self.value, self.MAX_VALUE)

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True, order=True)
class Price:
    """amount1 / amount0 가격 (18자리 고정소수점)

    예: 1.5 -> Price(1_500_000_000_000_000_000)
    """
    value: int

    DECIMALS: ClassVar[int] = PRICE_DECIMALS
    SCALE: ClassVar[int] = PRICE_SCALE
    MAX_VALUE: ClassVar[int] = UINT256_MAX

    def __post_init__(self):
        _check_uint("price", self.value, self.MAX_VALUE)

    def __int__(self) -> int:
        return self.value

    @classmethod
    def from_decimal(cls, value: Union[Decimal, str, int, float]) -> "Price":
        """Human-readable 가격에서 생성 (10^-18 미만은 버림)"""
        if isinstance(value, float):
            value = str(value)
        try:
            scaled = Decimal(value) * cls.SCALE
        except ArithmeticError as e:
            raise InvalidInput(f"가격을 해석할 수 없습니다: {value!r}") from e
        if not scaled.is_finite():
            raise InvalidInput(f"가격은 유한한 값이어야 합니다: {value!r}")
        return cls(int(scaled))

    def to_decimal(self) -> Decimal:
        return Decimal(self.value) / self.SCALE


class ReserveAmounts(NamedTuple):
    """포지션이 보유한 토큰 수량 (각 토큰의 최소 단위)"""
    amount0: int
    amount1: int


@dataclass(frozen=True)
class PriceRange:
    """포지션의 가격 범위 (lower < upper)"""
    lower: SqrtPriceX96
    upper: SqrtPriceX96

    def __post_init__(self):
        if not isinstance(self.lower, SqrtPriceX96) or not isinstance(self.upper, SqrtPriceX96):
            raise TypeError("PriceRange 경계는 SqrtPriceX96이어야 합니다")
        if self.lower >= self.upper:
            raise InvalidRange(
                f"하한이 상한보다 작아야 합니다: lower={self.lower.value}, upper={self.upper.value}"
            )

    def contains(self, current: SqrtPriceX96) -> bool:
        """현재 가격이 범위 내부인지 (양쪽 토큰 모두 필요한 경우)"""
        return self.lower < current < self.upper
