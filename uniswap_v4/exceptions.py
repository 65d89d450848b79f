"""
계산 레이어 예외 정의

모든 예외는 ValueError를 상속하므로 기존처럼 ValueError로도 잡을 수 있습니다.
"""


class UniswapMathError(ValueError):
    """가격/틱/유동성 계산 실패의 기본 예외"""


class InvalidInput(UniswapMathError):
    """입력 값이 허용 범위를 벗어난 경우"""


class DivisionByZero(UniswapMathError, ZeroDivisionError):
    """비율 또는 유동성 공식의 분모가 0인 경우"""


class InvalidRange(UniswapMathError):
    """가격 범위의 하한이 상한보다 작지 않은 경우"""


class OutOfTickRange(UniswapMathError):
    """틱 또는 sqrtPriceX96이 MIN_TICK ~ MAX_TICK 범위를 벗어난 경우"""


class LiquidityOverflow(UniswapMathError):
    """계산된 유동성이 uint128 범위를 초과한 경우"""
