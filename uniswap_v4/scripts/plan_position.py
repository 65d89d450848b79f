#!/usr/bin/env python3
"""
Plan Position - 현재 가격 주변의 포지션 범위와 유동성 계산

Usage:
    # Human-readable 가격으로 (WETH/USDC, 3000 USDC per WETH)
    python plan_position.py --price 3000 --decimals0 18 --decimals1 6 \\
        --amount0 1000000000000000000 --amount1 3000000000 --fee 3000

    # sqrtPriceX96으로, 틱 간격과 범위 폭 지정
    python plan_position.py --sqrt-price 79228162514264337593543950336 \\
        --amount0 1000000 --amount1 1000000 --spacing 10 --offset 20
"""

import sys
import os
import argparse
import logging
from typing import List, Optional

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from uniswap_v4.config import settings
from uniswap_v4.constants import FEE_TIERS
from uniswap_v4.exceptions import UniswapMathError
from uniswap_v4.math import (
    Price,
    SqrtPriceX96,
    get_tick_spacing_for_fee,
    price_with_decimals_to_sqrt_price_x96,
    tick_to_price,
)
from uniswap_v4.position import plan_position


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Plan a concentrated liquidity position")

    price_group = parser.add_mutually_exclusive_group(required=True)
    price_group.add_argument("--price", type=str, help="Human-readable price (token1 per token0)")
    price_group.add_argument("--sqrt-price", type=int, help="Current sqrtPriceX96")

    parser.add_argument("--decimals0", type=int, default=18, help="token0 decimals")
    parser.add_argument("--decimals1", type=int, default=18, help="token1 decimals")
    parser.add_argument("--amount0", type=int, required=True, help="Max token0 amount (raw units)")
    parser.add_argument("--amount1", type=int, required=True, help="Max token1 amount (raw units)")

    spacing_group = parser.add_mutually_exclusive_group()
    spacing_group.add_argument("--spacing", type=int, help="Tick spacing")
    # argparse help는 % 포맷팅을 거치므로 이스케이프
    fee_help = ", ".join(f"{fee} = {pct}" for fee, pct in FEE_TIERS.items()).replace("%", "%%")
    spacing_group.add_argument("--fee", type=int, help=f"Fee tier ({fee_help})")

    parser.add_argument("--offset", type=int, default=None,
                        help=f"Spacings on each side (default: {settings.DEFAULT_RANGE_OFFSET})")
    parser.add_argument("--no-clamp", action="store_true",
                        help="Do not clamp the range into the usable tick range")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.price is not None:
            sqrt_price = price_with_decimals_to_sqrt_price_x96(
                Price.from_decimal(args.price), args.decimals0, args.decimals1
            )
        else:
            sqrt_price = SqrtPriceX96(args.sqrt_price)

        tick_spacing = args.spacing
        if args.fee is not None:
            tick_spacing = get_tick_spacing_for_fee(args.fee)

        plan = plan_position(
            sqrt_price,
            args.amount0,
            args.amount1,
            tick_spacing=tick_spacing,
            offset_ticks=args.offset,
            clamp=False if args.no_clamp else None,
        )
    except UniswapMathError as e:
        print(f"❌ 계산 실패: {e}")
        return 1

    price_lower = tick_to_price(plan.tick_lower, args.decimals0, args.decimals1)
    price_upper = tick_to_price(plan.tick_upper, args.decimals0, args.decimals1)

    print(f"sqrtPriceX96:  {sqrt_price.value}")
    print(f"Tick range:    [{plan.tick_lower}, {plan.tick_upper}]")
    print(f"Price range:   {price_lower:.6g} ~ {price_upper:.6g}")
    print(f"Liquidity:     {plan.liquidity}")
    print(f"Amount0:       {plan.amounts.amount0} / {args.amount0}")
    print(f"Amount1:       {plan.amounts.amount1} / {args.amount1}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
