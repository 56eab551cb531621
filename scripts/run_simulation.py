#!/usr/bin/env python3
"""
SwapSweep Vault Simulation

Builds a simulated vault, makes one deposit, replays a random tick path
with a keeper calling the resolver every step, and prints a summary.
"""
import sys
import argparse
import logging
from pathlib import Path

import pandas as pd

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from swap_sweep.config import settings
from swap_sweep.sim import build_environment, random_tick_path, replay, summarize


def main():
    parser = argparse.ArgumentParser(description='Replay a synthetic tick path through a SwapSweep vault')
    parser.add_argument('--steps', type=int, default=720,
                        help='Number of steps (default: 720 = 30 days hourly)')
    parser.add_argument('--sigma', type=float, default=60.0,
                        help='Tick change standard deviation per step')
    parser.add_argument('--seed', type=int, default=42,
                        help='Random seed')
    parser.add_argument('--amount0', type=int, default=10_000_000_000,
                        help='Initial token0 deposit (raw units)')
    parser.add_argument('--amount1', type=int, default=100_000_000_000_000_000,
                        help='Initial token1 deposit (raw units)')
    parser.add_argument('--fee0', type=int, default=1_000_000,
                        help='Token0 trading fees distributed per step')
    parser.add_argument('--fee1', type=int, default=0,
                        help='Token1 trading fees distributed per step')
    parser.add_argument('--silo-rate-bps', type=int, default=1,
                        help='Silo exchange-rate accrual per 24 steps (bps)')
    parser.add_argument('--output', type=str, default=None,
                        help='Save per-step frame to CSV')
    parser.add_argument('--verbose', action='store_true',
                        help='Show vault log records')
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    env = build_environment(**settings.vault_params())
    print(f"🏗️  Vault {env.vault.asset0}/{env.vault.asset1} "
          f"range [{env.vault.tick_lower}, {env.vault.tick_upper}] tick {env.pool.tick}")

    result = env.vault.deposit(args.amount0, args.amount1, 0, 0, sender="investor")
    print(f"✅ Deposited: used0={result.amount0_used:,} used1={result.amount1_used:,} "
          f"shares={result.shares_issued:,}")

    ticks = random_tick_path(env.pool.tick, args.steps, sigma=args.sigma, seed=args.seed)

    # 사일로 이자는 24스텝마다 적립
    frames = []
    chunk = 24
    for start in range(0, len(ticks), chunk):
        env.holding0.accrue(args.silo_rate_bps)
        env.holding1.accrue(args.silo_rate_bps)
        frame = replay(
            env.vault, env.resolver, env.pool, env.clock, ticks[start:start + chunk],
            fee_per_step0=args.fee0, fee_per_step1=args.fee1,
        )
        frame['step'] += start
        frames.append(frame)

    if not frames:
        # --steps 0
        frames.append(replay(env.vault, env.resolver, env.pool, env.clock, []))
    df = pd.concat(frames, ignore_index=True)
    summary = summarize(df)

    print("\n" + "=" * 60)
    print("SIMULATION SUMMARY")
    print("=" * 60)
    print(f"Steps:           {summary['steps']}")
    print(f"In-range steps:  {summary['in_range_pct']:.1f}%")
    print(f"Repositions:     {summary['repositions']}")
    print(f"Rebalances:      {summary['rebalances']}")
    print(f"Failed actions:  {summary['failures']}")
    print(f"Start value:     {summary['start_value']:,} (token1 units)")
    print(f"End value:       {summary['end_value']:,} (token1 units)")
    print(f"Final range:     [{env.vault.tick_lower}, {env.vault.tick_upper}] tick {env.pool.tick}")

    if args.output:
        df.to_csv(args.output, index=False)
        print(f"\n💾 Saved: {args.output}")


if __name__ == '__main__':
    main()
