#!/usr/bin/env python3
"""
Demo script for the unit converter.

This script runs sample length and mass conversions offline, then shows
the currency rate cache answering repeated lookups from one refresh.
"""

import time

from unit_converter import AppContext, run_command
from unit_converter.entities import CurrencyUnit


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def demo_offline_conversions() -> None:
    """Demonstrate conversions that need no exchange rates."""
    print_section("Length and Mass Conversions")

    expressions = [
        "100 m -> km",
        "12 in -> ft",
        "3 yd -> meter",
        "1 kg -> g",
        "16 oz -> lb",
        "5 m -> kg",
        "bogus",
    ]

    print("\n📏 Running expressions:")
    for expression in expressions:
        print(f"  > {expression}")
        print(f"    {run_command(expression)}")


def demo_currency_cache(context: AppContext) -> None:
    """Demonstrate the rate cache: one refresh, then cached lookups."""
    print_section("Currency Rate Cache")

    cache = context.rate_cache
    print(f"\n📦 Freshness window: {cache.expire_after}")
    print(f"  Fresh at startup: {cache.is_fresh()}")

    print("\n💱 Converting between currencies:")
    for expression in ["10 USD -> EUR", "10 EUR -> JPY", "1000 KRW -> GBP", "50 AUD -> USD"]:
        start = time.time()
        output = run_command(expression, cache)
        duration = (time.time() - start) * 1000
        print(f"  > {expression}")
        print(f"    {output}  ({duration:.2f}ms)")

    print("\n📊 Cache statistics:")
    stats = cache.get_stats()
    print(f"  Lookups: {stats['lookups']}")
    print(f"  Hit rate: {stats['hit_rate']:.2%}")
    print(f"  Refreshes: {stats['refreshes']}")
    print(f"  Currencies cached: {stats['currencies']}")

    print("\n🔢 Cached rates against USD:")
    for currency in CurrencyUnit:
        rate = cache.table.get(currency)
        if rate is not None:
            print(f"  {currency.code}: {rate}")


def main() -> None:
    """Run all demos."""
    print("\n🚀 Unit Converter Demo")
    print("=" * 70)
    print("This demo showcases length, mass and cached currency conversion")

    demo_offline_conversions()

    context = AppContext.create()
    try:
        demo_currency_cache(context)

        print("\n" + "=" * 70)
        print("✅ Demo completed successfully!")
        print("=" * 70)

    except Exception as e:
        print(f"\n❌ Error: {e}")
        print("\nMake sure OPENEXCHANGERATES_APP_ID is set and Redis is running:")
        print("  redis-server --daemonize yes")
        print("\nOr set RATES_STORE=none to run without a snapshot store.")
    finally:
        context.close()


if __name__ == "__main__":
    main()
