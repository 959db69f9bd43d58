"""Fare service - cost splitting and fare estimation

Pure functions with no database access. Every monetary value goes through
``round2`` so results match to the cent across clients.
"""

import math
from dataclasses import dataclass
from numbers import Real

from ..domain import CostBreakdown, InvalidArgumentError, PassengerShare, SavingsSummary
from ..utils.constants import BusinessRules


@dataclass(frozen=True)
class FareOptions:
    fuel_efficiency: float = BusinessRules.DEFAULT_FUEL_EFFICIENCY_KM_PER_LITER
    fuel_price: float = BusinessRules.DEFAULT_FUEL_PRICE_PER_LITER
    wear_and_tear_rate: float = BusinessRules.DEFAULT_WEAR_AND_TEAR_PER_KM
    time_value: float = BusinessRules.DEFAULT_TIME_VALUE_PER_HOUR
    profit_margin: float = BusinessRules.DEFAULT_PROFIT_MARGIN


def round2(value):
    """Round to cents, ties away from zero (1.125 -> 1.13, -1.125 -> -1.13)."""
    _require_number('value', value)
    cents = abs(value) * 100
    rounded = math.floor(cents)
    # compare the fraction; adding 0.5 first can carry 0.49999... up to 1
    if cents - rounded >= 0.5:
        rounded += 1
    return (rounded if value >= 0 else -rounded) / 100


def _require_number(name, value):
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidArgumentError(f'{name} must be a number, got {value!r}')
    if not math.isfinite(value):
        raise InvalidArgumentError(f'{name} must be finite, got {value!r}')


def _require_non_negative(name, value):
    _require_number(name, value)
    if value < 0:
        raise InvalidArgumentError(f'{name} must not be negative, got {value!r}')


def _require_positive(name, value):
    _require_number(name, value)
    if value <= 0:
        raise InvalidArgumentError(f'{name} must be greater than zero, got {value!r}')


def split_cost(total_cost, passenger_ids, include_driver_in_split=False):
    """
    Split a ride's total cost between the driver and passengers.

    Args:
        total_cost: Total cost of the ride
        passenger_ids: Ids of the passengers sharing the ride
        include_driver_in_split: Whether the driver pays an equal share

    Returns:
        CostBreakdown

    Each passenger share is rounded on its own and the remainder is not
    redistributed, so the shares may differ from ``total_cost`` by up to
    one cent per passenger.
    """
    _require_non_negative('total_cost', total_cost)
    passenger_ids = list(passenger_ids)
    passenger_count = len(passenger_ids)

    if passenger_count == 0:
        return CostBreakdown(
            total_cost=total_cost,
            cost_per_seat=round2(total_cost),
            passenger_count=0,
            driver_share=round2(total_cost),
            passenger_shares=[],
        )

    if include_driver_in_split:
        cost_per_seat = total_cost / (passenger_count + 1)
        driver_share = cost_per_seat
    else:
        cost_per_seat = total_cost / passenger_count
        driver_share = 0

    amount = round2(cost_per_seat)
    return CostBreakdown(
        total_cost=total_cost,
        cost_per_seat=amount,
        passenger_count=passenger_count,
        driver_share=round2(driver_share),
        passenger_shares=[PassengerShare(user_id=user_id, amount=amount) for user_id in passenger_ids],
    )


def distance_based_cost(
    distance_km,
    fuel_efficiency_km_per_liter=BusinessRules.DEFAULT_FUEL_EFFICIENCY_KM_PER_LITER,
    fuel_price_per_liter=BusinessRules.DEFAULT_FUEL_PRICE_PER_LITER,
    extra_cost_per_km=BusinessRules.DEFAULT_EXTRA_COST_PER_KM,
):
    """Fuel plus per-km running costs for a flat, user-supplied distance"""
    _require_non_negative('distance_km', distance_km)
    _require_positive('fuel_efficiency_km_per_liter', fuel_efficiency_km_per_liter)
    _require_non_negative('fuel_price_per_liter', fuel_price_per_liter)
    _require_non_negative('extra_cost_per_km', extra_cost_per_km)

    fuel_cost = (distance_km / fuel_efficiency_km_per_liter) * fuel_price_per_liter
    extra_costs = distance_km * extra_cost_per_km
    return round2(fuel_cost + extra_costs)


def time_based_cost(duration_minutes, cost_per_hour=BusinessRules.DEFAULT_COST_PER_HOUR):
    _require_non_negative('duration_minutes', duration_minutes)
    _require_non_negative('cost_per_hour', cost_per_hour)
    return round2((duration_minutes / 60) * cost_per_hour)


def suggested_price_per_seat(distance_km, duration_minutes, seat_count, options=None):
    """Suggested seat price: fuel, wear and time costs plus margin, per seat"""
    options = options or FareOptions()
    _require_number('seat_count', seat_count)
    if seat_count < 1:
        raise InvalidArgumentError(f'seat_count must be at least 1, got {seat_count!r}')
    _require_non_negative('profit_margin', options.profit_margin)

    fuel_cost = distance_based_cost(
        distance_km, options.fuel_efficiency, options.fuel_price, options.wear_and_tear_rate,
    )
    time_cost = time_based_cost(duration_minutes, options.time_value)
    total_cost = (fuel_cost + time_cost) * (1 + options.profit_margin)
    return round2(total_cost / seat_count)


def savings(original_cost, shared_cost):
    _require_number('original_cost', original_cost)
    _require_number('shared_cost', shared_cost)

    saved = original_cost - shared_cost
    percentage = (saved / original_cost) * 100 if original_cost > 0 else 0
    return SavingsSummary(savings=round2(saved), percentage=round2(percentage))


def format_currency(amount, currency=BusinessRules.DEFAULT_CURRENCY):
    """Always two decimals, so whole amounts read $20.00"""
    _require_number('amount', amount)
    sign = '-' if amount < 0 else ''
    formatted = f'{abs(round2(amount)):,.2f}'
    if currency == 'USD':
        return f'{sign}${formatted}'
    return f'{sign}{currency} {formatted}'


def payment_instructions(driver_name, passenger_name, amount):
    """Manual payment text; the platform never moves money itself"""
    return (
        f'{passenger_name} should pay {format_currency(amount)} to {driver_name}. \n'
        'Payment methods: Cash, Venmo, Zelle, or other agreed method.'
    )


def payment_summary(breakdown, driver_name):
    if not breakdown.passenger_shares:
        return 'No passengers - driver covers full cost.'

    collected = len(breakdown.passenger_shares) * breakdown.cost_per_seat
    return (
        f'Each passenger pays {format_currency(breakdown.cost_per_seat)} to {driver_name}. \n'
        f'Total collected: {format_currency(collected)}'
    )
