"""Tests for fare service"""

from django.test import SimpleTestCase

from ..domain import InvalidArgumentError
from ..services import fare_service
from ..services.fare_service import FareOptions, round2


class RoundingTest(SimpleTestCase):
    def test_ties_round_away_from_zero(self):
        self.assertEqual(round2(0.125), 0.13)
        self.assertEqual(round2(1.125), 1.13)
        self.assertEqual(round2(0.375), 0.38)
        self.assertEqual(round2(-0.125), -0.13)

    def test_value_just_below_half_cent_rounds_down(self):
        self.assertEqual(round2(0.0049999999999999994), 0.0)
        self.assertEqual(round2(-0.0049999999999999994), 0.0)
        self.assertEqual(round2(0.49999999999999994), 0.5)

    def test_plain_values(self):
        self.assertEqual(round2(33.333333), 33.33)
        self.assertEqual(round2(0), 0)


class SplitCostTest(SimpleTestCase):
    def test_no_passengers_driver_pays_everything(self):
        breakdown = fare_service.split_cost(100, [])

        self.assertEqual(breakdown.cost_per_seat, 100)
        self.assertEqual(breakdown.driver_share, 100)
        self.assertEqual(breakdown.passenger_shares, [])
        self.assertEqual(breakdown.passenger_count, 0)

    def test_no_passengers_amounts_are_rounded(self):
        breakdown = fare_service.split_cost(10.125, [])

        self.assertEqual(breakdown.cost_per_seat, 10.13)
        self.assertEqual(breakdown.driver_share, 10.13)

    def test_passengers_only_split(self):
        breakdown = fare_service.split_cost(100, ['a', 'b', 'c'])

        self.assertEqual(breakdown.driver_share, 0)
        self.assertEqual([s.amount for s in breakdown.passenger_shares], [33.33, 33.33, 33.33])
        self.assertEqual([s.user_id for s in breakdown.passenger_shares], ['a', 'b', 'c'])

    def test_shares_stay_within_a_cent_per_passenger(self):
        for total in (0, 1, 10, 99.99, 100, 250.5, 1000):
            for count in range(1, 8):
                ids = list(range(count))
                breakdown = fare_service.split_cost(total, ids)
                shared = sum(s.amount for s in breakdown.passenger_shares)
                self.assertLessEqual(abs(shared - total), 0.01 * count + 1e-9)
                self.assertEqual(breakdown.driver_share, 0)

    def test_driver_included_pays_equal_share(self):
        breakdown = fare_service.split_cost(100, ['a', 'b'], include_driver_in_split=True)

        self.assertEqual(breakdown.cost_per_seat, 33.33)
        self.assertEqual(breakdown.driver_share, 33.33)
        for share in breakdown.passenger_shares:
            self.assertEqual(share.amount, breakdown.driver_share)

    def test_remainder_is_not_redistributed(self):
        breakdown = fare_service.split_cost(10, ['a', 'b', 'c'])
        self.assertAlmostEqual(sum(s.amount for s in breakdown.passenger_shares), 9.99)

    def test_negative_total_rejected(self):
        with self.assertRaises(InvalidArgumentError):
            fare_service.split_cost(-1, ['a'])


class FareEstimateTest(SimpleTestCase):
    def test_distance_based_cost(self):
        self.assertEqual(fare_service.distance_based_cost(120), 27.0)
        self.assertEqual(fare_service.distance_based_cost(0), 0)

    def test_distance_cost_is_monotonic(self):
        costs = [fare_service.distance_based_cost(km) for km in range(0, 500, 7)]
        self.assertEqual(costs, sorted(costs))

    def test_time_based_cost(self):
        self.assertEqual(fare_service.time_based_cost(90), 15.0)
        self.assertEqual(fare_service.time_based_cost(30, cost_per_hour=12), 6.0)

    def test_suggested_price_per_seat(self):
        self.assertEqual(fare_service.suggested_price_per_seat(120, 90, 3), 16.5)

    def test_suggested_price_with_options(self):
        options = FareOptions(profit_margin=0)
        self.assertEqual(fare_service.suggested_price_per_seat(120, 90, 3, options), 15.0)

    def test_invalid_inputs_raise(self):
        with self.assertRaises(InvalidArgumentError):
            fare_service.distance_based_cost(-5)
        with self.assertRaises(InvalidArgumentError):
            fare_service.distance_based_cost(10, fuel_efficiency_km_per_liter=0)
        with self.assertRaises(InvalidArgumentError):
            fare_service.time_based_cost(-1)
        with self.assertRaises(InvalidArgumentError):
            fare_service.suggested_price_per_seat(100, 60, 0)
        with self.assertRaises(InvalidArgumentError):
            fare_service.distance_based_cost(float('nan'))
        with self.assertRaises(InvalidArgumentError):
            fare_service.distance_based_cost('12')

    def test_invalid_argument_is_a_value_error(self):
        with self.assertRaises(ValueError):
            fare_service.time_based_cost(float('inf'))


class SavingsTest(SimpleTestCase):
    def test_savings(self):
        summary = fare_service.savings(100, 70)
        self.assertEqual(summary.savings, 30)
        self.assertEqual(summary.percentage, 30)

    def test_zero_original_cost(self):
        summary = fare_service.savings(0, 0)
        self.assertEqual(summary.savings, 0)
        self.assertEqual(summary.percentage, 0)


class PaymentTextTest(SimpleTestCase):
    def test_format_currency(self):
        self.assertEqual(fare_service.format_currency(1234.5), '$1,234.50')
        self.assertEqual(fare_service.format_currency(-5), '-$5.00')
        self.assertEqual(fare_service.format_currency(1, 'EUR'), 'EUR 1.00')

    def test_format_currency_keeps_cents_on_whole_amounts(self):
        self.assertEqual(fare_service.format_currency(20), '$20.00')
        self.assertEqual(fare_service.format_currency(0), '$0.00')

    def test_payment_instructions(self):
        text = fare_service.payment_instructions('Asha', 'Ravi', 12.5)
        self.assertIn('Ravi should pay $12.50 to Asha', text)

    def test_payment_summary(self):
        breakdown = fare_service.split_cost(60, ['a', 'b'])
        summary = fare_service.payment_summary(breakdown, 'Asha')

        self.assertIn('Each passenger pays $30.00 to Asha', summary)
        self.assertIn('Total collected: $60.00', summary)

    def test_payment_summary_without_passengers(self):
        breakdown = fare_service.split_cost(60, [])
        self.assertEqual(fare_service.payment_summary(breakdown, 'Asha'), 'No passengers - driver covers full cost.')
