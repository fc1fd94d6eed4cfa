"""
Tests for the dashboard aggregation (orders -> counters + monthly series)
"""
import asyncio
import json

from fakes import FakeContentStore, FakeRedis
from shopadmin.domain.models.order import Order
from shopadmin.domain.services.dashboard_svc import (
    aggregate_orders,
    summarize_products,
    get_dashboard_summary_svc,
    invalidate_dashboard,
)
from shopadmin.domain.repositories.dashboard_cache_repo import SUMMARY_KEY


def _order(created_at, total, status=None, number=""):
    return Order(order_number=number, created_at=created_at, total=total, order_status=status)


class TestAggregateOrders:

    def test_reference_example(self):
        orders = [
            _order("2024-01-05", 10, "completed"),
            _order("2024-01-20", 5, "pending"),
            _order("2024-02-01", 20, "completed"),
        ]
        stats = aggregate_orders(orders)

        assert stats.total_orders == 3
        assert stats.completed_orders == 2
        assert stats.pending_orders == 1
        assert stats.shipped_orders == 0
        assert [(b.label, b.order_count, b.sales_total) for b in stats.series] == [
            ("Jan 2024", 2, 15),
            ("Feb 2024", 1, 20),
        ]

    def test_empty_input(self):
        stats = aggregate_orders([])
        assert stats.total_orders == 0
        assert stats.completed_orders == stats.pending_orders == stats.shipped_orders == 0
        assert stats.series == []

    def test_series_keeps_first_encounter_order(self):
        orders = [
            _order("2024-03-02", 1),
            _order("2023-12-31", 2),
            _order("2024-03-15", 3),
        ]
        labels = [b.label for b in aggregate_orders(orders).series]
        assert labels == ["Mar 2024", "Dec 2023"]

    def test_other_and_missing_statuses_count_nowhere(self):
        orders = [
            _order("2024-01-01", 1, "cancelled"),
            _order("2024-01-01", 1, None),
            _order("2024-01-01", 1, "Completed"),  # exact match only
            _order("2024-01-01", 1, "shipped"),
        ]
        stats = aggregate_orders(orders)
        assert stats.total_orders == 4
        assert (stats.completed_orders, stats.pending_orders, stats.shipped_orders) == (0, 0, 1)

    def test_invalid_dates_share_one_flagged_bucket(self):
        orders = [
            _order("not-a-date", 7),
            _order("2024-05-01T10:00:00", 1),
            _order(None, 3),
        ]
        series = aggregate_orders(orders).series
        invalid = [b for b in series if not b.valid]

        assert len(invalid) == 1
        assert invalid[0].label == "Invalid Date"
        assert invalid[0].order_count == 2
        assert invalid[0].sales_total == 10
        assert series[0].label == "Invalid Date"  # first encountered

    def test_counts_and_sales_add_up(self):
        orders = [_order(f"2024-{m:02d}-1{m % 9}", m * 2.5, "shipped") for m in range(1, 13)] * 3
        stats = aggregate_orders(orders)

        assert sum(b.order_count for b in stats.series) == len(orders)
        assert sum(b.sales_total for b in stats.series) == sum(o.total for o in orders)
        assert len(stats.series) == 12
        assert stats.completed_orders + stats.pending_orders + stats.shipped_orders <= stats.total_orders

    def test_negative_totals_are_not_corrected(self):
        stats = aggregate_orders([_order("2024-01-01", -5), _order("2024-01-02", 2)])
        assert stats.series[0].sales_total == -3

    def test_utc_suffix_is_parsed(self):
        stats = aggregate_orders([_order("2024-03-10T12:00:00Z", 1)])
        assert stats.series[0].label == "Mar 2024"
        assert stats.series[0].valid

    def test_out_of_range_local_time_is_flagged_invalid(self):
        orders = [
            _order("0001-01-01T00:00:00+14:00", 2),
            _order("9999-12-31T23:59:59-12:00", 3),
            _order("2024-05-01", 1),
        ]
        stats = aggregate_orders(orders)
        invalid = [b for b in stats.series if not b.valid]

        assert sum(b.order_count for b in stats.series) == 3
        assert len(invalid) == 1
        assert invalid[0].order_count == 2
        assert invalid[0].sales_total == 5

    def test_input_is_not_mutated(self):
        orders = [_order("2024-01-05", 10, "completed")]
        before = [o.model_dump() for o in orders]
        aggregate_orders(orders)
        assert [o.model_dump() for o in orders] == before


def test_summarize_products():
    stats = summarize_products([
        {"price": 10, "stockLevel": 3},
        {"price": 2.5, "stockLevel": 4},
        {"price": None},
    ])
    assert stats.total_products == 3
    assert stats.total_inventory == 7
    assert stats.total_inventory_value == 40


def test_summarize_products_fractional_and_bad_stock():
    stats = summarize_products([
        {"price": 4, "stockLevel": 2.5},
        {"price": 1, "stockLevel": "lots"},
    ])
    assert stats.total_inventory == 2
    assert stats.total_inventory_value == 8


def test_summary_service_reads_store_and_caches(store):
    redis = FakeRedis()

    summary = asyncio.run(get_dashboard_summary_svc(store, redis, cache_ttl=30))

    assert summary.products.total_products == 2
    assert summary.products.total_inventory == 12
    assert summary.products.total_inventory_value == 99 * 10 + 250 * 2
    assert summary.orders.total_orders == 3
    assert summary.total_reviews == 2
    assert redis.ttls[SUMMARY_KEY] == 30
    assert json.loads(redis.data[SUMMARY_KEY])["orders"]["series"][0]["orderCount"] == 2

    # served from cache while the store changes underneath
    store.docs["order"].clear()
    cached = asyncio.run(get_dashboard_summary_svc(store, redis))
    assert cached.orders.total_orders == 3

    asyncio.run(invalidate_dashboard(redis))
    fresh = asyncio.run(get_dashboard_summary_svc(store, redis))
    assert fresh.orders.total_orders == 0
    assert fresh.orders.series == []


def test_summary_service_without_redis():
    store = FakeContentStore()
    summary = asyncio.run(get_dashboard_summary_svc(store, None))
    assert summary.orders.total_orders == 0
    assert summary.products.total_products == 0
