from datetime import date, datetime, timedelta, timezone

from eventra.aggregation import bucket_by_month, count_by_category, filter_upcoming, sum_confirmed_revenue
from eventra.constants import APP_TZ, month_label, now
from eventra.models.event import Event, EventStatus
from eventra.models.invoice import DiscountType, InvoiceStatus

TODAY = date(2025, 3, 15)


def _event(day: datetime, **overrides) -> Event:
    defaults = dict(title="Event", date=day)
    defaults.update(overrides)
    return Event(**defaults)


class TestBucketByMonth:
    def test_empty_records_give_zeroed_window(self):
        buckets = bucket_by_month([], "date", lambda r: r["amount"], 6, today=TODAY)
        assert [b.month for b in buckets] == [
            "Oct 2024",
            "Nov 2024",
            "Dec 2024",
            "Jan 2025",
            "Feb 2025",
            "Mar 2025",
        ]
        assert all(b.value == 0 for b in buckets)

    def test_default_window_ends_at_current_month(self):
        buckets = bucket_by_month([], "date", lambda r: 1)
        current = now()
        assert len(buckets) == 6
        assert buckets[-1].month == month_label(current.year, current.month)

    def test_sums_values_in_same_month(self):
        records = [
            {"date": date(2025, 3, 1), "amount": 100},
            {"date": date(2025, 3, 31), "amount": 50.5},
            {"date": date(2025, 1, 10), "amount": 20},
        ]
        buckets = bucket_by_month(records, "date", lambda r: r["amount"], 3, today=TODAY)
        assert [(b.month, b.value) for b in buckets] == [
            ("Jan 2025", 20),
            ("Feb 2025", 0),
            ("Mar 2025", 150.5),
        ]

    def test_ignores_records_outside_window(self):
        records = [
            {"date": date(2024, 9, 30), "amount": 999},
            {"date": date(2025, 4, 1), "amount": 999},
            {"date": date(2025, 2, 2), "amount": 5},
        ]
        buckets = bucket_by_month(records, "date", lambda r: r["amount"], 6, today=TODAY)
        assert sum(b.value for b in buckets) == 5

    def test_order_is_chronological_regardless_of_input(self):
        records = [
            {"date": date(2025, 3, 1), "amount": 3},
            {"date": date(2024, 12, 1), "amount": 1},
            {"date": date(2025, 2, 1), "amount": 2},
        ]
        buckets = bucket_by_month(records, "date", lambda r: r["amount"], 4, today=TODAY)
        assert [b.value for b in buckets] == [1, 0, 2, 3]

    def test_accepts_models_and_datetimes(self):
        events = [
            _event(datetime(2025, 3, 2, 10, tzinfo=APP_TZ), budget=10),
            _event(datetime(2025, 2, 2, 10, tzinfo=APP_TZ), budget=20),
        ]
        buckets = bucket_by_month(events, "date", lambda e: e.budget, 2, today=TODAY)
        assert [b.value for b in buckets] == [20, 10]

    def test_missing_date_and_value_are_skipped(self):
        records = [{"date": None, "amount": 100}, {"date": date(2025, 3, 3), "amount": None}]
        buckets = bucket_by_month(records, "date", lambda r: r["amount"], 1, today=TODAY)
        assert buckets[0].value == 0

    def test_window_crosses_year_boundary(self):
        buckets = bucket_by_month([], "date", lambda r: 0, 3, today=date(2025, 1, 5))
        assert [b.month for b in buckets] == ["Nov 2024", "Dec 2024", "Jan 2025"]

    def test_aware_timestamps_are_bucketed_in_app_timezone(self):
        start_of_march = datetime(2025, 3, 1, 0, 30, tzinfo=APP_TZ)
        behind = start_of_march.astimezone(timezone(timedelta(hours=-10)))
        assert behind.month == 2
        buckets = bucket_by_month([{"date": behind, "amount": 5}], "date", lambda r: r["amount"], 2, today=TODAY)
        assert [b.value for b in buckets] == [0, 5]


class TestCountByCategory:
    def test_counts_each_category(self):
        records = [{"type": "Wedding"}, {"type": "Corporate"}, {"type": "Wedding"}]
        assert count_by_category(records, "type") == {"Wedding": 2, "Corporate": 1}

    def test_excludes_missing_and_empty(self):
        records = [{"type": "Party"}, {"type": ""}, {"type": None}, {}]
        assert count_by_category(records, "type") == {"Party": 1}

    def test_enum_values_are_counted_by_value(self):
        events = [
            _event(datetime(2025, 1, 1, tzinfo=APP_TZ), status=EventStatus.CONFIRMED),
            _event(datetime(2025, 1, 2, tzinfo=APP_TZ), status=EventStatus.CONFIRMED),
            _event(datetime(2025, 1, 3, tzinfo=APP_TZ), status=EventStatus.CANCELLED),
        ]
        assert count_by_category(events, "status") == {"confirmed": 2, "cancelled": 1}

    def test_other_enums_are_counted_by_value(self):
        records = [
            {"status": InvoiceStatus.PAID},
            {"status": InvoiceStatus.PAID},
            {"status": InvoiceStatus.DRAFT},
            {"discount": DiscountType.FIXED},
        ]
        assert count_by_category(records, "status") == {"Paid": 2, "Draft": 1}
        assert count_by_category(records, "discount") == {"fixed": 1}

    def test_empty_records(self):
        assert count_by_category([], "type") == {}


class TestFilterUpcoming:
    def test_only_future_events_sorted(self):
        current = datetime(2025, 3, 15, 12, tzinfo=APP_TZ)
        later = _event(current + timedelta(days=3), title="later")
        past = _event(current - timedelta(seconds=1), title="past")
        sooner = _event(current + timedelta(hours=1), title="sooner")

        result = filter_upcoming([later, past, sooner], current)

        assert [e.title for e in result] == ["sooner", "later"]
        assert all(e.date >= current for e in result)

    def test_includes_event_exactly_now(self):
        current = datetime(2025, 3, 15, 12, tzinfo=APP_TZ)
        result = filter_upcoming([_event(current, title="now")], current)
        assert [e.title for e in result] == ["now"]

    def test_ties_keep_input_order(self):
        current = datetime(2025, 3, 15, 12, tzinfo=APP_TZ)
        when = current + timedelta(days=1)
        events = [_event(when, title="first"), _event(when, title="second"), _event(when, title="third")]
        assert [e.title for e in filter_upcoming(events, current)] == ["first", "second", "third"]

    def test_unbounded(self):
        current = datetime(2025, 3, 15, 12, tzinfo=APP_TZ)
        events = [_event(current + timedelta(days=i)) for i in range(12)]
        assert len(filter_upcoming(events, current)) == 12

    def test_naive_now_is_read_in_app_timezone(self):
        later = _event(datetime(2030, 1, 1, 10), title="later")
        earlier = _event(datetime(2020, 1, 1, 10), title="earlier")
        result = filter_upcoming([later, earlier], datetime(2025, 1, 1))
        assert [e.title for e in result] == ["later"]

    def test_mapping_records_with_naive_dates(self):
        records = [{"date": datetime(2025, 3, 16)}, {"date": datetime(2025, 3, 14)}, {"date": None}]
        result = filter_upcoming(records, datetime(2025, 3, 15, tzinfo=APP_TZ))
        assert result == [{"date": datetime(2025, 3, 16)}]


class TestSumConfirmedRevenue:
    def test_only_confirmed_and_completed_count(self):
        records = [{"status": "tentative", "budget": 500}, {"status": "confirmed", "budget": 300}]
        assert sum_confirmed_revenue(records) == 300

    def test_completed_counts_cancelled_does_not(self):
        records = [
            {"status": "completed", "budget": 100},
            {"status": "cancelled", "budget": 1000},
            {"status": "confirmed", "budget": 50},
        ]
        assert sum_confirmed_revenue(records) == 150

    def test_missing_budget_is_zero(self):
        records = [{"status": "confirmed"}, {"status": "confirmed", "budget": None}, {"status": "confirmed", "budget": 7}]
        assert sum_confirmed_revenue(records) == 7

    def test_models(self):
        events = [
            _event(datetime(2025, 1, 1, tzinfo=APP_TZ), status=EventStatus.CONFIRMED, budget=1200),
            _event(datetime(2025, 1, 1, tzinfo=APP_TZ), status=EventStatus.TENTATIVE, budget=800),
        ]
        assert sum_confirmed_revenue(events) == 1200

    def test_empty(self):
        assert sum_confirmed_revenue([]) == 0
