"""Tests for depreciation schedule projection."""

from decimal import Decimal

from prodops_modules.assets.helpers import calculate_units_of_production, generate_depreciation_schedule
from prodops_modules.assets.models import DepreciationMethod, SchedulePeriod


def _expenses(schedule):
    return [entry.depreciation_expense for entry in schedule]


class TestStraightLineSchedule:

    def test_annual(self, standard_asset, clock_months_after):
        schedule = generate_depreciation_schedule(standard_asset(), clock=clock_months_after(3))
        assert len(schedule) == 5
        assert _expenses(schedule) == [Decimal("1800.00")] * 5
        assert [e.period_label for e in schedule] == ["Year 1", "Year 2", "Year 3", "Year 4", "Year 5"]
        assert schedule[0].beginning_value == Decimal("10000.00")
        assert schedule[-1].ending_value == Decimal("1000.00")
        assert schedule[-1].accumulated_depreciation == Decimal("9000.00")

    def test_monthly(self, standard_asset, clock_months_after):
        schedule = generate_depreciation_schedule(
            standard_asset(), SchedulePeriod.MONTHLY, clock=clock_months_after(3),
        )
        assert len(schedule) == 60
        assert schedule[0].period_label == "Month 1"
        assert schedule[0].depreciation_expense == Decimal("150.00")
        assert schedule[-1].period == 60
        assert schedule[-1].ending_value == Decimal("1000.00")

    def test_period_accepts_string(self, standard_asset, clock_months_after):
        schedule = generate_depreciation_schedule(standard_asset(), "monthly", clock=clock_months_after(3))
        assert len(schedule) == 60

    def test_zero_life_has_no_periods(self, standard_asset, clock_months_after):
        assert generate_depreciation_schedule(
            standard_asset(useful_life_months=0), clock=clock_months_after(3),
        ) == []


class TestDecliningBalanceSchedule:

    def test_annual_stops_at_salvage(self, standard_asset, clock_months_after):
        schedule = generate_depreciation_schedule(
            standard_asset(DepreciationMethod.DECLINING_BALANCE), clock=clock_months_after(3),
        )
        assert [e.ending_value for e in schedule] == [
            Decimal("6000.00"),
            Decimal("3600.00"),
            Decimal("2160.00"),
            Decimal("1296.00"),
            Decimal("1000.00"),
        ]
        assert schedule[-1].depreciation_expense == Decimal("296.00")

    def test_monthly_first_period(self, standard_asset, clock_months_after):
        schedule = generate_depreciation_schedule(
            standard_asset(DepreciationMethod.DECLINING_BALANCE),
            SchedulePeriod.MONTHLY,
            clock=clock_months_after(3),
        )
        assert schedule[0].depreciation_expense == Decimal("333.33")
        assert all(e.ending_value >= Decimal("1000.00") for e in schedule)

    def test_multiplier_is_applied(self, standard_asset, clock_months_after):
        schedule = generate_depreciation_schedule(
            standard_asset(DepreciationMethod.DECLINING_BALANCE),
            clock=clock_months_after(3),
            declining_rate=Decimal("1.5"),
        )
        assert schedule[0].depreciation_expense == Decimal("3000.00")


class TestSumOfYearsSchedule:

    def test_annual_digits(self, standard_asset, clock_months_after):
        schedule = generate_depreciation_schedule(
            standard_asset(DepreciationMethod.SUM_OF_YEARS), clock=clock_months_after(30),
        )
        assert _expenses(schedule) == [
            Decimal("3000.00"),
            Decimal("2400.00"),
            Decimal("1800.00"),
            Decimal("1200.00"),
            Decimal("600.00"),
        ]
        assert schedule[-1].ending_value == Decimal("1000.00")

    def test_monthly_steps_down_each_year(self, standard_asset, clock_months_after):
        schedule = generate_depreciation_schedule(
            standard_asset(DepreciationMethod.SUM_OF_YEARS),
            SchedulePeriod.MONTHLY,
            clock=clock_months_after(30),
        )
        assert len(schedule) == 60
        assert schedule[0].depreciation_expense == Decimal("250.00")
        assert schedule[11].depreciation_expense == Decimal("250.00")
        assert schedule[12].depreciation_expense == Decimal("200.00")
        assert schedule[-1].depreciation_expense == Decimal("50.00")
        assert schedule[-1].ending_value == Decimal("1000.00")

    def test_does_not_depend_on_current_date(self, standard_asset, clock_months_after):
        params = standard_asset(DepreciationMethod.SUM_OF_YEARS)
        early = generate_depreciation_schedule(params, clock=clock_months_after(1))
        late = generate_depreciation_schedule(params, clock=clock_months_after(50))
        assert early == late


class TestUnitsOfProductionSchedule:

    def test_projects_observed_rate(self, standard_asset, clock_months_after):
        params = standard_asset(
            DepreciationMethod.UNITS_OF_PRODUCTION,
            units_produced=Decimal("250"),
            total_units_expected=Decimal("1000"),
        )
        schedule = generate_depreciation_schedule(params, clock=clock_months_after(10))
        assert _expenses(schedule) == [
            Decimal("2700.00"),
            Decimal("2700.00"),
            Decimal("2700.00"),
            Decimal("900.00"),
        ]
        assert schedule[-1].ending_value == Decimal("1000.00")

    def test_rate_follows_the_valuation_date(self, standard_asset, clock_months_after):
        params = standard_asset(
            DepreciationMethod.UNITS_OF_PRODUCTION,
            units_produced=Decimal("250"),
            total_units_expected=Decimal("1000"),
        )
        schedule = generate_depreciation_schedule(params, clock=clock_months_after(20))
        assert _expenses(schedule) == [Decimal("1350.00")] * 5
        assert schedule[-1].ending_value == Decimal("3250.00")

    def test_monthly_expense_matches_current_valuation(self, standard_asset, clock_months_after):
        params = standard_asset(
            DepreciationMethod.UNITS_OF_PRODUCTION,
            units_produced=Decimal("250"),
            total_units_expected=Decimal("1000"),
        )
        clock = clock_months_after(10)
        current = calculate_units_of_production(params, clock)
        schedule = generate_depreciation_schedule(params, SchedulePeriod.MONTHLY, clock=clock)
        assert {e.depreciation_expense for e in schedule[:-1]} == {current.monthly_depreciation}

    def test_no_usage_yet_projects_nothing(self, standard_asset, clock_months_after):
        params = standard_asset(DepreciationMethod.UNITS_OF_PRODUCTION)
        schedule = generate_depreciation_schedule(params, clock=clock_months_after(10))
        assert len(schedule) == 5
        assert all(e.ending_value == Decimal("10000.00") for e in schedule)


class TestScheduleContinuity:

    def test_each_period_starts_where_the_last_ended(self, standard_asset, clock_months_after):
        for method in DepreciationMethod:
            schedule = generate_depreciation_schedule(
                standard_asset(method, units_produced=Decimal("40"), total_units_expected=Decimal("500")),
                SchedulePeriod.MONTHLY,
                clock=clock_months_after(7),
            )
            for previous, current in zip(schedule, schedule[1:]):
                assert current.beginning_value == previous.ending_value
