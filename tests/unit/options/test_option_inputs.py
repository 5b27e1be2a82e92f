from datetime import date, datetime

import pytest

from american_lattice.options import (
    Dividend,
    HistoricalDividend,
    LatticeConfig,
    MalformedInput,
    OptionParameters,
    OptionType,
    normalize_option_type,
    schedule_from_history,
    years_between,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("C", OptionType.CALL),
        ("P", OptionType.PUT),
        ("call", OptionType.CALL),
        ("PUT", OptionType.PUT),
        (OptionType.PUT, OptionType.PUT),
    ],
)
def test_normalize_option_type(raw, expected):
    assert normalize_option_type(raw) is expected


def test_normalize_option_type_rejects_unknown_code():
    with pytest.raises(MalformedInput, match="put or call"):
        normalize_option_type("X")


def test_option_parameters_normalize_type_and_numbers():
    params = OptionParameters(
        spot=100, strike="95.5", time_to_expiry=0.5, volatility=0.3, rate=0, option_type="P"
    )

    assert params.option_type is OptionType.PUT
    assert params.strike == 95.5
    assert isinstance(params.spot, float)


@pytest.mark.parametrize(
    ("field", "value", "message"),
    [
        ("spot", 0.0, "spot must be > 0"),
        ("strike", -1.0, "strike must be > 0"),
        ("time_to_expiry", 0.0, "time_to_expiry must be > 0"),
        ("volatility", -0.1, "volatility must be >= 0"),
        ("rate", float("nan"), "rate must be finite"),
        ("spot", "abc", "spot must be a number"),
    ],
)
def test_option_parameters_validation(field, value, message):
    fields = dict(
        spot=100.0,
        strike=100.0,
        time_to_expiry=1.0,
        volatility=0.2,
        rate=0.01,
        option_type="call",
    )
    fields[field] = value
    with pytest.raises(MalformedInput, match=message):
        OptionParameters(**fields)


def test_option_parameters_are_immutable():
    params = OptionParameters(100.0, 100.0, 1.0, 0.2, 0.01, "call")
    with pytest.raises(AttributeError):
        params.spot = 101.0


@pytest.mark.parametrize(
    ("time", "amount", "message"),
    [(-0.1, 1.0, "time must be >= 0"), (0.1, -1.0, "amount must be >= 0")],
)
def test_dividend_validation(time, amount, message):
    with pytest.raises(MalformedInput, match=message):
        Dividend(time=time, amount=amount)


def test_lattice_config_freezes_dividend_list():
    dividends = [Dividend(0.5, 1.0)]
    config = LatticeConfig(steps=10, dividends=dividends)
    dividends.append(Dividend(0.7, 1.0))

    assert config.dividends == (Dividend(0.5, 1.0),)


def test_years_between_uses_364_day_year():
    assert years_between("2021-01-01", "2021-12-31") == pytest.approx(1.0)
    assert years_between(date(2021, 1, 1), datetime(2021, 2, 1)) == pytest.approx(
        31 / 364
    )
    assert years_between("2021-03-01", "2021-02-01") == pytest.approx(-28 / 364)


@pytest.mark.parametrize("bad", ["", "   ", None, "not-a-date"])
def test_years_between_rejects_blank_or_bad_dates(bad):
    with pytest.raises(MalformedInput, match="Failed to parse date"):
        years_between("2021-01-01", bad)


def test_schedule_from_history_drops_past_and_far_payments():
    history = [
        HistoricalDividend(ex_date="2021-09-17", amount=1.428),
        HistoricalDividend(ex_date="2021-06-18", amount=1.376),
        HistoricalDividend(ex_date="2022-09-16", amount=1.5),
    ]

    schedule = schedule_from_history(history, "2021-08-02", horizon=0.5)

    assert schedule == (Dividend(time=46 / 364, amount=1.428),)
    assert schedule[0].time == pytest.approx(years_between("2021-08-02", "2021-09-17"))


def test_schedule_from_history_keeps_order_without_horizon():
    history = [
        HistoricalDividend(ex_date=date(2021, 12, 17), amount=1.6),
        HistoricalDividend(ex_date=date(2021, 9, 17), amount=1.4),
    ]

    schedule = schedule_from_history(history, date(2021, 8, 2))

    assert [d.amount for d in schedule] == [1.6, 1.4]
