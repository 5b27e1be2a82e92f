import pytest

from american_lattice.options import (
    AveragedLatticePricer,
    BinomialLatticePricer,
    Dividend,
    InvalidConfiguration,
    LatticeConfig,
    OptionParameters,
    PriceModel,
    american,
)


def test_lattice_pricers_satisfy_price_model():
    assert isinstance(BinomialLatticePricer(), PriceModel)
    assert isinstance(AveragedLatticePricer(), PriceModel)


def test_binomial_pricer_matches_functional_api(atm_put):
    dividends = [Dividend(time=0.3, amount=1.2), Dividend(time=0.8, amount=1.3)]
    pricer = BinomialLatticePricer(steps=11)

    expected = american(atm_put, LatticeConfig(steps=11, dividends=dividends))
    assert pricer.price(atm_put, dividends) == pytest.approx(expected)


def test_averaged_pricer_is_mean_of_neighbouring_lattices(atm_call):
    dividends = (Dividend(time=0.5, amount=2.0),)
    pricer = AveragedLatticePricer(steps=12)

    p12 = american(atm_call, LatticeConfig(steps=12, dividends=dividends))
    p13 = american(atm_call, LatticeConfig(steps=13, dividends=dividends))
    assert pricer.price(atm_call, dividends) == pytest.approx((p12 + p13) / 2)


def test_early_exercise_flag_is_forwarded():
    itm_put_params = OptionParameters(
        spot=60.0,
        strike=100.0,
        time_to_expiry=1.0,
        volatility=0.2,
        rate=0.05,
        option_type="put",
    )

    plain = BinomialLatticePricer(steps=11).price(itm_put_params)
    exercised = BinomialLatticePricer(steps=11, early_exercise=True).price(
        itm_put_params
    )
    assert exercised > plain


@pytest.mark.parametrize("pricer_cls", [BinomialLatticePricer, AveragedLatticePricer])
def test_invalid_steps_raise(pricer_cls):
    with pytest.raises(InvalidConfiguration, match="steps must be >= 1"):
        pricer_cls(steps=0)


@pytest.mark.parametrize("pricer_cls", [BinomialLatticePricer, AveragedLatticePricer])
@pytest.mark.parametrize("steps", [2.5, "3", True, None])
def test_non_integer_steps_raise_on_construction(pricer_cls, steps):
    with pytest.raises(InvalidConfiguration, match="steps must be an integer"):
        pricer_cls(steps=steps)
