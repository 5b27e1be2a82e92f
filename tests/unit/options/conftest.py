from __future__ import annotations

import pytest

from american_lattice.options import OptionParameters, OptionType


@pytest.fixture
def atm_call() -> OptionParameters:
    return OptionParameters(
        spot=100.0,
        strike=100.0,
        time_to_expiry=1.0,
        volatility=0.2,
        rate=0.012,
        option_type=OptionType.CALL,
    )


@pytest.fixture
def atm_put(atm_call: OptionParameters) -> OptionParameters:
    return OptionParameters(
        spot=atm_call.spot,
        strike=atm_call.strike,
        time_to_expiry=atm_call.time_to_expiry,
        volatility=atm_call.volatility,
        rate=atm_call.rate,
        option_type=OptionType.PUT,
    )
