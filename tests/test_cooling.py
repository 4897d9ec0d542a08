from __future__ import annotations

import pytest

from psychrometrics.exceptions import InvalidArgumentError
from psychrometrics.fluids.flows import CoolantData, FlowOfHumidAir
from psychrometrics.fluids.protocols import HumidAir
from psychrometrics.process.cooling import (
    coil_bypass_factor,
    condensate_discharge,
    coolant_mass_flow_from_power,
    cooling_from_power,
    cooling_from_relative_humidity,
    cooling_from_temperature,
    dry_cooling_from_power,
    dry_cooling_from_temperature,
)
from psychrometrics.properties import humid_air, liquid_water


@pytest.fixture
def summer_flow() -> FlowOfHumidAir:
    return FlowOfHumidAir.of_mass_flow(HumidAir.from_relative_humidity(35.0, 45.0), 1.0)


@pytest.fixture
def coolant() -> CoolantData:
    # coil wall at 4.5 °C
    return CoolantData(supply_temperature=4.0, return_temperature=5.0)


class TestHelpers:
    def test_bypass_factor(self):
        assert coil_bypass_factor(5.0, 35.0, 20.0) == pytest.approx(0.5)
        assert coil_bypass_factor(5.0, 35.0, 35.0) == pytest.approx(1.0)
        assert coil_bypass_factor(5.0, 35.0, 5.0) == pytest.approx(0.0)

    def test_bypass_factor_undefined_at_wall_temperature(self):
        with pytest.raises(InvalidArgumentError):
            coil_bypass_factor(10.0, 10.0, 8.0)

    def test_condensate_discharge(self):
        assert condensate_discharge(2.0, 0.012, 0.008) == pytest.approx(0.008)
        assert condensate_discharge(2.0, 0.0, 0.0) == 0.0
        with pytest.raises(InvalidArgumentError):
            condensate_discharge(-1.0, 0.012, 0.008)

    def test_coolant_mass_flow(self):
        coolant = CoolantData(supply_temperature=6.0, return_temperature=12.0)
        cp = (liquid_water.specific_heat(6.0) + liquid_water.specific_heat(12.0)) / 2.0
        assert coolant_mass_flow_from_power(coolant, -25_000.0) == pytest.approx(25.0 / (cp * 6.0))

    def test_coolant_mass_flow_needs_temperature_rise(self):
        with pytest.raises(InvalidArgumentError):
            coolant_mass_flow_from_power(CoolantData(supply_temperature=7.0, return_temperature=7.0), -1000.0)


class TestDryCooling:
    def test_temperature_and_power_agree(self, summer_flow):
        by_temperature = dry_cooling_from_temperature(summer_flow, 25.0)
        assert by_temperature.heat_of_process < 0.0
        assert by_temperature.outlet_flow.humidity_ratio == summer_flow.humidity_ratio

        by_power = dry_cooling_from_power(summer_flow, by_temperature.heat_of_process)
        assert by_power.outlet_flow.temperature == pytest.approx(25.0, abs=1e-3)

    def test_target_below_dew_point_returns_inlet(self, summer_flow, caplog):
        target = summer_flow.fluid.dew_point_temperature - 2.0
        with caplog.at_level("INFO", logger="psychrometrics.process.cooling"):
            result = dry_cooling_from_temperature(summer_flow, target)
        assert result.outlet_flow is summer_flow
        assert result.heat_of_process == 0.0
        assert any("below the dew point" in record.getMessage() for record in caplog.records)

    def test_target_above_inlet_returns_inlet(self, summer_flow):
        result = dry_cooling_from_temperature(summer_flow, 40.0)
        assert result.outlet_flow is summer_flow
        assert result.heat_of_process == 0.0

    def test_positive_power_is_rejected(self, summer_flow):
        with pytest.raises(InvalidArgumentError):
            dry_cooling_from_power(summer_flow, 1000.0)


class TestRealCoolingCoil:
    """Bypass factor coil: the iterative adapters reproduce the closed-form balance."""

    def test_direct_calculation_at_sixteen_degrees(self, summer_flow, coolant):
        result = cooling_from_temperature(summer_flow, coolant, 16.0)

        pressure = summer_flow.pressure
        mda = summer_flow.dry_air_mass_flow
        x_in = summer_flow.humidity_ratio
        bypass_factor = coil_bypass_factor(4.5, 35.0, 16.0)
        x_wall = humid_air.max_humidity_ratio(humid_air.saturation_pressure(4.5), pressure)
        x_out = x_wall * (1.0 - bypass_factor) + x_in * bypass_factor
        m_cond = condensate_discharge((1.0 - bypass_factor) * mda, x_in, x_wall)

        assert result.outlet_flow.temperature == 16.0
        assert result.bypass_factor == pytest.approx(bypass_factor)
        assert result.outlet_flow.humidity_ratio == pytest.approx(x_out, rel=1e-9)
        assert result.condensate_flow.mass_flow == pytest.approx(m_cond, rel=1e-9)
        assert result.condensate_flow.temperature == 4.5
        assert result.coolant_data == coolant
        assert result.heat_of_process < 0.0
        assert result.outlet_flow.relative_humidity < 100.0

    def test_power_adapter_matches_direct_calculation(self, summer_flow, coolant):
        direct = cooling_from_temperature(summer_flow, coolant, 16.0)
        solved = cooling_from_power(summer_flow, coolant, direct.heat_of_process)

        assert solved.outlet_flow.temperature == pytest.approx(16.0, abs=1e-3)
        assert solved.outlet_flow.humidity_ratio == pytest.approx(direct.outlet_flow.humidity_ratio, rel=1e-4)
        assert solved.condensate_flow.mass_flow == pytest.approx(direct.condensate_flow.mass_flow, rel=1e-3)
        assert solved.heat_of_process == pytest.approx(direct.heat_of_process, rel=1e-5)

    def test_relative_humidity_adapter_matches_direct_calculation(self, summer_flow, coolant):
        direct = cooling_from_temperature(summer_flow, coolant, 16.0)
        solved = cooling_from_relative_humidity(summer_flow, coolant, direct.outlet_flow.relative_humidity)

        assert solved.outlet_flow.temperature == pytest.approx(16.0, abs=1e-3)
        assert solved.outlet_flow.humidity_ratio == pytest.approx(direct.outlet_flow.humidity_ratio, rel=1e-4)
        assert solved.condensate_flow.mass_flow == pytest.approx(direct.condensate_flow.mass_flow, rel=1e-3)

    def test_relative_humidity_target_below_inlet_dew_point(self, summer_flow):
        # wall at 15 °C; the outlet for 95 % RH lies below the 21 °C inlet dew point
        coolant = CoolantData(supply_temperature=12.0, return_temperature=18.0)
        result = cooling_from_relative_humidity(summer_flow, coolant, 95.0)

        t_out = result.outlet_flow.temperature
        assert result.outlet_flow.relative_humidity == pytest.approx(95.0, abs=1e-3)
        assert 15.0 < t_out < summer_flow.fluid.dew_point_temperature
        assert result.condensate_flow.mass_flow > 0.0

        direct = cooling_from_temperature(summer_flow, coolant, t_out)
        assert result.outlet_flow.humidity_ratio == pytest.approx(direct.outlet_flow.humidity_ratio, rel=1e-9)
        assert result.heat_of_process == pytest.approx(direct.heat_of_process, rel=1e-9)

    def test_relative_humidity_target_with_dry_coil(self, summer_flow):
        # wall at 25 °C stays above the inlet dew point, so only sensible cooling happens
        warm = CoolantData(supply_temperature=24.0, return_temperature=26.0)
        result = cooling_from_relative_humidity(summer_flow, warm, 70.0)

        assert result.outlet_flow.relative_humidity == pytest.approx(70.0, abs=1e-3)
        assert result.outlet_flow.humidity_ratio == pytest.approx(summer_flow.humidity_ratio)
        assert result.condensate_flow.mass_flow == 0.0
        assert 25.0 < result.outlet_flow.temperature < summer_flow.temperature

    @pytest.mark.parametrize(
        "case",
        [
            {"name": "dry_coil_too_warm_for_target", "coolant": CoolantData(24.0, 26.0), "target": 90.0},
            {"name": "coil_warmer_than_inlet", "coolant": CoolantData(36.0, 40.0), "target": 60.0},
        ],
        ids=lambda case: case["name"],
    )
    def test_unreachable_relative_humidity_is_rejected(self, summer_flow, case):
        with pytest.raises(InvalidArgumentError):
            cooling_from_relative_humidity(summer_flow, case["coolant"], case["target"])

    def test_warm_coil_does_not_condense(self, summer_flow):
        warm = CoolantData(supply_temperature=24.0, return_temperature=26.0)
        result = cooling_from_temperature(summer_flow, warm, 30.0)
        assert result.condensate_flow.mass_flow == 0.0
        assert result.outlet_flow.humidity_ratio == pytest.approx(summer_flow.humidity_ratio)

    def test_no_duty_returns_inlet(self, summer_flow, coolant):
        for result in (
            cooling_from_temperature(summer_flow, coolant, summer_flow.temperature),
            cooling_from_power(summer_flow, coolant, 0.0),
            cooling_from_relative_humidity(summer_flow, coolant, summer_flow.relative_humidity),
        ):
            assert result.outlet_flow is summer_flow
            assert result.heat_of_process == 0.0
            assert result.condensate_flow.mass_flow == 0.0
            assert result.bypass_factor == 1.0
            assert result.coolant_data == coolant

    @pytest.mark.parametrize(
        "case",
        [
            {"name": "target_above_inlet", "call": lambda flow, c: cooling_from_temperature(flow, c, 40.0)},
            {"name": "target_below_freezing", "call": lambda flow, c: cooling_from_temperature(flow, c, -1.0)},
            {"name": "rh_below_inlet", "call": lambda flow, c: cooling_from_relative_humidity(flow, c, 30.0)},
            {"name": "rh_near_saturation", "call": lambda flow, c: cooling_from_relative_humidity(flow, c, 99.0)},
            {"name": "positive_power", "call": lambda flow, c: cooling_from_power(flow, c, 500.0)},
            {"name": "power_beyond_limit", "call": lambda flow, c: cooling_from_power(flow, c, -1e7)},
        ],
        ids=lambda case: case["name"],
    )
    def test_invalid_targets(self, summer_flow, coolant, case):
        with pytest.raises(InvalidArgumentError):
            case["call"](summer_flow, coolant)

    def test_dry_inlet_cannot_reach_target_humidity(self, coolant):
        flow = FlowOfHumidAir.of_mass_flow(HumidAir(temperature=30.0), 1.0)
        with pytest.raises(InvalidArgumentError):
            cooling_from_relative_humidity(flow, coolant, 50.0)
