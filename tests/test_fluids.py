from __future__ import annotations

import dataclasses
import logging

import pytest

from psychrometrics.constants import STANDARD_ATMOSPHERE
from psychrometrics.exceptions import InvalidArgumentError
from psychrometrics.fluids import protocols
from psychrometrics.fluids.flows import CoolantData, FlowOfHumidAir, FlowOfWater
from psychrometrics.fluids.protocols import CoolPropHumidAir, EmpiricalHumidAir, HumidAir, VapourState
from psychrometrics.logging_utils import SOLVER_LOGGER_NAME, configure_logging


class TestHumidAir:
    @pytest.mark.parametrize(
        "case",
        [
            {"name": "pressure_too_low", "kwargs": {"temperature": 20.0, "pressure": 10_000.0}},
            {"name": "temperature_too_low", "kwargs": {"temperature": -200.0}},
            {"name": "temperature_too_high", "kwargs": {"temperature": 250.0}},
            {"name": "negative_humidity_ratio", "kwargs": {"temperature": 20.0, "humidity_ratio": -0.1}},
            {"name": "humidity_ratio_too_high", "kwargs": {"temperature": 20.0, "humidity_ratio": 3.5}},
            # vapour cannot exist as a gas once saturation pressure exceeds total pressure
            {"name": "above_boiling_point", "kwargs": {"temperature": 120.0}},
        ],
        ids=lambda case: case["name"],
    )
    def test_invalid_construction(self, case):
        with pytest.raises(InvalidArgumentError):
            HumidAir(**case["kwargs"])

    def test_invalid_argument_error_is_value_error(self):
        with pytest.raises(ValueError, match="pressure"):
            HumidAir(temperature=20.0, pressure=0.0)

    def test_is_immutable(self):
        air = HumidAir(temperature=20.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            air.temperature = 25.0

    def test_defaults_to_dry_air_at_standard_atmosphere(self):
        air = HumidAir(temperature=20.0)
        assert air.pressure == STANDARD_ATMOSPHERE
        assert air.humidity_ratio == 0.0
        assert air.relative_humidity == 0.0
        assert air.vapour_state is VapourState.UNSATURATED

    def test_from_relative_humidity(self):
        air = HumidAir.from_relative_humidity(20.0, 50.0)
        assert air.relative_humidity == pytest.approx(50.0, rel=1e-9)
        assert air.humidity_ratio == pytest.approx(0.007263, rel=1e-3)
        assert air.dew_point_temperature == pytest.approx(9.27, abs=0.01)

    def test_from_dew_point(self):
        air = HumidAir.from_dew_point(20.0, 9.27)
        assert air.relative_humidity == pytest.approx(50.0, abs=0.05)

    def test_from_dew_point_above_dry_bulb_is_rejected(self):
        with pytest.raises(InvalidArgumentError):
            HumidAir.from_dew_point(20.0, 25.0)

    def test_saturated_state(self):
        air = HumidAir.from_relative_humidity(15.0, 100.0)
        assert air.dew_point_temperature == pytest.approx(15.0, abs=1e-6)
        assert air.wet_bulb_temperature == pytest.approx(15.0, abs=1e-4)

    @pytest.mark.parametrize(
        "case",
        [
            {"name": "unsaturated", "temperature": 20.0, "humidity_ratio": 0.005, "state": VapourState.UNSATURATED},
            {"name": "water_mist", "temperature": 20.0, "humidity_ratio": 0.03, "state": VapourState.WATER_MIST},
            {"name": "ice_fog", "temperature": -10.0, "humidity_ratio": 0.01, "state": VapourState.ICE_FOG},
        ],
        ids=lambda case: case["name"],
    )
    def test_vapour_state(self, case):
        air = HumidAir(temperature=case["temperature"], humidity_ratio=case["humidity_ratio"])
        assert air.vapour_state is case["state"]

    def test_vapour_state_at_saturation_limit(self):
        x_max = HumidAir(temperature=20.0).max_humidity_ratio
        assert HumidAir(temperature=20.0, humidity_ratio=x_max).vapour_state is VapourState.SATURATED

    def test_transport_properties_are_consistent(self):
        air = HumidAir.from_relative_humidity(25.0, 60.0)
        assert air.kinematic_viscosity == pytest.approx(air.dynamic_viscosity / air.density)
        assert air.prandtl_number == pytest.approx(
            air.dynamic_viscosity * air.specific_heat * 1000.0 / air.thermal_conductivity
        )
        assert air.thermal_diffusivity == pytest.approx(
            air.thermal_conductivity / (air.density * air.specific_heat * 1000.0)
        )


class TestHumidAirModels:
    def test_empirical_model_builds_humid_air(self):
        state = EmpiricalHumidAir().state(20.0, STANDARD_ATMOSPHERE, 0.0073)
        assert state == HumidAir(temperature=20.0, pressure=STANDARD_ATMOSPHERE, humidity_ratio=0.0073)

    def test_coolprop_failure_is_logged_and_reraised(self, monkeypatch, caplog):
        def broken(*args):
            raise RuntimeError("input out of range")

        monkeypatch.setattr(protocols.CP, "HAPropsSI", broken)
        state = CoolPropHumidAir().state(20.0, STANDARD_ATMOSPHERE, 0.0073)

        with caplog.at_level(logging.ERROR, logger=protocols.__name__):
            with pytest.raises(ValueError, match="Cannot evaluate humid air property 'R'") as excinfo:
                _ = state.relative_humidity

        assert isinstance(excinfo.value.__cause__, RuntimeError)
        assert any("HAPropsSI failed" in record.getMessage() for record in caplog.records)


class TestFlowOfHumidAir:
    def test_of_mass_flow_stores_dry_air_basis(self):
        air = HumidAir(temperature=25.0, humidity_ratio=0.01)
        flow = FlowOfHumidAir.of_mass_flow(air, 1.01)
        assert flow.dry_air_mass_flow == pytest.approx(1.0)
        assert flow.mass_flow == pytest.approx(1.01)

    def test_of_volumetric_flow_round_trip(self):
        air = HumidAir.from_relative_humidity(25.0, 50.0)
        flow = FlowOfHumidAir.of_volumetric_flow(air, 2.5)
        assert flow.volumetric_flow == pytest.approx(2.5)
        assert flow.mass_flow == pytest.approx(2.5 * air.density)

    def test_shortcuts_follow_fluid(self):
        air = HumidAir.from_relative_humidity(25.0, 50.0, pressure=90_000.0)
        flow = FlowOfHumidAir.of_dry_air_mass_flow(air, 0.5)
        assert flow.temperature == 25.0
        assert flow.pressure == 90_000.0
        assert flow.humidity_ratio == air.humidity_ratio
        assert flow.relative_humidity == air.relative_humidity
        assert flow.specific_enthalpy == air.specific_enthalpy

    @pytest.mark.parametrize(
        "case",
        [
            {"name": "negative_dry_air", "factory": FlowOfHumidAir.of_dry_air_mass_flow, "value": -1.0},
            {"name": "negative_mass", "factory": FlowOfHumidAir.of_mass_flow, "value": -1.0},
            {"name": "too_large", "factory": FlowOfHumidAir.of_mass_flow, "value": 1e10},
            {"name": "negative_volume", "factory": FlowOfHumidAir.of_volumetric_flow, "value": -1.0},
        ],
        ids=lambda case: case["name"],
    )
    def test_invalid_flow(self, case):
        with pytest.raises(InvalidArgumentError):
            case["factory"](HumidAir(temperature=20.0), case["value"])


class TestWaterAndCoolant:
    def test_flow_of_water(self):
        water = FlowOfWater(temperature=20.0, mass_flow=0.5)
        assert water.density == pytest.approx(998.2, abs=0.1)
        assert water.volumetric_flow == pytest.approx(0.5 / water.density)
        assert water.specific_enthalpy == pytest.approx(20.0 * water.specific_heat)

    def test_flow_of_water_rejects_negative_flow(self):
        with pytest.raises(InvalidArgumentError):
            FlowOfWater(temperature=20.0, mass_flow=-0.1)

    def test_coolant_average_temperature(self):
        assert CoolantData(supply_temperature=6.0, return_temperature=12.0).average_temperature == 9.0

    @pytest.mark.parametrize(
        "case",
        [
            {"name": "return_below_supply", "supply": 10.0, "return": 5.0},
            {"name": "supply_below_zero", "supply": -2.0, "return": 5.0},
            {"name": "return_above_limit", "supply": 70.0, "return": 95.0},
        ],
        ids=lambda case: case["name"],
    )
    def test_invalid_coolant(self, case):
        with pytest.raises(InvalidArgumentError):
            CoolantData(supply_temperature=case["supply"], return_temperature=case["return"])


class TestLogging:
    def test_solver_level_is_set_independently(self):
        solver_logger = logging.getLogger(SOLVER_LOGGER_NAME)
        previous = solver_logger.level
        try:
            configure_logging(logging.WARNING, solver_level=logging.DEBUG)
            assert solver_logger.level == logging.DEBUG
        finally:
            solver_logger.setLevel(previous)
