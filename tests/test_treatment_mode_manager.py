import threading

import pytest

from th25.errors import ModeBeamOnNotAllowed, ModeInvalidTransition, ModePositionMismatch
from th25.treatment_mode_manager import (
    ELECTRON_ENERGY_MAX_MEV,
    ELECTRON_ENERGY_MIN_MEV,
    XRAY_ENERGY_MAX_MV,
    XRAY_ENERGY_MIN_MV,
    BeamState,
    EnergyMeV,
    EnergyMV,
    TreatmentMode,
    TreatmentModeManager,
)


def test_default_mode_is_light():
    assert TreatmentModeManager().current_mode() is TreatmentMode.LIGHT


def test_explicit_initial_mode():
    mgr = TreatmentModeManager(TreatmentMode.XRAY)
    assert mgr.current_mode() is TreatmentMode.XRAY


def test_energy_range_limits():
    assert TreatmentModeManager.is_electron_energy_in_range(EnergyMeV(1.0))
    assert not TreatmentModeManager.is_electron_energy_in_range(EnergyMeV(0.999))
    assert TreatmentModeManager.is_electron_energy_in_range(EnergyMeV(25.0))
    assert not TreatmentModeManager.is_electron_energy_in_range(EnergyMeV(25.001))
    assert TreatmentModeManager.is_xray_energy_in_range(EnergyMV(5.0))
    assert not TreatmentModeManager.is_xray_energy_in_range(EnergyMV(4.999))
    assert TreatmentModeManager.is_xray_energy_in_range(EnergyMV(25.0))
    assert not TreatmentModeManager.is_xray_energy_in_range(EnergyMV(25.001))


def test_electron_mode_change():
    mgr = TreatmentModeManager()
    mgr.request_mode_change(TreatmentMode.ELECTRON, EnergyMeV(10.0), BeamState.OFF)
    assert mgr.current_mode() is TreatmentMode.ELECTRON


def test_xray_mode_change():
    mgr = TreatmentModeManager()
    mgr.request_mode_change(TreatmentMode.XRAY, EnergyMV(25.0), BeamState.OFF)
    assert mgr.current_mode() is TreatmentMode.XRAY


def test_light_mode_change():
    mgr = TreatmentModeManager(TreatmentMode.ELECTRON)
    mgr.request_light_mode(BeamState.OFF)
    assert mgr.current_mode() is TreatmentMode.LIGHT


@pytest.mark.parametrize("state", [BeamState.ARMING, BeamState.ON, BeamState.STOPPING])
def test_beam_not_off_rejected(state):
    mgr = TreatmentModeManager()
    with pytest.raises(ModeBeamOnNotAllowed):
        mgr.request_mode_change(TreatmentMode.ELECTRON, EnergyMeV(10.0), state)
    with pytest.raises(ModeBeamOnNotAllowed):
        mgr.request_mode_change(TreatmentMode.XRAY, EnergyMV(10.0), state)
    with pytest.raises(ModeBeamOnNotAllowed):
        mgr.request_light_mode(state)
    assert mgr.current_mode() is TreatmentMode.LIGHT


def test_electron_energy_with_xray_mode_rejected():
    mgr = TreatmentModeManager()
    with pytest.raises(ModeInvalidTransition):
        mgr.request_mode_change(TreatmentMode.XRAY, EnergyMeV(10.0), BeamState.OFF)
    assert mgr.current_mode() is TreatmentMode.LIGHT


def test_xray_energy_with_electron_mode_rejected():
    mgr = TreatmentModeManager()
    with pytest.raises(ModeInvalidTransition):
        mgr.request_mode_change(TreatmentMode.ELECTRON, EnergyMV(10.0), BeamState.OFF)
    assert mgr.current_mode() is TreatmentMode.LIGHT


def test_light_mode_via_energy_api_rejected():
    mgr = TreatmentModeManager()
    with pytest.raises(ModeInvalidTransition):
        mgr.request_mode_change(TreatmentMode.LIGHT, EnergyMeV(10.0), BeamState.OFF)


@pytest.mark.parametrize("value", [0.99, 25.01, -1.0])
def test_electron_energy_out_of_range_rejected(value):
    mgr = TreatmentModeManager()
    with pytest.raises(ModeInvalidTransition):
        mgr.request_mode_change(TreatmentMode.ELECTRON, EnergyMeV(value), BeamState.OFF)
    assert mgr.current_mode() is TreatmentMode.LIGHT


@pytest.mark.parametrize("value", [4.99, 25.01, 0.0])
def test_xray_energy_out_of_range_rejected(value):
    mgr = TreatmentModeManager()
    with pytest.raises(ModeInvalidTransition):
        mgr.request_mode_change(TreatmentMode.XRAY, EnergyMV(value), BeamState.OFF)


def test_wrong_energy_type_rejected():
    mgr = TreatmentModeManager()
    with pytest.raises(TypeError):
        mgr.request_mode_change(TreatmentMode.ELECTRON, 10.0, BeamState.OFF)


def test_energy_range_predicates_boundaries():
    assert TreatmentModeManager.is_electron_energy_in_range(EnergyMeV(ELECTRON_ENERGY_MIN_MEV))
    assert TreatmentModeManager.is_electron_energy_in_range(EnergyMeV(ELECTRON_ENERGY_MAX_MEV))
    assert not TreatmentModeManager.is_electron_energy_in_range(EnergyMeV(0.5))
    assert TreatmentModeManager.is_xray_energy_in_range(EnergyMV(XRAY_ENERGY_MIN_MV))
    assert TreatmentModeManager.is_xray_energy_in_range(EnergyMV(XRAY_ENERGY_MAX_MV))
    assert not TreatmentModeManager.is_xray_energy_in_range(EnergyMV(4.0))


@pytest.mark.parametrize("from_mode", list(TreatmentMode))
@pytest.mark.parametrize("to_mode", list(TreatmentMode))
def test_all_transitions_allowed(from_mode, to_mode):
    assert TreatmentModeManager.is_mode_transition_allowed(from_mode, to_mode) is True


def test_same_mode_is_noop():
    mgr = TreatmentModeManager(TreatmentMode.ELECTRON)
    mgr.request_mode_change(TreatmentMode.ELECTRON, EnergyMeV(ELECTRON_ENERGY_MIN_MEV), BeamState.OFF)
    assert mgr.current_mode() is TreatmentMode.ELECTRON


def test_verify_mode_consistency():
    mgr = TreatmentModeManager()
    mgr.request_mode_change(TreatmentMode.XRAY, EnergyMV(15.0), BeamState.OFF)
    mgr.verify_mode_consistency(TreatmentMode.XRAY)
    assert mgr.current_mode() is TreatmentMode.XRAY
    with pytest.raises(ModePositionMismatch):
        mgr.verify_mode_consistency(TreatmentMode.ELECTRON)


def test_energy_types_are_distinct():
    assert EnergyMeV(10.0) != EnergyMV(10.0)
    assert EnergyMeV(10.0) == EnergyMeV(10.0)


def test_concurrent_writers_leave_valid_mode():
    mgr = TreatmentModeManager()
    valid = set(TreatmentMode)
    seen = []

    def writer(mode, energy):
        for _ in range(500):
            mgr.request_mode_change(mode, energy, BeamState.OFF)
            mgr.request_light_mode(BeamState.OFF)

    def reader():
        for _ in range(2000):
            seen.append(mgr.current_mode())

    threads = [
        threading.Thread(target=writer, args=(TreatmentMode.ELECTRON, EnergyMeV(5.0))),
        threading.Thread(target=writer, args=(TreatmentMode.XRAY, EnergyMV(10.0))),
        threading.Thread(target=reader),
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert set(seen) <= valid
    assert mgr.current_mode() is TreatmentMode.LIGHT