import pytest

from core import config
from core.errors import AuthFault, ValidationFault
from services.auth_service import GateState, SessionGate
from tests.conftest import FakeBiometric


def test_no_pin_starts_unlocked(preferences):
    gate = SessionGate(preferences)
    assert gate.cold_start() == GateState.UNLOCKED
    assert gate.is_authenticated


def test_pin_lifecycle(preferences):
    gate = SessionGate(preferences)
    gate.cold_start()
    gate.set_pin("1234")
    # Setting a PIN does not lock the current session
    assert gate.is_authenticated

    fresh = SessionGate(preferences)
    assert fresh.cold_start() == GateState.LOCKED

    assert fresh.verify("0000") is False
    assert fresh.state == GateState.LOCKED

    assert fresh.verify("1234") is True
    assert fresh.state == GateState.UNLOCKED

    fresh.logout()
    assert fresh.state == GateState.LOCKED


def test_unlock_raises_auth_fault(preferences):
    gate = SessionGate(preferences)
    gate.set_pin("1234")
    gate.cold_start()
    with pytest.raises(AuthFault):
        gate.unlock("9999")
    assert not gate.is_authenticated


def test_pin_is_hashed_and_not_in_settings(preferences):
    gate = SessionGate(preferences)
    gate.set_pin("4321")

    stored = preferences.get_secret(config.PIN_KEY)
    assert stored and stored != "4321"
    assert preferences.get_preference(config.PIN_KEY) is None


def test_plaintext_stored_pin_is_not_accepted(preferences):
    preferences.set_secret(config.PIN_KEY, "2468")
    gate = SessionGate(preferences)
    assert gate.cold_start() == GateState.LOCKED
    assert gate.verify("2468") is False
    assert gate.state == GateState.LOCKED


@pytest.mark.parametrize("entered", [" 1234", "1234 ", "1234\n"])
def test_pin_compared_exactly(preferences, entered):
    gate = SessionGate(preferences)
    gate.set_pin("1234")
    gate.cold_start()
    assert gate.verify(entered) is False
    assert gate.state == GateState.LOCKED


@pytest.mark.parametrize("pin", ["", "123", "12a4", "١٢٣٤"])
def test_short_or_non_numeric_pin_rejected(preferences, pin):
    gate = SessionGate(preferences)
    with pytest.raises(ValidationFault):
        gate.set_pin(pin)
    assert not gate.has_pin()


def test_pin_confirmation_must_match(preferences):
    gate = SessionGate(preferences)
    with pytest.raises(ValidationFault) as exc:
        gate.set_pin("1234", confirm="1235")
    assert "confirm" in exc.value.errors


def test_clear_pin_unlocks(preferences):
    gate = SessionGate(preferences)
    gate.set_pin("1234")
    gate.cold_start()
    gate.clear_pin()
    assert gate.is_authenticated
    assert SessionGate(preferences).cold_start() == GateState.UNLOCKED


def test_biometric_attempted_once_at_cold_start(preferences):
    bio = FakeBiometric()
    gate = SessionGate(preferences, biometric=bio)
    gate.set_pin("1234")
    assert gate.set_biometric_enabled(True) is True

    fresh = SessionGate(preferences, biometric=bio)
    bio.prompts.clear()
    assert fresh.cold_start() == GateState.UNLOCKED
    assert len(bio.prompts) == 1


def test_failed_biometric_leaves_pin_path_open(preferences):
    bio = FakeBiometric()
    gate = SessionGate(preferences, biometric=bio)
    gate.set_pin("1234")
    gate.set_biometric_enabled(True)

    bio.succeed = False
    fresh = SessionGate(preferences, biometric=bio)
    assert fresh.cold_start() == GateState.LOCKED
    assert fresh.verify("1234")


def test_biometric_not_enabled_without_hardware(preferences):
    gate = SessionGate(preferences, biometric=FakeBiometric(available=False))
    gate.set_pin("1234")
    assert gate.set_biometric_enabled(True) is False
    assert not gate.biometric_enabled()
