"""
Local PIN / biometric gate.

The gate only flips an in-process "unlocked" flag; there are no accounts.
The PIN (bcrypt hash) and the biometric flag live in the secure store
behind Preferences, never in the settings table.
"""

from enum import Enum

from core import config
from core.auth import hash_password, verify_password
from core.errors import AuthFault, ValidationFault
from core.logging_utils import get_logger
from core.preferences import Preferences

logger = get_logger(__name__)


class GateState(str, Enum):
    LOCKED = "locked"
    UNLOCKED = "unlocked"


class UnavailableBiometric:
    """Default biometric collaborator for hosts without a sensor."""

    def is_available(self) -> bool:
        return False

    def authenticate(self, prompt: str) -> bool:
        return False


class SessionGate:
    def __init__(self, preferences: Preferences, biometric=None):
        self.preferences = preferences
        self.biometric = biometric or UnavailableBiometric()
        self.state = GateState.LOCKED

    @property
    def is_authenticated(self) -> bool:
        return self.state == GateState.UNLOCKED

    def has_pin(self) -> bool:
        return bool(self.preferences.get_secret(config.PIN_KEY))

    def cold_start(self) -> GateState:
        """Initial state for a fresh process.

        Nothing to gate without a PIN. Otherwise start locked and make one
        automatic biometric attempt when enabled and available.
        """
        if not self.has_pin():
            self.state = GateState.UNLOCKED
            return self.state

        self.state = GateState.LOCKED
        if self.biometric_enabled():
            self.try_biometric("Authenticate to access Clinic Manager")
        return self.state

    def verify(self, pin: str) -> bool:
        stored = self.preferences.get_secret(config.PIN_KEY) or ""
        if not stored:
            self.state = GateState.UNLOCKED
            return True

        pin_ok = False
        try:
            pin_ok = verify_password(pin or "", stored)
        except ValueError as e:
            logger.error("Stored PIN hash is malformed: %s", e)

        if pin_ok:
            self.state = GateState.UNLOCKED
            logger.info("Unlocked with PIN")
        else:
            logger.warning("Incorrect PIN entered")
        return pin_ok

    def unlock(self, pin: str) -> None:
        """verify() for UI callers: raises AuthFault on a wrong PIN."""
        if not self.verify(pin):
            raise AuthFault("Incorrect PIN")

    def set_pin(self, pin: str, confirm: str | None = None) -> None:
        """Store a new PIN. Lock state is left as is."""
        pin = pin or ""
        if len(pin) < config.PIN_MIN_LENGTH or not (pin.isascii() and pin.isdigit()):
            raise ValidationFault({"pin": f"PIN must be at least {config.PIN_MIN_LENGTH} digits"})
        if confirm is not None and confirm != pin:
            raise ValidationFault({"confirm": "PINs do not match"})
        self.preferences.set_secret(config.PIN_KEY, hash_password(pin))
        logger.info("PIN updated")

    def clear_pin(self) -> None:
        self.preferences.delete_secret(config.PIN_KEY)
        self.preferences.delete_secret(config.BIOMETRIC_KEY)
        self.state = GateState.UNLOCKED
        logger.info("PIN removed; app no longer locked")

    def biometric_enabled(self) -> bool:
        return self.preferences.get_secret(config.BIOMETRIC_KEY) == "true"

    def set_biometric_enabled(self, enabled: bool) -> bool:
        """Enable needs a sensor and one successful scan. Returns the new flag."""
        if not enabled:
            self.preferences.delete_secret(config.BIOMETRIC_KEY)
            return False
        if not self.biometric.is_available():
            logger.warning("Biometric hardware unavailable; not enabling")
            return False
        if not self.biometric.authenticate("Enable biometric authentication"):
            logger.warning("Biometric check failed; not enabling")
            return False
        self.preferences.set_secret(config.BIOMETRIC_KEY, "true")
        return True

    def try_biometric(self, prompt: str = "Authenticate to access Clinic Manager") -> bool:
        if not self.biometric.is_available():
            return False
        try:
            ok = bool(self.biometric.authenticate(prompt))
        except Exception as e:
            logger.error("Biometric authentication error: %s", e)
            return False
        if ok:
            self.state = GateState.UNLOCKED
            logger.info("Unlocked with biometrics")
        return ok

    def logout(self) -> GateState:
        if self.has_pin():
            self.state = GateState.LOCKED
        return self.state
