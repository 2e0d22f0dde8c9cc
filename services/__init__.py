from .clinic_repository import ClinicRepository
from .auth_service import SessionGate, GateState

# Import the Streamlit-facing modules (core.session_manager) directly where
# needed; this package stays importable without a running app.

__all__ = ["ClinicRepository", "SessionGate", "GateState"]
