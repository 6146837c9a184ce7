from .errors import ErrorCode, Forbidden, NotFound
from .log import configure_logging
from .registry import DriverRegistry, PatientRegistry, Registries, RoutePlanner, VehicleRegistry
from .result import CallContext, Eligibility, Result, Suitability

__all__ = [
    "CallContext",
    "DriverRegistry",
    "Eligibility",
    "ErrorCode",
    "Forbidden",
    "NotFound",
    "PatientRegistry",
    "Registries",
    "Result",
    "RoutePlanner",
    "Suitability",
    "VehicleRegistry",
    "configure_logging",
]
