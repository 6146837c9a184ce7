from .base import Base
from .driver import Driver, Certification, CertificationStatus
from .patient import Patient, TransportRequest, RequestStatus
from .route import Route, RouteStop, RouteAssignment, RouteStatus, UNASSIGNED
from .vehicle import Vehicle, Inspection, VerificationStatus, NEVER_INSPECTED

__all__ = [
    "Base",
    "Driver", "Certification", "CertificationStatus",
    "Patient", "TransportRequest", "RequestStatus",
    "Route", "RouteStop", "RouteAssignment", "RouteStatus", "UNASSIGNED",
    "Vehicle", "Inspection", "VerificationStatus", "NEVER_INSPECTED",
]
