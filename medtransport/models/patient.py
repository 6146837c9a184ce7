# medtransport/models/patient.py
from sqlalchemy import Column, Integer, BigInteger, Boolean, String, ForeignKey, Index
import enum
from .base import Base


class RequestStatus(str, enum.Enum):
    # привычные значения; колонка строковая, поэтому принимается любое
    PENDING   = "pending"
    CONFIRMED = "confirmed"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Patient(Base):
    __tablename__ = "patients"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner = Column(String(128), nullable=False, index=True)

    name              = Column(String(200), nullable=False)   # после регистрации не меняется
    address           = Column(String(300), nullable=False)
    contact           = Column(String(200), nullable=False)
    medical_condition = Column(String(300), nullable=False)
    mobility_status   = Column(String(100), nullable=False)
    equipment_needs   = Column(String(300), nullable=False)
    recurring_schedule = Column(Boolean, default=False, nullable=False)

    registration_date = Column(BigInteger, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "owner": self.owner,
            "name": self.name,
            "address": self.address,
            "contact": self.contact,
            "medical_condition": self.medical_condition,
            "mobility_status": self.mobility_status,
            "equipment_needs": self.equipment_needs,
            "recurring_schedule": self.recurring_schedule,
            "registration_date": self.registration_date,
        }


class TransportRequest(Base):
    __tablename__ = "transport_requests"
    __table_args__ = (
        Index("ix_transport_requests_patient", "patient_id"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False)

    pickup_location  = Column(String(300), nullable=False)
    destination      = Column(String(300), nullable=False)
    appointment_time = Column(BigInteger, nullable=False)
    return_trip      = Column(Boolean, default=False, nullable=False)
    special_instructions = Column(String(500), nullable=False)

    status = Column(String(50), nullable=False, default=RequestStatus.PENDING.value)
    request_date = Column(BigInteger, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "patient_id": self.patient_id,
            "pickup_location": self.pickup_location,
            "destination": self.destination,
            "appointment_time": self.appointment_time,
            "return_trip": self.return_trip,
            "special_instructions": self.special_instructions,
            "status": self.status,
            "request_date": self.request_date,
        }
