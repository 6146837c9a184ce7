# medtransport/models/vehicle.py
from sqlalchemy import Column, Integer, BigInteger, Boolean, String, ForeignKey, Index
import enum
from .base import Base

NEVER_INSPECTED = 0


class VerificationStatus(str, enum.Enum):
    # после осмотра статус = safety_status инспектора, т.е. любая строка
    PENDING = "pending"


class Vehicle(Base):
    __tablename__ = "vehicles"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner = Column(String(128), nullable=False, index=True)

    registration_number = Column(String(20), nullable=False)
    vehicle_type = Column(String(80), nullable=False)
    capacity = Column(Integer, nullable=False)

    wheelchair_accessible = Column(Boolean, default=False, nullable=False)
    stretcher_capable     = Column(Boolean, default=False, nullable=False)
    oxygen_equipped       = Column(Boolean, default=False, nullable=False)
    medical_equipment = Column(String(500), nullable=False)

    last_inspection_date = Column(BigInteger, nullable=False, default=NEVER_INSPECTED)
    verification_status = Column(String(50), nullable=False, default=VerificationStatus.PENDING.value)
    registration_date = Column(BigInteger, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "owner": self.owner,
            "registration_number": self.registration_number,
            "vehicle_type": self.vehicle_type,
            "capacity": self.capacity,
            "wheelchair_accessible": self.wheelchair_accessible,
            "stretcher_capable": self.stretcher_capable,
            "oxygen_equipped": self.oxygen_equipped,
            "medical_equipment": self.medical_equipment,
            "last_inspection_date": self.last_inspection_date,
            "verification_status": self.verification_status,
            "registration_date": self.registration_date,
        }


class Inspection(Base):
    __tablename__ = "inspections"
    __table_args__ = (
        Index("ix_inspections_vehicle", "vehicle_id"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False)
    inspector = Column(String(128), nullable=False)
    inspection_date = Column(BigInteger, nullable=False)

    equipment_verified = Column(String(300), nullable=False)
    safety_status      = Column(String(50), nullable=False)
    cleanliness_status = Column(String(50), nullable=False)
    notes = Column(String(1000), nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "vehicle_id": self.vehicle_id,
            "inspector": self.inspector,
            "inspection_date": self.inspection_date,
            "equipment_verified": self.equipment_verified,
            "safety_status": self.safety_status,
            "cleanliness_status": self.cleanliness_status,
            "notes": self.notes,
        }
