# medtransport/models/driver.py
from sqlalchemy import Column, Integer, BigInteger, Boolean, String, ForeignKey, Index
import enum
from .base import Base


class CertificationStatus(str, enum.Enum):
    PENDING   = "pending"     # после регистрации и после любой правки
    CERTIFIED = "certified"   # выдан хотя бы один сертификат


class Driver(Base):
    __tablename__ = "drivers"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner = Column(String(128), nullable=False, index=True)

    name             = Column(String(200), nullable=False)
    license_number   = Column(String(50), nullable=False)
    license_expiry   = Column(BigInteger, nullable=False)   # значение логических часов
    medical_training = Column(String(200), nullable=False)
    cpr_certified       = Column(Boolean, default=False, nullable=False)
    first_aid_certified = Column(Boolean, default=False, nullable=False)
    special_training = Column(String(300), nullable=False)

    # свободная строка: pending / certified / что угодно от сертификатора
    certification_status = Column(String(50), nullable=False, default=CertificationStatus.PENDING.value)
    registration_date = Column(BigInteger, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "owner": self.owner,
            "name": self.name,
            "license_number": self.license_number,
            "license_expiry": self.license_expiry,
            "medical_training": self.medical_training,
            "cpr_certified": self.cpr_certified,
            "first_aid_certified": self.first_aid_certified,
            "special_training": self.special_training,
            "certification_status": self.certification_status,
            "registration_date": self.registration_date,
        }


class Certification(Base):
    __tablename__ = "certifications"
    __table_args__ = (
        Index("ix_certifications_driver", "driver_id"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    driver_id = Column(Integer, ForeignKey("drivers.id"), nullable=False)
    certifier = Column(String(128), nullable=False)

    certification_type    = Column(String(100), nullable=False)
    issue_date            = Column(BigInteger, nullable=False)
    expiry_date           = Column(BigInteger, nullable=False)
    certification_details = Column(String(500), nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "driver_id": self.driver_id,
            "certifier": self.certifier,
            "certification_type": self.certification_type,
            "issue_date": self.issue_date,
            "expiry_date": self.expiry_date,
            "certification_details": self.certification_details,
        }
