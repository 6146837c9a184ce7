from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def status_value(status) -> str:
    # enum -> его строка, всё остальное как есть
    return status.value if hasattr(status, "value") else status
