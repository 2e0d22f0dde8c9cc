from sqlalchemy import Column, String
from core.database import Base

class Setting(Base):
    """Plain key/value app preference (theme etc). Secrets live elsewhere."""

    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False)

    def __repr__(self):
        return f"<Setting {self.key}={self.value!r}>"
