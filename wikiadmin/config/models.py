"""Config domain models.

One row per namespaced key; ``value`` holds the JSON-encoded setting.
"""

from sqlalchemy import Text, UniqueConstraint
from sqlmodel import Field, SQLModel

from wikiadmin.core.mixins import TimestampMixin


class Config(TimestampMixin, SQLModel, table=True):
    __tablename__: str = "configs"
    __table_args__ = (UniqueConstraint("ns", "key", name="uq_configs_ns_key"),)

    id: int | None = Field(default=None, primary_key=True)
    ns: str = Field(index=True, max_length=64)
    key: str = Field(max_length=128)
    value: str = Field(sa_type=Text)
