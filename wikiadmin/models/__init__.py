"""
Model package.

IMPORTANT (Alembic / SQLModel):
- Alembic autogenerate relies on `SQLModel.metadata`, which is populated only
  when the table models are imported.
- `alembic/env.py` imports `wikiadmin.models`, so this module must import all
  SQLModel `table=True` models to register them.
"""

# Import table models so SQLModel registers them in metadata.
from wikiadmin.config.models import Config  # noqa: F401
from wikiadmin.external_account.models import ExternalAccount  # noqa: F401
from wikiadmin.page.models import Page  # noqa: F401
from wikiadmin.user.models import User  # noqa: F401
