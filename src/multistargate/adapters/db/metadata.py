"""Shared SQLAlchemy `MetaData` of the chain store.

Tables attach to `metadata` so `create_schema` can create them in one call and
their constraints get predictable names:

    - Primary key:   pk_<table>
    - Unique:        uq_<table>_<col...>
    - Indexes:       ix_<table>_<col...>
"""

from sqlalchemy import MetaData

metadata = MetaData(
    naming_convention={
        "pk": "pk_%(table_name)s",
        "uq": "uq_%(table_name)s_%(column_0_N_name)s",
        "ix": "ix_%(table_name)s_%(column_0_N_label)s",
    }
)
