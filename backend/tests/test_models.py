from hobbypath.db.base import Base
from hobbypath.db import models  # noqa: F401  ensure models are loaded


def test_metadata_contains_key_value_table() -> None:
    table = Base.metadata.tables["key_value_store"]

    assert {"key", "value", "created_at", "updated_at"} == set(table.columns.keys())
    assert [column.name for column in table.primary_key.columns] == ["key"]
