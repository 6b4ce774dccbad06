import os
import tempfile
from pathlib import Path

_ROOT = Path(__file__).resolve().parent.parent
_TMP = Path(tempfile.mkdtemp(prefix="cdpfilter-tests-"))

# module-level config is read at import time
os.environ.setdefault("APP_JWT_SECRET", "test-secret-for-access-tokens")
os.environ["FIELDS_FILE"] = str(_ROOT / "config" / "fields.yaml")
os.environ["SAVED_FILTERS_FILE"] = str(_TMP / "saved_filters.json")

import pytest

from cdpfilter.filters import FieldDefinition, FieldOption, FieldType


@pytest.fixture
def field_definitions():
    return [
        FieldDefinition(key="name", label="Name", type=FieldType.STRING),
        FieldDefinition(key="score", label="Score", type=FieldType.NUMBER),
        FieldDefinition(key="created", label="Created", type=FieldType.DATE),
        FieldDefinition(key="active", label="Active", type=FieldType.BOOLEAN),
        FieldDefinition(
            key="status",
            label="Status",
            type=FieldType.ENUM,
            options=(FieldOption("active", "Active"), FieldOption("inactive", "Inactive")),
        ),
        FieldDefinition(key="tags", label="Tags", type=FieldType.ARRAY),
    ]


@pytest.fixture
def people():
    return [
        {"name": "Alice", "status": "active"},
        {"name": "Bob", "status": "inactive"},
    ]
