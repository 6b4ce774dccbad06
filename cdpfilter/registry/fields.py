import yaml, json, os, re, time, logging, typing as t
from pathlib import Path

from ..filters import FieldDefinition, FieldType, FieldValidation
from .presets import BUILTIN_FIELD_SETS

log = logging.getLogger("registry")

FIELDS_PATH = Path(os.getenv("FIELDS_FILE", "config/fields.yaml"))

_CUSTOM_TYPES = {FieldType.STRING, FieldType.NUMBER, FieldType.DATE, FieldType.BOOLEAN}


def _parse_field_set(name: str, entries: t.Any) -> list[FieldDefinition]:
    if not isinstance(entries, list):
        raise RuntimeError(f"Bad field set {name}: expected a list of fields")
    out: list[FieldDefinition] = []
    seen: set[str] = set()
    for raw in entries:
        if not isinstance(raw, dict) or not raw.get("key"):
            raise RuntimeError(f"Bad field in set {name}: {raw}")
        try:
            fd = FieldDefinition.from_dict(raw)
        except (KeyError, TypeError, ValueError) as e:
            raise RuntimeError(f"Bad field {raw.get('key')} in set {name}: {e}") from e
        if fd.key in seen:
            raise RuntimeError(f"Duplicate field {fd.key} in set {name}")
        if fd.type == FieldType.ENUM and not fd.options:
            raise RuntimeError(f"Enum field {fd.key} in set {name} has no options")
        if fd.validation is not None and fd.validation.pattern:
            try:
                re.compile(fd.validation.pattern)
            except re.error as e:
                raise RuntimeError(f"Bad pattern for field {fd.key} in set {name}: {e}") from e
        seen.add(fd.key)
        out.append(fd)
    return out


class FieldRegistry:
    def __init__(self, path: t.Optional[Path] = None):
        self.path = Path(path) if path else FIELDS_PATH
        self.field_sets: dict[str, list[FieldDefinition]] = {}
        self.loaded_at: t.Optional[str] = None

    def load_fields(self) -> None:
        """
        Built-in sets first; sets from the fields file are added on top and
        replace a built-in set of the same name.
        """
        sets = {name: _parse_field_set(name, entries) for name, entries in BUILTIN_FIELD_SETS.items()}

        if self.path.exists():
            with self.path.open("r", encoding="utf-8") as f:
                if self.path.suffix.lower() in (".yaml", ".yml"):
                    cfg = yaml.safe_load(f) or {}
                else:
                    cfg = json.load(f)
            file_sets = cfg.get("fieldSets", {})
            if not isinstance(file_sets, dict):
                raise RuntimeError(f"Bad fields file {self.path}: 'fieldSets' must be a mapping")
            for name, entries in file_sets.items():
                sets[name] = _parse_field_set(name, entries)
            log.info("Loaded %d field sets from %s", len(file_sets), self.path)
        else:
            log.info("Fields file %s not found, using built-in field sets", self.path)

        self.field_sets = sets
        self.loaded_at = time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())

    def set_names(self) -> list[str]:
        return list(self.field_sets.keys())

    def field_set(self, name: str) -> list[FieldDefinition]:
        if name not in self.field_sets:
            raise KeyError(f"Unknown field set: {name}")
        return list(self.field_sets[name])

    def get(self, set_name: str, key: str) -> t.Optional[FieldDefinition]:
        return get_field_definition(key, self.field_set(set_name))

    def summary(self) -> dict[str, str]:
        return {name: f"ok ({len(fields)} fields)" for name, fields in self.field_sets.items()}


def get_field_definition(key: str, field_definitions: t.Iterable[FieldDefinition]) -> t.Optional[FieldDefinition]:
    for fd in field_definitions:
        if fd.key == key:
            return fd
    return None


def create_custom_field_definition(key: str, label: str, type: t.Union[FieldType, str] = FieldType.STRING) -> FieldDefinition:
    field_type = FieldType(type)
    if field_type not in _CUSTOM_TYPES:
        raise ValueError(f"Custom fields cannot be of type {field_type.value}")
    return FieldDefinition(key=key, label=label, type=field_type, validation=FieldValidation(required=False))


def merge_field_definitions(
    base_fields: t.Sequence[FieldDefinition],
    custom_fields: t.Sequence[FieldDefinition],
) -> list[FieldDefinition]:
    """Base fields win on key conflicts; custom fields keep their order."""
    base_keys = {fd.key for fd in base_fields}
    return list(base_fields) + [fd for fd in custom_fields if fd.key not in base_keys]
