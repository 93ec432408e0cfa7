#!/usr/bin/env python3
"""
Validate vehicle record snapshots.

Two passes per file:
1. Schema - every jsonschema violation, located as section[index].field
2. Records - checks the schema cannot express: dates the engine can parse,
   ids unique within a stream, dates in chronological order
"""
import sys
from pathlib import Path
from typing import Any, Iterable, List

import yaml
from jsonschema import Draft7Validator

from maintcost.calculations import parse_date

# Record sections and the date fields each carries
DATE_FIELDS = {
    "serviceHistory": ("serviceDate", "nextServiceDate"),
    "registrations": ("renewalDate", "registrationExpiry"),
    "insurance": ("insuranceExpiry",),
    "issueReports": ("reportedAt", "resolvedAt"),
}

# (earlier, later) field pairs that must not be reversed
DATE_ORDER = {
    "serviceHistory": ("serviceDate", "nextServiceDate"),
    "registrations": ("renewalDate", "registrationExpiry"),
    "issueReports": ("reportedAt", "resolvedAt"),
}


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def format_path(path: Iterable[Any]) -> str:
    """['serviceHistory', 2, 'cost'] -> 'serviceHistory[2].cost'."""
    text = ""
    for part in path:
        if isinstance(part, int):
            text += f"[{part}]"
        else:
            text += f".{part}" if text else str(part)
    return text or "(root)"


def schema_errors(data: Any, schema: dict) -> List[str]:
    """All schema violations, in document order."""
    validator = Draft7Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    return [f"{format_path(e.path)}: {e.message}" for e in errors]


def _entries(data: dict, section: str):
    entries = data.get(section)
    if not isinstance(entries, list):
        return
    for index, entry in enumerate(entries):
        if isinstance(entry, dict):
            yield index, entry


def record_errors(data: Any) -> List[str]:
    """Checks on record contents beyond the schema."""
    if not isinstance(data, dict):
        return []
    errors = []
    for section, fields in DATE_FIELDS.items():
        seen = {}
        for index, entry in _entries(data, section):
            location = f"{section}[{index}]"

            record_id = entry.get("id")
            if record_id is not None:
                key = str(record_id)
                if key in seen:
                    errors.append(
                        f"{location}.id: duplicate id {key!r} (first at {section}[{seen[key]}])"
                    )
                else:
                    seen[key] = index

            for field in fields:
                value = entry.get(field)
                if value is not None and parse_date(value) is None:
                    errors.append(f"{location}.{field}: {value!r} is not an ISO date")

            if section in DATE_ORDER:
                first, second = DATE_ORDER[section]
                earlier = parse_date(entry.get(first))
                later = parse_date(entry.get(second))
                if earlier is not None and later is not None and later < earlier:
                    errors.append(f"{location}.{second}: before {first}")
    return errors


def validate_records_file(filepath: Path, schema: dict) -> List[str]:
    """Validate a single vehicle records YAML file. Returns list of errors."""
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return [f"YAML parse error: {e}"]
    except OSError as e:
        return [f"Error: {e}"]
    return schema_errors(data, schema) + record_errors(data)


def main():
    """Validate all vehicle record files in the vehicles/ directory."""
    schema = load_schema()
    vehicles_dir = Path(__file__).parent / "vehicles"

    if not vehicles_dir.exists():
        print(f"Error: vehicles directory not found: {vehicles_dir}")
        return 1

    yaml_files = list(vehicles_dir.glob("*.yaml")) + list(vehicles_dir.glob("*.yml"))

    if not yaml_files:
        print(f"Warning: No YAML files found in {vehicles_dir}")
        return 0

    all_valid = True
    for filepath in sorted(yaml_files):
        errors = validate_records_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath.name} ({len(errors)} errors)")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
