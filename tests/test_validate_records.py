#!/usr/bin/env python3
"""Tests for validate_records schema validation."""

from pathlib import Path

from validate_records import format_path, load_schema, record_errors, validate_records_file


class TestLoadSchema:
    """Tests for load_schema function."""

    def test_returns_dict(self):
        schema = load_schema()
        assert isinstance(schema, dict)

    def test_has_expected_structure(self):
        properties = load_schema()["properties"]
        for section in ("vehicle", "serviceHistory", "registrations", "insurance", "issueReports"):
            assert section in properties


class TestValidateRecordsFile:
    """Tests for validate_records_file function."""

    def test_valid_minimal_returns_no_errors(self, tmp_path):
        """Valid minimal snapshot returns empty error list."""
        path = tmp_path / "valid.yaml"
        path.write_text("""
vehicle:
  id: golf-1
  make: Volkswagen
  model: Golf

serviceHistory:
  - id: 1
    serviceDate: '2026-03-02'
    serviceType: Brake pads
    cost: 380
""")
        errors = validate_records_file(path, load_schema())
        assert errors == []

    def test_missing_required_vehicle_field_returns_errors(self, tmp_path):
        """Missing vehicle id returns schema validation errors."""
        path = tmp_path / "invalid.yaml"
        path.write_text("""
vehicle:
  make: Volkswagen
  model: Golf
""")
        errors = validate_records_file(path, load_schema())
        assert len(errors) > 0
        assert any("id" in e for e in errors)

    def test_negative_cost_reports_path(self, tmp_path):
        path = tmp_path / "negative.yaml"
        path.write_text("""
vehicle:
  id: golf-1
  make: Volkswagen
  model: Golf

serviceHistory:
  - id: 1
    serviceDate: '2026-03-02'
    serviceType: Oil change
    cost: -10
""")
        errors = validate_records_file(path, load_schema())
        assert any(e.startswith("serviceHistory[0].cost:") for e in errors)

    def test_unknown_severity_returns_errors(self, tmp_path):
        path = tmp_path / "severity.yaml"
        path.write_text("""
vehicle:
  id: golf-1
  make: Volkswagen
  model: Golf

issueReports:
  - id: 1
    description: Noise
    status: open
    reportedAt: '2026-10-10'
    severity: catastrophic
""")
        errors = validate_records_file(path, load_schema())
        assert len(errors) > 0

    def test_invalid_yaml_returns_parse_error(self, tmp_path):
        """Malformed YAML returns parse error."""
        path = tmp_path / "bad.yaml"
        path.write_text("vehicle: [\n  unclosed")
        errors = validate_records_file(path, load_schema())
        assert len(errors) > 0
        assert "YAML" in errors[0] or "parse" in errors[0].lower()

    def test_missing_file_returns_error(self, tmp_path):
        errors = validate_records_file(tmp_path / "missing.yaml", load_schema())
        assert len(errors) == 1

    def test_bundled_samples_are_valid(self):
        schema = load_schema()
        vehicles = Path(__file__).parent.parent / "vehicles"
        for path in vehicles.glob("*.yaml"):
            assert validate_records_file(path, schema) == []


class TestFormatPath:
    """Tests for format_path."""

    def test_section_index_field(self):
        assert format_path(["serviceHistory", 2, "cost"]) == "serviceHistory[2].cost"
        assert format_path(["vehicle", "make"]) == "vehicle.make"
        assert format_path([]) == "(root)"


class TestRecordErrors:
    """Tests for record_errors, the checks beyond the schema."""

    def test_clean_snapshot(self):
        data = {
            "serviceHistory": [{"id": 1, "serviceDate": "2026-03-02"}],
            "registrations": [
                {"id": 1, "renewalDate": "2025-10-28", "registrationExpiry": "2026-10-28"}
            ],
        }
        assert record_errors(data) == []

    def test_unparseable_date(self):
        data = {"insurance": [{"id": 1, "insuranceExpiry": "next spring"}]}
        assert record_errors(data) == [
            "insurance[0].insuranceExpiry: 'next spring' is not an ISO date"
        ]

    def test_duplicate_ids_within_stream(self):
        data = {
            "serviceHistory": [
                {"id": 7, "serviceDate": "2026-01-01"},
                {"id": 8, "serviceDate": "2026-02-01"},
                {"id": "7", "serviceDate": "2026-03-01"},
            ],
            "issueReports": [{"id": 7, "reportedAt": "2026-01-01"}],
        }
        assert record_errors(data) == [
            "serviceHistory[2].id: duplicate id '7' (first at serviceHistory[0])"
        ]

    def test_dates_out_of_order(self):
        data = {
            "registrations": [
                {"id": 1, "renewalDate": "2026-10-28", "registrationExpiry": "2025-10-28"}
            ],
            "issueReports": [
                {"id": 2, "reportedAt": "2026-03-02", "resolvedAt": "2026-02-18T09:30:00Z"}
            ],
        }
        assert record_errors(data) == [
            "registrations[0].registrationExpiry: before renewalDate",
            "issueReports[0].resolvedAt: before reportedAt",
        ]

    def test_malformed_sections_left_to_schema(self):
        assert record_errors({"serviceHistory": "none", "insurance": ["x"]}) == []
        assert record_errors(None) == []

    def test_file_reports_both_passes(self, tmp_path):
        """Schema violations and record problems are all listed, not just the first."""
        path = tmp_path / "both.yaml"
        path.write_text("""
vehicle:
  id: golf-1
  make: Volkswagen
  model: Golf

serviceHistory:
  - id: 1
    serviceDate: '2026-03-02'
    serviceType: Oil change
    cost: -10
  - id: 1
    serviceDate: 'March'
    serviceType: Tyres
    mileage: -5
""")
        errors = validate_records_file(path, load_schema())
        assert "serviceHistory[0].cost: -10 is less than the minimum of 0" in errors
        assert any(e.startswith("serviceHistory[1].mileage:") for e in errors)
        assert "serviceHistory[1].id: duplicate id '1' (first at serviceHistory[0])" in errors
        assert "serviceHistory[1].serviceDate: 'March' is not an ISO date" in errors
