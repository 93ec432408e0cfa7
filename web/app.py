"""Flask web application serving vehicle cost analytics, timelines and alerts."""

import logging
import os
from datetime import datetime
from pathlib import Path

from flask import Flask, Response, jsonify, request

from maintcost.aggregator import DEFAULT_TOP_EXPENSES
from maintcost.alerts import alert_counts, badge_text, needs_attention
from maintcost.calculations import parse_date
from maintcost.export import analytics_to_csv, timeline_to_csv
from maintcost.loader import load_vehicle_records
from maintcost.vehicle import VehicleRecords

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")

# Path to vehicles directory (relative to project root)
VEHICLES_DIR = Path(
    os.environ.get("VEHICLES_DIR", Path(__file__).parent.parent / "vehicles")
)


def get_vehicle_files():
    """Get all vehicle YAML files."""
    return sorted(VEHICLES_DIR.glob("*.yaml"))


def get_vehicle_id(path: Path) -> str:
    """Extract vehicle ID from path (filename without extension)."""
    return path.stem


def get_vehicle_path(vehicle_id: str) -> Path:
    """Get full path for a vehicle ID."""
    return VEHICLES_DIR / f"{vehicle_id}.yaml"


def get_vehicle_records(vehicle_id: str) -> VehicleRecords:
    """
    Load a vehicle's record snapshot.

    An unknown vehicle is not an error: it has no records, so its analytics
    are zero and its timeline is empty.
    """
    path = get_vehicle_path(vehicle_id)
    if not path.is_file() or path.parent != VEHICLES_DIR:
        logger.warning("No records for vehicle %s; using an empty snapshot", vehicle_id)
        return VehicleRecords()
    return load_vehicle_records(path)


def get_now() -> datetime:
    """The instant to compute for: ?asOf=YYYY-MM-DD, else the current time."""
    as_of = request.args.get("asOf")
    if not as_of:
        return datetime.now()
    moment = parse_date(as_of)
    if moment is None:
        raise ValueError(f"Invalid asOf date '{as_of}'")
    return moment


def get_top() -> int:
    raw = request.args.get("top", str(DEFAULT_TOP_EXPENSES))
    try:
        top = int(raw)
    except ValueError:
        raise ValueError(f"Invalid top '{raw}'")
    if top < 0:
        raise ValueError(f"Invalid top '{raw}'")
    return top


def csv_response(content: str, filename: str) -> Response:
    return Response(
        content,
        mimetype="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.errorhandler(ValueError)
def handle_value_error(error):
    return jsonify({"error": str(error)}), 400


@app.route("/api/vehicles")
def list_vehicles():
    """All vehicles with a record snapshot."""
    vehicles = []
    for path in get_vehicle_files():
        records = load_vehicle_records(path)
        vehicles.append({
            "id": get_vehicle_id(path),
            "name": records.car.name if records.car else get_vehicle_id(path),
            "licensePlate": records.car.license_plate if records.car else None,
            "records": records.record_count,
        })
    return jsonify({"vehicles": vehicles})


@app.route("/api/vehicles/<vehicle_id>/analytics")
def vehicle_analytics(vehicle_id):
    """Cost analytics, period comparison and top expenses."""
    now = get_now()
    period = request.args.get("period", "month")
    records = get_vehicle_records(vehicle_id)
    report = records.report(now, period=period, top=get_top())
    data = report.to_dict()
    data["vehicleId"] = vehicle_id
    data["asOf"] = now.isoformat()
    return jsonify(data)


@app.route("/api/vehicles/<vehicle_id>/timeline")
def vehicle_timeline(vehicle_id):
    """Filtered and grouped event timeline."""
    now = get_now()
    records = get_vehicle_records(vehicle_id)
    groups = records.timeline(
        now,
        group_by=request.args.get("groupBy", "month"),
        search=request.args.get("search"),
        event_type=request.args.get("type"),
        status=request.args.get("status"),
    )
    return jsonify({
        "vehicleId": vehicle_id,
        "asOf": now.isoformat(),
        "groups": [g.to_dict() for g in groups],
    })


@app.route("/api/vehicles/<vehicle_id>/alerts")
def vehicle_alerts(vehicle_id):
    """Items needing attention, most urgent first, with counts."""
    now = get_now()
    alerts = get_vehicle_records(vehicle_id).alerts(now)
    return jsonify({
        "vehicleId": vehicle_id,
        "asOf": now.isoformat(),
        "alerts": [a.to_dict() for a in alerts],
        "counts": alert_counts(alerts),
        "needsAttention": needs_attention(alerts),
        "badge": badge_text(alerts),
    })


@app.route("/api/vehicles/<vehicle_id>/analytics.csv")
def vehicle_analytics_csv(vehicle_id):
    now = get_now()
    records = get_vehicle_records(vehicle_id)
    content = analytics_to_csv(records.analytics(now), records.car, now.date())
    return csv_response(content, f"cost-analytics-{vehicle_id}-{now.date().isoformat()}.csv")


@app.route("/api/vehicles/<vehicle_id>/timeline.csv")
def vehicle_timeline_csv(vehicle_id):
    now = get_now()
    records = get_vehicle_records(vehicle_id)
    events = records.filtered_events(
        now,
        search=request.args.get("search"),
        event_type=request.args.get("type"),
        status=request.args.get("status"),
    )
    content = timeline_to_csv(events, records.car, now.date())
    return csv_response(content, f"timeline-{vehicle_id}-{now.date().isoformat()}.csv")


if __name__ == "__main__":
    app.run(debug=True, port=5000)
