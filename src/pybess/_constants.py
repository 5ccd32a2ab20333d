"""Internal constants shared across the library."""

DEFAULT_STATUS = "online"
KNOWN_STATUSES: frozenset[str] = frozenset({"online", "maintenance", "fault", "commissioning"})

# Wire names of the asset ratings every record must carry.
REQUIRED_NUMERIC_FIELDS: tuple[tuple[str, str], ...] = (
    ("capacityMWh", "capacity_mwh"),
    ("powerRatingMW", "power_rating_mw"),
    ("roundTripEfficiency", "round_trip_efficiency"),
    ("availability", "availability"),
)

# Threshold to distinguish epoch seconds from milliseconds.
MS_THRESHOLD = 1_000_000_000_000

DEFAULT_STORE_PATH = "bess-store.json"
DEFAULT_DATASET_PATH = "data/bess-telemetry-sample.json"
DEFAULT_SEED_PATH = "data/sample-bess-assets.json"
