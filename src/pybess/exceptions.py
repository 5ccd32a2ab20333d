"""Custom exception hierarchy for pybess."""

from __future__ import annotations


class BessError(Exception):
    """Base exception for all pybess errors."""


class BessConfigError(BessError):
    """Invalid or missing configuration."""


class BessValidationError(BessError):
    """A raw asset or telemetry record is malformed.

    Validation failures are not recoverable for the offending record and
    abort the ingestion batch at that point.  Records committed earlier in
    the same batch stay committed.
    """

    def __init__(
        self,
        message: str,
        *,
        asset_id: str | None = None,
        field: str | None = None,
    ) -> None:
        self.asset_id = asset_id
        self.field = field
        super().__init__(message)


class InvalidRecordError(BessValidationError):
    """Record (or batch) has the wrong shape, e.g. not a JSON object."""


class MissingIdentifierError(BessValidationError):
    """Asset record has no usable ``assetId``."""

    def __init__(self, message: str = "Asset is missing an assetId") -> None:
        super().__init__(message, field="assetId")


class InvalidNumericFieldError(BessValidationError):
    """A required asset rating does not coerce to a finite number."""

    def __init__(self, field: str, asset_id: str) -> None:
        super().__init__(
            f"Asset {asset_id} is missing required numeric field {field}",
            asset_id=asset_id,
            field=field,
        )


class InvalidTimestampError(BessValidationError):
    """Metric timestamp is absent or unparseable."""

    def __init__(self, asset_id: str | None, value: object = None) -> None:
        self.value = value
        super().__init__(
            f"Metric timestamp is invalid for asset {asset_id or 'unknown'}: {value!r}",
            asset_id=asset_id,
            field="timestamp",
        )


class InvalidMetricValueError(BessValidationError):
    """Metric reading does not coerce to a finite number."""

    def __init__(self, field: str, asset_id: str | None) -> None:
        super().__init__(
            f"Metric numeric value {field} is invalid for asset {asset_id or 'unknown'}",
            asset_id=asset_id,
            field=field,
        )


class RepositoryError(BessError):
    """Storage-layer failure (I/O, decode, backend unavailable).

    The core never retries; retry policy belongs to the caller.
    """


class AssetNotFoundError(BessError):
    """Referenced asset does not exist in the repository."""

    def __init__(self, asset_id: str) -> None:
        self.asset_id = asset_id
        super().__init__(f"Asset {asset_id} not found")


class AssetExistsError(BessError):
    """Explicit asset creation collided with an already stored ``assetId``."""

    def __init__(self, asset_id: str) -> None:
        self.asset_id = asset_id
        super().__init__(f"Asset {asset_id} already exists")
