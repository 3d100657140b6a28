"""Error taxonomy shared by the catalog, the aggregator and the HTTP layer."""
from __future__ import annotations


class FlowerSearchError(Exception):
    """Base error carrying the client-facing message and HTTP status."""

    status_code = 500
    default_message = "An error occurred"

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message}


class MissingParameter(FlowerSearchError):
    """The client omitted a required query parameter."""

    status_code = 400
    default_message = "Flowername is required"


class FlowerNotFound(FlowerSearchError):
    """No catalog record matched the requested name."""

    status_code = 404
    default_message = "Flower not found"


class ResolutionFailure(FlowerSearchError):
    """The catalog store failed while looking a flower up."""

    status_code = 500
    default_message = "An error occurred"


class AggregationFailure(FlowerSearchError):
    """A provider page request failed; no partial result is returned."""

    status_code = 500
    default_message = "Naver Shopping API error"
