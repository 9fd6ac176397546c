"""
Pydantic models for the rental application extraction pipeline.

Defines strict types for confidence-scored fields, the aggregated
extraction result, and the HTTP request/response envelopes.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# Order matters: it is the order fields are parsed, serialized and summarized.
FIELD_NAMES: tuple[str, ...] = (
    "name",
    "email",
    "phone",
    "move_in_date",
    "property",
    "unit_number",
    "rent",
    "created_at",
)


class ExtractionMethod(str, Enum):
    """Which extraction tier produced a result."""

    GENERIC = "generic"
    SPECIALIZED = "specialized"


class ExtractedField(BaseModel):
    """
    A single extracted value and the trust level of the heuristic that found it.

    Attributes:
        value: The normalized value, or None when nothing matched.
        confidence: Fixed weight of the matching strategy (0.0 to 1.0).
            Zero exactly when value is None.
    """

    model_config = ConfigDict(frozen=True)

    value: str | None = Field(
        default=None,
        description="Extracted value, null when not found",
    )
    confidence: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Confidence of the strategy that matched",
    )

    @model_validator(mode="after")
    def check_value_matches_confidence(self) -> "ExtractedField":
        """A missing value has zero confidence and a found value has more."""
        if self.value is None and self.confidence != 0:
            raise ValueError("A field without a value must have confidence 0")
        if self.value is not None and self.confidence == 0:
            raise ValueError("A field with a value must have confidence above 0")
        return self

    @classmethod
    def missing(cls) -> "ExtractedField":
        """Return the in-band representation of a field that was not found."""
        return cls(value=None, confidence=0.0)

    @property
    def found(self) -> bool:
        return self.value is not None


class ExtractionMetadata(BaseModel):
    """Diagnostics attached to every extraction result."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    extraction_method: ExtractionMethod = Field(
        ...,
        description="Tier that produced the result",
    )
    processing_time_ms: float = Field(
        default=0.0,
        ge=0.0,
        description="Wall-clock processing time in milliseconds",
    )


class ExtractedData(BaseModel):
    """
    Complete, immutable result of one document extraction.

    Serialized with camelCase keys for the web client:
    {
        "name": {"value": str | null, "confidence": float},
        ...
        "moveInDate": {...},
        "unitNumber": {...},
        "createdAt": {...},
        "overall": float,
        "metadata": {"extractionMethod": str, "processingTimeMs": float}
    }
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    name: ExtractedField
    email: ExtractedField
    phone: ExtractedField
    move_in_date: ExtractedField
    property: ExtractedField
    unit_number: ExtractedField
    rent: ExtractedField
    created_at: ExtractedField
    overall: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Aggregate confidence, computed per tier",
    )
    metadata: ExtractionMetadata

    def extracted_fields(self) -> dict[str, ExtractedField]:
        """Return the eight extracted fields keyed by their snake_case name."""
        return {name: getattr(self, name) for name in FIELD_NAMES}

    def fields_found(self) -> int:
        """Number of fields that produced a value."""
        return sum(1 for field in self.extracted_fields().values() if field.found)


# =============================================================================
# HTTP Models
# =============================================================================


class ExtractTextRequest(BaseModel):
    """Request model for extracting fields from already-acquired text."""

    text: str = Field(
        ...,
        min_length=1,
        description="Plain text of the application document",
    )


class ExtractionResponse(BaseModel):
    """Response model for the extraction endpoints."""

    success: bool = Field(default=True)
    data: ExtractedData = Field(..., description="Extracted applicant fields")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy")
    version: str = Field(default="1.0.0")
    message: str | None = Field(default=None)
