"""Validated input for recording a feeding event."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from herdfeed.data.models import Override, PigGroup


class FeedingSubmission(BaseModel):
    """A feeding event as entered at the trough.

    Rejects negative or non-finite delivered mass and unknown override values
    before anything reaches the allocation engine.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    group: PigGroup
    feed_type: str = Field(min_length=1, alias="feedType")
    total_kg: float = Field(ge=0, allow_inf_nan=False, alias="totalKg")
    method: str = "Trough"
    recorded_by: str = Field(default="", alias="recordedBy")
    overrides: dict[str, Override] = Field(default_factory=dict)

    @field_validator("overrides", mode="before")
    @classmethod
    def _normalize_override_values(cls, value):
        # Accept "Ate", " missed " etc. from hand-entered forms
        if isinstance(value, dict):
            return {k: v.strip().lower() if isinstance(v, str) else v for k, v in value.items()}
        return value
