from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

PasswordField = Annotated[str, Field(min_length=1, max_length=1000)]
# Blank batch entries fail per entry in the service, not at the schema
BatchEntryField = Annotated[str, Field(max_length=1000)]


class CheckPasswordRequest(BaseModel):
    password: PasswordField


class BatchCheckRequest(BaseModel):
    passwords: list[BatchEntryField] = Field(min_length=1, max_length=10)


class CheckResult(BaseModel):
    """Outcome of a single breach check.

    Serialized with camelCase keys (``isBreached``, ``breachCount``).
    A result carrying an error is never reported as breached.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_breached: bool = False
    breach_count: int = Field(default=0, ge=0)
    error: str | None = None

    @model_validator(mode="after")
    def _fail_safe_negative(self):
        if self.error is not None and self.is_breached:
            raise ValueError("An errored check cannot report a breach")
        if not self.is_breached and self.breach_count != 0:
            raise ValueError("breach_count must be 0 when not breached")
        return self

    @classmethod
    def failed(cls, error: str) -> "CheckResult":
        return cls(is_breached=False, breach_count=0, error=error)


class BatchCheckResponse(BaseModel):
    results: list[CheckResult]
