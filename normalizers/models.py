from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator


@dataclass(frozen=True)
class SplitTriple:
    """
    name + whichever date marker the raw cell carried:
    date_segment "1916–1952" for the deceased, born_tag "born 1963" for the living.
    """
    name: str
    date_segment: Optional[str] = None
    born_tag: Optional[str] = None


class PersonRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    born: Optional[int] = Field(default=None)
    died: Optional[int] = Field(default=None)

    @computed_field
    @property
    def age_at_death(self) -> Optional[int]:
        if self.born is None or self.died is None:
            return None
        return self.died - self.born

    @model_validator(mode="after")
    def check_years(self):
        if self.died is not None:
            if self.born is None:
                raise ValueError(f"{self.name}: death year without birth year")
            if self.died < self.born:
                raise ValueError(f"{self.name}: died {self.died} before born {self.born}")
        return self

    def known_fields(self) -> int:
        return sum(v is not None for v in (self.born, self.died))


class OverrideRecord(PersonRecord):

    @field_validator("died")
    @classmethod
    def living_only(cls, v):
        if v is not None:
            raise ValueError("override records leave the death year unknown")
        return v


class OverrideSet(BaseModel):
    """Manually maintained records, versioned alongside the code that consumes them."""

    name: str = Field(default="overrides")
    version: str = Field(default="")
    records: List[OverrideRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def unique_names(self):
        seen = set()
        for r in self.records:
            if r.name in seen:
                raise ValueError(f"duplicate override for {r.name!r}")
            seen.add(r.name)
        return self

    def names(self) -> List[str]:
        return [r.name for r in self.records]
