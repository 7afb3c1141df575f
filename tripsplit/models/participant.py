from typing import NewType, Optional

from pydantic import BaseModel, ConfigDict, Field

# Participant ID or family ID, depending on tracking mode
EntityId = NewType("EntityId", str)


class Participant(BaseModel):
    """Participant in a trip."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    family_id: Optional[str] = None
    is_adult: bool = True
    user_id: Optional[str] = None

    def __repr__(self) -> str:
        return f"<Participant(id={self.id!r}, name={self.name!r})>"


class Family(BaseModel):
    """Family unit within a trip."""

    model_config = ConfigDict(frozen=True)

    id: str
    family_name: str
    adults: int = Field(default=1, ge=0)
    children: int = Field(default=0, ge=0)

    @property
    def member_count(self) -> int:
        """Number of people in the family, never less than one."""
        return max(self.adults + self.children, 1)

    def __repr__(self) -> str:
        return f"<Family(id={self.id!r}, name={self.family_name!r})>"
