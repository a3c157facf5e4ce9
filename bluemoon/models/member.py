"""HouseholdMember ORM model for residents registered to a household."""

from datetime import date

from sqlalchemy import Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bluemoon.models import Base, BaseModel


class HouseholdMember(Base, BaseModel):
    """A resident living in a household."""

    __tablename__ = "household_members"

    household_id: Mapped[int] = mapped_column(
        ForeignKey("households.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    id_number: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        unique=True,
        comment="Identity document number",
    )
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)

    household: Mapped["Household"] = relationship(  # noqa: F821
        "Household",
        back_populates="members",
    )

    def __repr__(self) -> str:
        return f"<HouseholdMember(id={self.id}, name={self.name}, household_id={self.household_id})>"


__all__ = ["HouseholdMember"]
