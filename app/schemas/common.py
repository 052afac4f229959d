# app/schemas/common.py

from typing import ClassVar

from pydantic import BaseModel, model_validator


class PartialUpdate(BaseModel):
    """PUT payloads: only fields the client actually sent are applied."""

    # columns that are NOT NULL in the database
    non_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_null_for_required_columns(self):
        for name in self.non_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


def status_from_flag(is_active: bool) -> str:
    return "active" if is_active else "inactive"


def address_label(address: dict | None) -> str:
    """'City, State' label the frontend shows for an address blob."""
    if not address:
        return ""
    parts = (address.get("city"), address.get("state"))
    return ", ".join(p for p in parts if p)
