"""Payloads delivered on the resource-removed topics."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from reaction_service.utils.ids import as_resource_list


class ResourceRemovedEvent(BaseModel):
    """``{"id": ...}`` for one removed resource, ``{"ids": [...]}`` for several."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    ids: list[str] | None = None

    @property
    def resources(self) -> list[str]:
        """Every referenced resource id, empty when the payload names none."""
        resources = as_resource_list(self.ids)
        if self.id:
            resources = as_resource_list([self.id, *resources])
        return [r for r in resources if r]
