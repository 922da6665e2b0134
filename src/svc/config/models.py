"""Configuration models using Pydantic."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_INTERPRETER = "python"


class ServiceType(str, Enum):
    """How a service is launched."""

    EXECUTABLE = "Executable"
    UTIL = "Util"

    @property
    def label(self) -> str:
        """Human-readable name used in status output."""
        return "Utility" if self is ServiceType.UTIL else "Executable"


class ServiceConfig(BaseModel):
    """A single managed service.

    `path` is both the launch target and the fragment used to find the
    service's processes, so it should be specific enough not to match
    unrelated programs.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    path: str = Field(min_length=1)
    service_type: ServiceType = Field(alias="type")
    interpreter: str = DEFAULT_INTERPRETER
    work_at: str = ""  # Empty = derive from path

    @property
    def is_util(self) -> bool:
        return self.service_type is ServiceType.UTIL


class SvcConfig(BaseModel):
    """Root configuration model."""

    model_config = ConfigDict(frozen=True)

    default_interpreter: str = Field(default=DEFAULT_INTERPRETER, min_length=1)
    services: list[ServiceConfig] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        # A bare list of services is the short form of the file
        if isinstance(data, list):
            data = {"services": data}
        if not isinstance(data, dict):
            return data

        default = data.get("default_interpreter") or DEFAULT_INTERPRETER
        services = data.get("services")
        if isinstance(services, list):
            data = {
                **data,
                "services": [
                    {**entry, "interpreter": default}
                    if isinstance(entry, dict) and entry.get("interpreter") is None
                    else entry
                    for entry in services
                ],
            }
        return data

    @model_validator(mode="after")
    def _check_unique_names(self) -> "SvcConfig":
        seen: set[str] = set()
        for service in self.services:
            if service.name in seen:
                raise ValueError(f"Duplicate service name: {service.name}")
            seen.add(service.name)
        return self

    def get_service(self, name: str) -> ServiceConfig | None:
        """Look up a service by name."""
        for service in self.services:
            if service.name == name:
                return service
        return None

    def list_services(self) -> list[str]:
        return [service.name for service in self.services]
