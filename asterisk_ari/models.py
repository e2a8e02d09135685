"""Pydantic models for Asterisk ARI resources.

Only the Stasis ``Application`` resource is modelled. Models keep any
fields they do not declare, so data returned by newer Asterisk releases
passes through untouched.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class ARIModel(BaseModel):
    """Base class for all ARI resource models."""

    model_config = ConfigDict(
        populate_by_name=True,  # allow population by field name or alias
        extra="allow",  # keep fields added by newer Asterisk versions
        json_schema_extra={  # extra info for generated JSON schema
            "examples": []
        },
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary with proper serialization."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """Convert model to JSON string."""
        return self.model_dump_json(by_alias=True, exclude_none=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ARIModel":
        """Create model instance from dictionary."""
        return cls.model_validate(data)

    @classmethod
    def from_json(cls, json_str: str) -> "ARIModel":
        """Create model instance from JSON string."""
        return cls.model_validate_json(json_str)


class Application(ARIModel):
    """A Stasis application within Asterisk.

    The id/name lists are kept in the order Asterisk returned them.
    """

    name: str = Field(..., description="Name of the application")
    bridge_ids: List[str] = Field(default_factory=list,
                                  description="Bridge IDs this application is subscribed to")
    channel_ids: List[str] = Field(default_factory=list,
                                   description="Channel IDs this application is subscribed to")
    device_names: List[str] = Field(default_factory=list,
                                    description="Device names this application is subscribed to")
    endpoint_ids: List[str] = Field(default_factory=list,
                                    description="Endpoints this application is subscribed to, as {tech}/{resource}")

    model_config = ARIModel.model_config | ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "name": "hello_world",
                    "bridge_ids": [],
                    "channel_ids": ["1543372545.1"],
                    "device_names": [],
                    "endpoint_ids": ["PJSIP/6001"]
                }
            ]
        }
    )

    def is_subscribed_to(self, event_source: str) -> bool:
        """Return True if ``event_source`` appears in any of the subscription lists.

        Accepts the prefixed form used in subscription requests
        (``channel:1234``, ``endpoint:PJSIP/6001``) as well as a bare id.
        """
        kind, sep, ident = event_source.partition(":")
        lists = {
            "channel": self.channel_ids,
            "bridge": self.bridge_ids,
            "endpoint": self.endpoint_ids,
            "deviceState": self.device_names,
        }
        if sep and kind in lists:
            return ident in lists[kind]
        return any(event_source in values for values in lists.values())
