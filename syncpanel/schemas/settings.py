"""Settings schemas."""
import json
from typing import Any

from pydantic import BaseModel, field_validator, model_validator


class SettingItem(BaseModel):
    key: str
    value: str | None = None

    @field_validator("value", mode="before")
    @classmethod
    def encode_value(cls, value: Any) -> str | None:
        # clients may send objects; they are stored as JSON text
        if value is None or isinstance(value, str):
            return value
        return json.dumps(value)


class SettingsEnvelope(BaseModel):
    settings: list[SettingItem]


class MailchimpList(BaseModel):
    id: str
    name: str = ""


class MailchimpSetting(BaseModel):
    """Validated shape of the `mailchimp` setting value."""

    isActive: bool = False
    apiKey: str = ""
    activeList: MailchimpList | None = None

    @field_validator("activeList", mode="before")
    @classmethod
    def empty_list_is_none(cls, value: Any) -> Any:
        if isinstance(value, dict) and not value.get("id"):
            return None
        return value

    @model_validator(mode="after")
    def check_active(self) -> "MailchimpSetting":
        if self.isActive and not self.apiKey:
            raise ValueError("An API key is required to enable Mailchimp")
        if self.isActive and self.activeList is None:
            raise ValueError("A list must be selected to enable Mailchimp")
        return self


class MailchimpListsResponse(BaseModel):
    lists: list[MailchimpList]
