from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class PowerStateEvent(BaseModel):
    """Power-state change pushed by the smart-home platform."""
    model_config = ConfigDict(populate_by_name=True)

    device_id: str = Field(alias="deviceId")
    state: Union[bool, str]


class WebhookResult(BaseModel):
    device_id: str
    state: str
    message: Optional[str] = None
