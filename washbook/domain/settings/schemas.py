"""Settings domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import validate_clock_time


class SettingsUpdate(BaseModel):
    """Schema for saving the admin settings form"""

    business_hours_start: str = "08:00"
    business_hours_end: str = "16:00"
    booking_advance_days: int = Field(default=90, ge=1)

    business_name: str = "Svampen"
    business_phone: Optional[str] = None
    business_email: Optional[str] = None
    business_address: Optional[str] = None

    no_show_fee_percentage: float = Field(default=0, ge=0, le=100)
    min_advance_booking_hours: int = Field(default=24, ge=0)
    auto_confirm_bookings: bool = False

    notify_admin_new_booking: bool = True
    notify_customer_confirmation: bool = True
    notify_customer_reminder: bool = False

    @field_validator("business_hours_start", "business_hours_end")
    @classmethod
    def validate_hours(cls, v):
        return validate_clock_time(v)

    @model_validator(mode="after")
    def validate_hours_order(self):
        # Zero-padded HH:MM strings compare in clock order
        if self.business_hours_end <= self.business_hours_start:
            raise ValueError("Business hours must end after they start")
        return self

    def to_setting_values(self) -> dict[str, str]:
        """Flatten to the string values stored in admin_settings"""
        values = {}
        for key, value in self.model_dump().items():
            if value is None:
                value = ""
            elif isinstance(value, bool):
                value = "true" if value else "false"
            elif isinstance(value, float) and value.is_integer():
                value = int(value)
            values[key] = str(value)
        return values


class SettingsSaveResponse(BaseModel):
    message: str
    count: int
