from typing import Literal

from pydantic import BaseModel, Field, field_validator


class ConverterSettings(BaseModel):
    output_folder: str = "attachments"
    auto_convert: bool = False
    filename_format: str = "image-{{date}}-{{index}}"

    @field_validator("output_folder", "filename_format")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v


class UnembedConfig(BaseModel):
    vault_path: str = "."
    converter: ConverterSettings = Field(default_factory=ConverterSettings)
    paste_debounce_ms: int = Field(default=100, ge=0)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
