"""Pydantic models for dualrpc configuration validation."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DialectName = Literal["1.0", "2.0"]


class CodecConfig(BaseModel):
    """Configuration for the wire codec.

    Example in config.json:
        "codec": {
            "dialects": ["2.0"],
            "salvage_invalid_calls": true
        }
    """

    model_config = ConfigDict(extra="forbid")

    dialects: list[DialectName] = Field(default_factory=lambda: ["1.0", "2.0"])
    """Dialects accepted on decode and allowed on encode. One entry makes the codec exclusive."""

    salvage_invalid_calls: bool = False
    """Decode malformed request elements to InvalidCall instead of failing."""

    ensure_ascii: bool = False
    """Escape non-ASCII characters in encoded text."""

    @field_validator("dialects")
    @classmethod
    def dedupe_dialects(cls, v: list[str]) -> list[str]:
        """Require at least one dialect and drop repeats, keeping order."""
        if not v:
            raise ValueError("at least one dialect must be enabled")
        return list(dict.fromkeys(v))


class Config(BaseModel):
    """Root configuration model.

    Example in config.json:
        {
            "codec": {"dialects": ["1.0", "2.0"]},
            "log_level": "WARNING"
        }
    """

    model_config = ConfigDict(extra="forbid")

    codec: CodecConfig = Field(default_factory=CodecConfig)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    """Logging level for the dualrpc command-line tool."""
