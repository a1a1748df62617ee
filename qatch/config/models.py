from __future__ import annotations

from typing import Any, Dict, List, Optional, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _BaseConfigModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class BackupConfig(_BaseConfigModel):
    enabled: bool = False
    suffix: str = ".BAK"

    @field_validator("suffix")
    @classmethod
    def _suffix_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("backup suffix must not be empty")
        return value


class LoggingConfig(_BaseConfigModel):
    level: str = "WARNING"
    json_output: bool = Field(default=False, alias="json")
    file: Optional[str] = None

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class PatchPairConfig(_BaseConfigModel):
    find: str
    replace: str
    description: Optional[str] = None

    def as_pair(self) -> tuple[str, str]:
        return self.find, self.replace


class QatchConfig(_BaseConfigModel):
    backup: BackupConfig = Field(default_factory=BackupConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    patches: List[PatchPairConfig] = Field(default_factory=list)

    def patch_pairs(self) -> List[tuple[str, str]]:
        return [entry.as_pair() for entry in self.patches]


def validate_config(payload: Dict[str, Any]) -> QatchConfig:
    """Build a QatchConfig; raises pydantic.ValidationError on bad input."""
    return cast(QatchConfig, QatchConfig.model_validate(payload or {}))
