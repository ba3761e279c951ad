from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class Severity(StrEnum):
    VIOLATION = "violation"
    WARNING = "warning"


class RuleId(StrEnum):
    DISCOVERY_ERROR = "DiscoveryError"
    MISSING_BLOCK = "MissingBlock"
    MALFORMED_BLOCK = "MalformedBlock"
    MISSING_DESCRIPTION = "MissingDescription"
    UNQUOTED_DESCRIPTION = "UnquotedDescription"
    DESCRIPTION_TOO_SHORT = "DescriptionTooShort"
    DESCRIPTION_TOO_LONG = "DescriptionTooLong"
    BAD_FILE_NAME = "BadFileName"
    MISSING_TOOLS = "MissingTools"
    INVALID_TOOLS = "InvalidTools"
    MISSING_MODEL = "MissingModel"
    MISSING_NAME = "MissingName"
    BAD_NAME_FORMAT = "BadNameFormat"
    NAME_FOLDER_MISMATCH = "NameFolderMismatch"
    BAD_FOLDER_NAME = "BadFolderName"
    UNREFERENCED_ASSET = "UnreferencedAsset"
    ASSET_TOO_LARGE = "AssetTooLarge"


class Violation(BaseModel):
    rule_id: RuleId
    severity: Severity = Severity.VIOLATION
    message: str
    file_path: str | None = None
    line: int | None = None
