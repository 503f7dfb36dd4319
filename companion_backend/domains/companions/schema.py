"""
Companion schema mapping and request validation

The companions table stores PascalCase columns while the application works
with camelCase attributes. COMPANION_FIELD_MAP is the single mapping used in
both directions.
"""
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, field_validator

from shared.database.config import CompanionColumns, DatabaseConfig


# application attribute -> persisted column
COMPANION_FIELD_MAP: Dict[str, str] = {
    'id': CompanionColumns.ID,
    'name': CompanionColumns.NAME,
    'subject': CompanionColumns.SUBJECT,
    'topic': CompanionColumns.TOPIC,
    'voice': CompanionColumns.VOICE,
    'style': CompanionColumns.STYLE,
    'duration': CompanionColumns.DURATION,
    'author': CompanionColumns.AUTHOR,
    'bookmarked': CompanionColumns.BOOKMARK,
}

# persisted column -> application attribute
COMPANION_COLUMN_MAP: Dict[str, str] = {column: attr for attr, column in COMPANION_FIELD_MAP.items()}


def normalize_companion(row: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert a companions row into the application shape

    Args:
        row: Row as returned by the store (PascalCase columns)

    Returns:
        dict: Companion with camelCase keys; bookmarked is always a bool
    """
    companion = {attr: row.get(column) for attr, column in COMPANION_FIELD_MAP.items()}
    companion['bookmarked'] = bool(companion['bookmarked'])
    return companion


def denormalize_companion(companion: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert an application companion into a companions row

    Only keys present in the input are emitted, so partial payloads stay partial.
    """
    return {
        column: companion[attr]
        for attr, column in COMPANION_FIELD_MAP.items()
        if attr in companion
    }


class CreateCompanion(BaseModel):
    """Payload accepted by create_companion"""
    name: str = Field(min_length=1, max_length=255)
    subject: str = Field(min_length=1, max_length=255)
    topic: str = Field(min_length=1, max_length=1000)
    voice: str = Field(min_length=1, max_length=100)
    style: str = Field(min_length=1, max_length=100)
    duration: Union[int, float] = Field(ge=0)

    # author and bookmarked are never taken from the payload
    model_config = {"extra": "ignore"}

    @field_validator('name', 'subject', 'topic', 'voice', 'style')
    @classmethod
    def strip_text(cls, v):
        return v.strip()


class CompanionQuery(BaseModel):
    """Query parameters for get_all_companions"""
    limit: int = Field(default=DatabaseConfig.DEFAULT_PAGE_SIZE, ge=1)
    page: int = Field(default=DatabaseConfig.DEFAULT_PAGE, ge=1)
    subject: Optional[str] = None
    topic: Optional[str] = None

    model_config = {"extra": "ignore"}

    @field_validator('subject', 'topic', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        """Blank filter strings mean no filter"""
        if v is None:
            return None
        v = str(v).strip()
        return v or None


class SessionQuery(BaseModel):
    """Query parameters for the session history listings"""
    limit: int = Field(default=DatabaseConfig.DEFAULT_PAGE_SIZE, ge=1)

    model_config = {"extra": "ignore"}
