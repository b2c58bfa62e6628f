"""Project records as listed on the marketplace."""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field, model_validator

from utils.date_parser import classify_date_value, filter_timezone, format_display_date, parse_date_value


class ProjectLink(BaseModel):
    """External resource attached to a project card."""

    name: str = Field(..., description="Display name (e.g. Canva Decks)")
    url: str = Field(..., description="Target URL")
    description: str = Field(default="", description="One-line blurb under the link")
    icon: str = Field(default="", description="Emoji icon")


class Project(BaseModel):
    """One marketplace project, mapped from a remote table row."""

    title: str = Field(..., description="Project title")
    description: str = Field(default="", description="Free-text description")
    serial_no: str = Field(default="000", description="Human-facing serial number (s_n var)")
    category: str = Field(default="", description="Single category")
    industry: List[str] = Field(default_factory=list, description="Industry tags")
    time_updated: Optional[Union[int, float, str]] = Field(
        default=None, description="Raw last-update timestamp from the table row"
    )
    updated_at: Optional[datetime] = Field(
        default=None, description="time_updated resolved to an aware datetime; None if missing or invalid"
    )
    row_id: str = Field(default="", description="Remote row id")
    card_image: Optional[str] = Field(default=None, description="Card image URL")
    applicable_routes: List[str] = Field(default_factory=list, description="Routes this project applies to")
    links: List[ProjectLink] = Field(default_factory=list, description="External links, display order")

    @model_validator(mode="after")
    def _resolve_updated_at(self) -> "Project":
        if self.updated_at is None and self.time_updated is not None:
            self.updated_at = parse_date_value(self.time_updated)
        elif self.updated_at is not None and self.updated_at.tzinfo is None:
            self.updated_at = self.updated_at.replace(tzinfo=filter_timezone())
        return self

    @property
    def updated_label(self) -> str:
        """Card date label from the already-resolved updated_at."""
        if self.updated_at is not None:
            return format_display_date(self.updated_at)
        return "No date" if classify_date_value(self.time_updated) is None else "Invalid date"


class ProjectArticle(BaseModel):
    """Detail view of a project looked up by serial number."""

    title: str
    description: str
    serial_no: str
    implementation: List[str] = Field(default_factory=list)
    overview: str = ""
    card_image: str = ""
    industry: List[str] = Field(default_factory=list)
    applicable_routes: List[str] = Field(default_factory=list)


class OrganizationProject(BaseModel):
    """Project row from the demo organization table."""

    organization_name: str
    project_name: str
    project_description: str
    status: bool = False
    key_features: str = ""
    project_url: str = ""
    routes_available: str = ""
    services_available: str = ""


class CatalogSummary(BaseModel):
    """Snapshot shown above the list: how many projects and when they were fetched."""

    project_count: int
    refreshed_at: datetime
