"""Write payloads for creating and updating project rows."""

import time
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from config import DEFAULT_CATEGORY, DEFAULT_CREATE_INDUSTRY
from utils.helpers import join_csv, or_default


class ProjectCreate(BaseModel):
    """Fields accepted when listing a new project."""

    title: str = Field(..., description="Project title (required)")
    description: str = Field(..., description="Project description (required)")
    category: Optional[str] = Field(default=None, description="Defaults to Uncategorized")
    industry: Optional[Union[List[str], str]] = Field(default=None, description="Tags, list or comma string")
    serial_no: Optional[str] = Field(default=None, description="Generated as SN<epoch ms> when omitted")
    telerivet_url: Optional[str] = None
    canva_url: Optional[str] = None
    hubspot_url: Optional[str] = None
    live_url: Optional[str] = None
    applicable_routes: Optional[Union[List[str], str]] = None
    card_image: Optional[str] = None

    @field_validator("title", "description")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v

    def to_vars(self) -> Dict[str, Any]:
        """Row vars as stored in the remote table."""
        industry = join_csv(self.industry) if self.industry else ""
        return {
            "title": self.title,
            "description": self.description,
            "category": or_default(self.category, DEFAULT_CATEGORY),
            "industry": or_default(industry, DEFAULT_CREATE_INDUSTRY),
            "s_n": or_default(self.serial_no, f"SN{int(time.time() * 1000)}"),
            "telerivet_url": self.telerivet_url or "",
            "canva_url": self.canva_url or "",
            "hubspot_url": self.hubspot_url or "",
            "live_url": self.live_url or "",
            "applicable_route": join_csv(self.applicable_routes),
            "card_image": self.card_image or "",
        }


class ProjectUpdate(BaseModel):
    """Partial update of an existing row's vars."""

    row_id: str = Field(..., description="Remote row id (required)")
    vars: Dict[str, Any] = Field(default_factory=dict, description="Vars to overwrite")

    @field_validator("row_id")
    @classmethod
    def _row_id_present(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v.strip()
