"""Schema exports."""

from .filter_state import DateRange, FilterDimension, FilterState
from .project import CatalogSummary, OrganizationProject, Project, ProjectArticle, ProjectLink
from .project_payload import ProjectCreate, ProjectUpdate

__all__ = [
    "Project",
    "ProjectLink",
    "ProjectArticle",
    "OrganizationProject",
    "CatalogSummary",
    "ProjectCreate",
    "ProjectUpdate",
    "DateRange",
    "FilterDimension",
    "FilterState",
]
