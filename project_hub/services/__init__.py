"""Service exports."""

from .errors import ConfigurationError, ProjectHubError, TelerivetError, ValidationError
from .filter_service import (
    Vocabulary,
    apply_filters,
    count_active_filters,
    derive_vocabulary,
    matches_category,
    matches_date_range,
    matches_industry,
    matches_search,
)
from .project_service import (
    catalog_summary,
    create_project,
    delete_project,
    fetch_max_serial_no,
    fetch_organization_projects,
    fetch_project_articles,
    fetch_projects,
    row_to_project,
    update_project,
)
from .telerivet_client import TelerivetTable

__all__ = [
    "ProjectHubError",
    "ConfigurationError",
    "ValidationError",
    "TelerivetError",
    "TelerivetTable",
    "Vocabulary",
    "apply_filters",
    "derive_vocabulary",
    "count_active_filters",
    "matches_search",
    "matches_category",
    "matches_industry",
    "matches_date_range",
    "fetch_projects",
    "fetch_project_articles",
    "fetch_max_serial_no",
    "fetch_organization_projects",
    "catalog_summary",
    "create_project",
    "update_project",
    "delete_project",
    "row_to_project",
]
