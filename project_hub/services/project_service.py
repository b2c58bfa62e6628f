"""Map Telerivet table rows to marketplace records and expose project operations."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

import pydantic
from config import (
    DEFAULT_CARD_IMAGE,
    DEFAULT_CATEGORY,
    DEFAULT_DESCRIPTION,
    DEFAULT_INDUSTRY,
    DEFAULT_OVERVIEW,
    DEFAULT_SERIAL_NO,
    DEFAULT_TITLE,
    DEMO_TELERIVET_TABLE_ID,
    PROJECT_LINK_TYPES,
    TELERIVET_TABLE_ID,
)
from schemas.project import CatalogSummary, OrganizationProject, Project, ProjectArticle, ProjectLink
from schemas.project_payload import ProjectCreate, ProjectUpdate
from services.errors import ValidationError
from services.telerivet_client import TelerivetTable
from utils.helpers import as_text, parse_leading_int, split_csv
from utils.logger import get_logger

logger = get_logger(__name__)


def projects_table(**kwargs: Any) -> TelerivetTable:
    """Main marketplace table."""
    return TelerivetTable(TELERIVET_TABLE_ID, **kwargs)


def demo_table(**kwargs: Any) -> TelerivetTable:
    """Demo table of organization projects."""
    return TelerivetTable(DEMO_TELERIVET_TABLE_ID, **kwargs)


# ---- Row mapping ----

def _row_vars(row: Dict[str, Any]) -> Dict[str, Any]:
    return row.get("vars") or {}


def _raw_timestamp(value: Any) -> Optional[Union[int, float, str]]:
    return value if isinstance(value, (int, float, str)) else None


def build_project_links(vars: Dict[str, Any]) -> List[ProjectLink]:
    """One link per non-empty <prefix>_url var, in PROJECT_LINK_TYPES order."""
    links = []
    for prefix, link_type in PROJECT_LINK_TYPES.items():
        url = as_text(vars.get(f"{prefix}_url"))
        if not url:
            continue
        links.append(
            ProjectLink(
                name=link_type["name"],
                url=url,
                description=as_text(vars.get(f"{prefix}_description"), link_type["description"]),
                icon=link_type["icon"],
            )
        )
    return links


def row_to_project(row: Dict[str, Any]) -> Project:
    """Build a Project from a raw row, substituting defaults for missing vars."""
    vars = _row_vars(row)
    return Project(
        title=as_text(vars.get("title"), DEFAULT_TITLE),
        description=as_text(vars.get("description"), DEFAULT_DESCRIPTION),
        serial_no=as_text(vars.get("s_n"), DEFAULT_SERIAL_NO),
        category=as_text(vars.get("category"), DEFAULT_CATEGORY),
        time_updated=_raw_timestamp(row.get("time_updated")),
        row_id=str(row.get("id") or ""),
        card_image=as_text(vars.get("card_image"), None),
        applicable_routes=split_csv(vars.get("applicable_route")),
        industry=split_csv(vars.get("industry")) or [DEFAULT_INDUSTRY],
        links=build_project_links(vars),
    )


def row_to_article(row: Dict[str, Any]) -> ProjectArticle:
    vars = _row_vars(row)
    return ProjectArticle(
        title=as_text(vars.get("title"), DEFAULT_TITLE),
        description=as_text(vars.get("description"), DEFAULT_DESCRIPTION),
        serial_no=as_text(vars.get("s_n"), DEFAULT_SERIAL_NO),
        implementation=split_csv(vars.get("implementation")),
        overview=as_text(vars.get("overview"), DEFAULT_OVERVIEW),
        card_image=as_text(vars.get("card_image"), DEFAULT_CARD_IMAGE),
        industry=split_csv(vars.get("industry")),
        applicable_routes=split_csv(vars.get("applicable_route")),
    )


def row_to_organization_project(row: Dict[str, Any]) -> OrganizationProject:
    vars = _row_vars(row)
    status = vars.get("status")
    return OrganizationProject(
        organization_name=as_text(vars.get("organization_name"), "Unknown Organization"),
        project_name=as_text(vars.get("project_name"), DEFAULT_TITLE),
        project_description=as_text(vars.get("project_description"), DEFAULT_DESCRIPTION),
        status=status if isinstance(status, bool) else False,
        key_features=as_text(vars.get("key_features"), "No key features listed"),
        project_url=as_text(vars.get("project_url")),
        routes_available=as_text(vars.get("routes_available"), "Not specified"),
        services_available=as_text(vars.get("services_available"), "No services information"),
    )


# ---- Reads ----

async def fetch_projects(table: Optional[TelerivetTable] = None) -> List[Project]:
    """Bulk read of the marketplace table. Raises TelerivetError/ConfigurationError."""
    table = table or projects_table()
    rows = await table.list_rows()
    projects = [row_to_project(r) for r in rows]
    logger.info("Loaded %s projects", len(projects))
    return projects


async def fetch_project_articles(serial_no: str, table: Optional[TelerivetTable] = None) -> List[ProjectArticle]:
    """Detail rows matching a serial number."""
    serial_no = (serial_no or "").strip()
    if not serial_no:
        raise ValidationError("Serial number is required")
    table = table or projects_table()
    rows = await table.list_rows({"s_n": serial_no})
    return [row_to_article(r) for r in rows]


async def fetch_max_serial_no(table: Optional[TelerivetTable] = None) -> str:
    """Largest numeric s_n in the table, as a string; "0" if none parse."""
    table = table or projects_table()
    rows = await table.list_rows()
    serials = [n for n in (parse_leading_int(_row_vars(r).get("s_n")) for r in rows) if n is not None]
    return str(max(serials)) if serials else "0"


async def fetch_organization_projects(
    organization_name: str,
    table: Optional[TelerivetTable] = None,
) -> List[OrganizationProject]:
    """Projects of the demo table. The organization name is required but, as upstream, not used to filter."""
    if not (organization_name or "").strip():
        raise ValidationError("Organization name is required")
    table = table or demo_table()
    rows = await table.list_rows()
    return [row_to_organization_project(r) for r in rows]


def catalog_summary(projects: List[Project], now: Optional[datetime] = None) -> CatalogSummary:
    return CatalogSummary(project_count=len(projects), refreshed_at=now or datetime.now(timezone.utc))


# ---- Writes ----

def _validated(model: type, data: Any) -> Any:
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise ValidationError(f"Invalid or missing fields: {fields}") from e


async def create_project(
    payload: Union[ProjectCreate, Dict[str, Any]],
    table: Optional[TelerivetTable] = None,
) -> Dict[str, Any]:
    """Create a project row. Title and description are required."""
    payload = _validated(ProjectCreate, payload)
    table = table or projects_table()
    vars = payload.to_vars()
    logger.info("Creating project '%s' (s_n=%s)", vars["title"], vars["s_n"])
    return await table.create_row(vars)


async def update_project(
    payload: Union[ProjectUpdate, Dict[str, Any]],
    table: Optional[TelerivetTable] = None,
) -> Dict[str, Any]:
    payload = _validated(ProjectUpdate, payload)
    table = table or projects_table()
    logger.info("Updating project row %s: %s", payload.row_id, sorted(payload.vars))
    return await table.update_row(payload.row_id, payload.vars)


async def delete_project(row_id: str, table: Optional[TelerivetTable] = None) -> Dict[str, Any]:
    row_id = (row_id or "").strip()
    if not row_id:
        raise ValidationError("Row ID is required")
    table = table or projects_table()
    logger.info("Deleting project row %s", row_id)
    return await table.delete_row(row_id)
