"""
Project Hub marketplace – Streamlit frontend.
No business logic in layout; fetching, mapping and filtering live in services.
"""

import asyncio
import csv
import io
from typing import Any, Awaitable, List, Optional, TypeVar

import streamlit as st

from schemas.filter_state import DateRange, FilterDimension, FilterState
from schemas.project import Project
from schemas.project_payload import ProjectUpdate
from services.errors import ProjectHubError
from services.filter_service import apply_filters, count_active_filters, derive_vocabulary
from services.project_service import (
    catalog_summary,
    create_project,
    delete_project,
    fetch_max_serial_no,
    fetch_projects,
    update_project,
)

T = TypeVar("T")

# Selectbox label for "no filter"; maps to None in FilterState
ALL_OPTION = "All"

# Widget keys per filter dimension (cleared by the clear buttons)
WIDGET_KEYS = {
    FilterDimension.SEARCH: "search_term",
    FilterDimension.CATEGORY: "category_filter",
    FilterDimension.INDUSTRY: "industry_filter",
    FilterDimension.DATE_RANGE: "date_filter",
}


def _run(coro: Awaitable[T]) -> T:
    """Drive one service coroutine on a private event loop."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def _load_projects() -> None:
    """Fetch the full project list into session state (the only remote read)."""
    try:
        projects = _run(fetch_projects())
        st.session_state["projects"] = projects
        st.session_state["summary"] = catalog_summary(projects)
        st.session_state["error"] = None
    except ProjectHubError as e:
        st.session_state["error"] = f"Error: {e}"
        st.session_state["projects"] = []


def _selection(value: str) -> Optional[str]:
    return None if value == ALL_OPTION else value


def _filter_state_from_widgets() -> FilterState:
    """Current FilterState built from widget values via explicit transitions."""
    ss = st.session_state
    return (
        FilterState()
        .with_search(ss.get(WIDGET_KEYS[FilterDimension.SEARCH], ""))
        .with_category(_selection(ss.get(WIDGET_KEYS[FilterDimension.CATEGORY], ALL_OPTION)))
        .with_industry(_selection(ss.get(WIDGET_KEYS[FilterDimension.INDUSTRY], ALL_OPTION)))
        .with_date_range(DateRange.from_selection(ss.get(WIDGET_KEYS[FilterDimension.DATE_RANGE])))
    )


def _clear_filter(dimension: FilterDimension) -> None:
    """on_click callback: runs before the rerun, so the reset is applied in one pass.
    Dropping the key puts the widget back on its default value."""
    st.session_state.pop(WIDGET_KEYS[dimension], None)


def _clear_all_filters() -> None:
    for dimension in FilterDimension:
        _clear_filter(dimension)


def _export_csv(projects: List[Project]) -> bytes:
    """Export projects to CSV bytes."""
    out = io.StringIO()
    writer = csv.writer(out)
    headers = [
        "serial_no", "title", "description", "category", "industry",
        "applicable_routes", "updated", "row_id", "links",
    ]
    writer.writerow(headers)
    for p in projects:
        writer.writerow([
            p.serial_no,
            p.title,
            p.description[:500],
            p.category,
            "; ".join(p.industry),
            "; ".join(p.applicable_routes),
            p.updated_at.isoformat() if p.updated_at else "",
            p.row_id,
            "; ".join(link.url for link in p.links),
        ])
    return out.getvalue().encode("utf-8")


def _render_filters(projects: List[Project]) -> FilterState:
    """Filter widgets; options come from the unfiltered list."""
    vocabulary = derive_vocabulary(projects)
    for key, options in ((WIDGET_KEYS[FilterDimension.CATEGORY], vocabulary.categories),
                         (WIDGET_KEYS[FilterDimension.INDUSTRY], vocabulary.industries)):
        # Drop a stale selection that vanished after a reload
        if st.session_state.get(key, ALL_OPTION) not in [ALL_OPTION, *options]:
            st.session_state.pop(key)

    st.text_input(
        "Search",
        placeholder="Search projects...",
        key=WIDGET_KEYS[FilterDimension.SEARCH],
    )
    col1, col2, col3 = st.columns(3)
    with col1:
        st.selectbox("Category", options=[ALL_OPTION, *vocabulary.categories], key=WIDGET_KEYS[FilterDimension.CATEGORY])
    with col2:
        st.selectbox("Industry", options=[ALL_OPTION, *vocabulary.industries], key=WIDGET_KEYS[FilterDimension.INDUSTRY])
    with col3:
        st.date_input("Last updated", value=(), key=WIDGET_KEYS[FilterDimension.DATE_RANGE], format="YYYY-MM-DD")

    state = _filter_state_from_widgets()
    active = count_active_filters(state)
    if active:
        bcols = st.columns(len(FilterDimension) + 1)
        bcols[0].button(f"Clear all ({active})", key="clear_all", on_click=_clear_all_filters)
        labels = {
            FilterDimension.SEARCH: "search",
            FilterDimension.CATEGORY: "category",
            FilterDimension.INDUSTRY: "industry",
            FilterDimension.DATE_RANGE: "dates",
        }
        for i, dimension in enumerate(FilterDimension, start=1):
            if state.clear(dimension) != state:
                bcols[i].button(
                    f"✕ {labels[dimension]}",
                    key=f"clear_{dimension.value}",
                    on_click=_clear_filter,
                    args=(dimension,),
                )
    return state


def _render_project_card(project: Project) -> None:
    with st.container():
        st.markdown("---")
        col_a, col_b = st.columns([3, 1])
        with col_a:
            st.markdown(f"### {project.title}")
            st.caption(f"#{project.serial_no} · Updated {project.updated_label}")
            badges = " ".join(f"`{tag}`" for tag in [project.category, *project.industry[:2]] if tag)
            if len(project.industry) > 2:
                badges += f" `+{len(project.industry) - 2}`"
            st.markdown(badges)
            st.markdown(project.description)
            if project.applicable_routes:
                st.caption(f"**Routes:** {', '.join(project.applicable_routes)}")
        with col_b:
            if project.card_image:
                st.image(project.card_image)
            for link in project.links:
                st.link_button(f"{link.icon} {link.name}", url=link.url, help=link.description)


def _render_management(projects: List[Project]) -> None:
    """Create / update / delete rows in the remote table."""
    with st.expander("Manage projects"):
        tab_create, tab_update, tab_delete = st.tabs(["Create", "Update", "Delete"])

        with tab_create:
            with st.form("create_project", clear_on_submit=True):
                title = st.text_input("Title *")
                description = st.text_area("Description *")
                category = st.text_input("Category")
                industry = st.text_input("Industries (comma separated)")
                routes = st.text_input("Applicable routes (comma separated)")
                serial_no = st.text_input("Serial number", help="Leave blank to auto-generate")
                telerivet_url = st.text_input("Telerivet URL")
                canva_url = st.text_input("Canva URL")
                hubspot_url = st.text_input("HubSpot URL")
                live_url = st.text_input("Live URL")
                card_image = st.text_input("Card image URL")
                if st.form_submit_button("Create", type="primary"):
                    _submit(
                        create_project(
                            {
                                "title": title,
                                "description": description,
                                "category": category,
                                "industry": industry,
                                "applicable_routes": routes,
                                "serial_no": serial_no,
                                "telerivet_url": telerivet_url,
                                "canva_url": canva_url,
                                "hubspot_url": hubspot_url,
                                "live_url": live_url,
                                "card_image": card_image,
                            }
                        ),
                        "Project created successfully",
                    )
            if st.button("Show highest serial number", key="max_serial_btn"):
                try:
                    st.info(f"Highest serial number: {_run(fetch_max_serial_no())}")
                except ProjectHubError as e:
                    st.error(str(e))

        by_label = {f"#{p.serial_no} {p.title}": p for p in projects if p.row_id}
        with tab_update:
            if not by_label:
                st.caption("No projects loaded.")
            else:
                label = st.selectbox("Project", options=list(by_label), key="update_target")
                target = by_label[label]
                with st.form("update_project"):
                    new_title = st.text_input("Title", value=target.title)
                    new_description = st.text_area("Description", value=target.description)
                    new_category = st.text_input("Category", value=target.category)
                    new_industry = st.text_input("Industries", value=", ".join(target.industry))
                    if st.form_submit_button("Save"):
                        _submit(
                            update_project(
                                ProjectUpdate(
                                    row_id=target.row_id,
                                    vars={
                                        "title": new_title,
                                        "description": new_description,
                                        "category": new_category,
                                        "industry": new_industry,
                                    },
                                )
                            ),
                            "Project updated",
                        )

        with tab_delete:
            if by_label:
                label = st.selectbox("Project", options=list(by_label), key="delete_target")
                if st.button("Delete", type="secondary", key="delete_btn"):
                    _submit(delete_project(by_label[label].row_id), "Project deleted")


def _submit(coro: Awaitable[Any], success_message: str) -> None:
    """Run a write, report the outcome and reload the list."""
    try:
        _run(coro)
    except ProjectHubError as e:
        st.error(f"{e}" + (f" ({e.details})" if getattr(e, "details", None) else ""))
        return
    st.success(success_message)
    _load_projects()


def render_layout() -> None:
    """Streamlit page layout; filters and display use services layer."""
    st.set_page_config(page_title="Project Marketplace", layout="wide")
    st.title("Project Marketplace")
    st.markdown("*Discover and explore our communication solutions.*")
    st.divider()

    # Session state: projects (full unfiltered list), summary, error
    if "projects" not in st.session_state:
        with st.spinner("Loading projects…"):
            _load_projects()

    if st.session_state.get("error"):
        st.error(st.session_state["error"])
        if st.button("Try Again", key="retry_btn"):
            _load_projects()
            st.rerun()

    projects: List[Project] = st.session_state.get("projects") or []
    summary = st.session_state.get("summary")
    if summary:
        st.caption(
            f"{summary.project_count} projects · refreshed {summary.refreshed_at:%Y-%m-%d %H:%M} UTC"
        )

    # ----- Filters -----
    st.subheader("Filters")
    state = _render_filters(projects)
    filtered = apply_filters(projects, state)

    st.divider()

    # ----- Results -----
    st.subheader("Projects")
    st.markdown(f"**Showing:** {len(filtered)} of {len(projects)}")
    if filtered:
        st.download_button(
            "Export to CSV",
            data=_export_csv(filtered),
            file_name="projects.csv",
            mime="text/csv",
            key="export_csv",
        )
        for project in filtered:
            _render_project_card(project)
    elif projects:
        st.warning("No projects match the current filters.")
        st.button("Clear all filters", key="clear_all_empty", on_click=_clear_all_filters)
    elif not st.session_state.get("error"):
        st.info("No projects found.")

    st.divider()
    _render_management(projects)


if __name__ == "__main__":
    render_layout()
