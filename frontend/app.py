"""
Property Catalog Frontend - Streamlit Interface

Browses the property catalog from a single bulk fetch that is filtered,
sorted and paginated locally, and sends creates and deletes straight to
the API.

Run with: streamlit run frontend/app.py
"""

import logging
from typing import Optional

import streamlit as st

from frontend.api_client import ApiError, PropertyApiClient
from frontend.config import FrontendSettings, get_frontend_settings
from frontend.listing import SORT_OPTIONS, ListingPage, clamp_page, derive_listing
from frontend.snapshot import SnapshotCache, SnapshotError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

DEFAULT_FILTERS = {
    "name": "",
    "address": "",
    "min_price": 0.0,
    "max_price": 0.0,
    "sort_by": "",
}


def init_session_state(settings: FrontendSettings):
    """Initialize session state: API client, snapshot cache and UI state."""
    if "api_client" not in st.session_state:
        st.session_state.api_client = PropertyApiClient(
            settings.api_base_url,
            timeout=settings.request_timeout,
        )
    if "snapshot" not in st.session_state:
        client: PropertyApiClient = st.session_state.api_client
        st.session_state.snapshot = SnapshotCache(
            fetch=lambda: client.fetch_snapshot(settings.bulk_page_size),
            retry_count=settings.retry_count,
            retry_interval=settings.retry_interval,
        )
    if "filters" not in st.session_state:
        st.session_state.filters = dict(DEFAULT_FILTERS)
    if "page_number" not in st.session_state:
        st.session_state.page_number = 1
    if "page_size" not in st.session_state:
        st.session_state.page_size = settings.default_page_size
    if "selected_id" not in st.session_state:
        st.session_state.selected_id = None


def format_price(price: float) -> str:
    """Format a price as US dollars without decimals."""
    return f"${price:,.0f}"


def _positive_or_none(value: float) -> Optional[float]:
    return value if value and value > 0 else None


def render_filters(settings: FrontendSettings):
    """Render the sidebar filter form."""
    filters = st.session_state.filters

    with st.sidebar:
        st.header("Filters")
        with st.form("filters"):
            name = st.text_input("Name", value=filters["name"], placeholder="e.g. Villa")
            address = st.text_input("Address", value=filters["address"], placeholder="e.g. Miami")
            col1, col2 = st.columns(2)
            with col1:
                min_price = st.number_input("Min price", min_value=0.0, value=filters["min_price"], step=10000.0)
            with col2:
                max_price = st.number_input("Max price", min_value=0.0, value=filters["max_price"], step=10000.0)
            sort_keys = list(SORT_OPTIONS)
            sort_by = st.selectbox(
                "Sort by",
                options=sort_keys,
                index=sort_keys.index(filters["sort_by"]),
                format_func=SORT_OPTIONS.get,
            )
            options = settings.page_size_options
            page_size = st.selectbox(
                "Elements per page",
                options=options,
                index=options.index(st.session_state.page_size)
                if st.session_state.page_size in options
                else 0,
            )
            submitted = st.form_submit_button("Search", use_container_width=True)

        if submitted:
            st.session_state.filters = {
                "name": name,
                "address": address,
                "min_price": min_price,
                "max_price": max_price,
                "sort_by": sort_by,
            }
            st.session_state.page_size = page_size
            st.session_state.page_number = 1
            st.rerun()

        if st.button("Clear filters", use_container_width=True):
            st.session_state.filters = dict(DEFAULT_FILTERS)
            st.session_state.page_size = settings.default_page_size
            st.session_state.page_number = 1
            st.rerun()

        st.button("Refresh data", on_click=request_refresh, use_container_width=True)


def refresh_snapshot():
    try:
        st.session_state.snapshot.refresh()
    except SnapshotError as e:
        logger.error("Refresh failed: %s", e)


def current_page() -> ListingPage:
    """Derive the visible page from the cached snapshot and UI state."""
    filters = st.session_state.filters
    return derive_listing(
        st.session_state.snapshot.get(),
        name=filters["name"],
        address=filters["address"],
        min_price=_positive_or_none(filters["min_price"]),
        max_price=_positive_or_none(filters["max_price"]),
        sort_by=filters["sort_by"],
        page_number=st.session_state.page_number,
        page_size=st.session_state.page_size,
    )


def render_property_card(prop: dict):
    """Render one property in the results list."""
    with st.container(border=True):
        if prop.get("imageUrl"):
            st.image(prop["imageUrl"], use_container_width=True)
        st.subheader(prop.get("name", "Unnamed property"))
        st.caption(prop.get("address", ""))
        st.markdown(f"**{format_price(prop.get('price', 0))}**")
        if st.button("View details", key=f"details-{prop['id']}"):
            st.session_state.selected_id = prop["id"]
            st.rerun()


def render_pagination(page: ListingPage):
    """Render previous/next controls for the derived listing."""
    if page.total_pages <= 1:
        return

    col1, col2, col3 = st.columns([1, 2, 1])
    with col1:
        if st.button("Previous", disabled=page.page_number <= 1, use_container_width=True):
            st.session_state.page_number -= 1
            st.rerun()
    with col2:
        st.markdown(
            f"<div style='text-align: center'>Page {page.page_number} of {page.total_pages}</div>",
            unsafe_allow_html=True,
        )
    with col3:
        if st.button("Next", disabled=page.page_number >= page.total_pages, use_container_width=True):
            st.session_state.page_number += 1
            st.rerun()


def render_details(property_id: str):
    """Render the detail view of a single property."""
    client: PropertyApiClient = st.session_state.api_client

    if st.button("Back to results"):
        st.session_state.selected_id = None
        st.rerun()

    try:
        prop = client.get_property(property_id)
    except ApiError as e:
        st.error(f"**Error:** {e.message}")
        return

    if prop is None:
        st.warning("This property no longer exists.")
        return

    if prop.get("imageUrl"):
        st.image(prop["imageUrl"], use_container_width=True)
    st.header(prop["name"])
    st.markdown(f"**Address:** {prop['address']}")
    st.markdown(f"**Price:** {format_price(prop['price'])}")
    st.markdown(f"**Owner:** {prop['idOwner']}")
    st.caption(f"Created {prop['createdAt']} · Updated {prop['updatedAt']}")

    if st.button("Delete property", type="primary"):
        try:
            client.delete_property(property_id)
        except ApiError as e:
            st.error(f"**Error:** {e.message}")
            return
        st.session_state.selected_id = None
        refresh_snapshot()
        st.rerun()


def render_create_form():
    """Render the form that adds a new property."""
    client: PropertyApiClient = st.session_state.api_client

    with st.expander("Add property"):
        with st.form("create", clear_on_submit=True):
            name = st.text_input("Name")
            address = st.text_input("Address")
            price = st.number_input("Price", min_value=0.0, step=10000.0)
            image_url = st.text_input("Image URL")
            id_owner = st.text_input("Owner ID")
            submitted = st.form_submit_button("Create")

        if submitted:
            try:
                created = client.create_property(
                    {
                        "idOwner": id_owner,
                        "name": name,
                        "address": address,
                        "price": price,
                        "imageUrl": image_url,
                    }
                )
            except ApiError as e:
                st.error(f"**Error:** {e.message}")
                return
            st.success(f"Created {created['name']}")
            refresh_snapshot()


def request_refresh():
    # Handled at the top of the next run, before the page is derived
    st.session_state.refresh_requested = True


def render_error(message: str):
    """Render the error state with a manual retry action."""
    st.error(f"**Error loading properties:** {message}")
    st.caption(f"Make sure the backend is running at {st.session_state.api_client.base_url}")
    st.button("Retry", on_click=request_refresh)


def main():
    """Main application entry point."""
    st.set_page_config(
        page_title="Property Finder",
        page_icon="🏠",
        layout="wide",
    )

    st.markdown(
        """
        <style>
        @import url('https://fonts.googleapis.com/css2?family=Rubik:wght@300;400;500;600;700&display=swap');

        * {
            font-family: 'Rubik', sans-serif !important;
        }

        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}

        .stApp {
            background-color: #CAD2C5 !important;
        }

        .stButton > button {
            border-radius: 8px;
            background-color: #52796F !important;
            color: #CAD2C5 !important;
            border: none !important;
        }

        .stButton > button:hover {
            background-color: #354F52 !important;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )

    settings = get_frontend_settings()
    init_session_state(settings)

    st.title("Property Finder")
    st.caption("Discover your dream property")

    if st.session_state.selected_id:
        render_details(st.session_state.selected_id)
        return

    render_filters(settings)
    render_create_form()

    snapshot: SnapshotCache = st.session_state.snapshot
    if st.session_state.pop("refresh_requested", False):
        with st.spinner("Loading properties..."):
            refresh_snapshot()
        if not snapshot.loaded:
            render_error(snapshot.last_error or "Unknown error")
            return

    try:
        with st.spinner("Loading properties..."):
            page = current_page()
    except SnapshotError as e:
        render_error(str(e))
        return

    page_number = clamp_page(page.page_number, page.total_pages)
    if page_number != page.page_number:
        st.session_state.page_number = page_number
        page = current_page()

    st.markdown(f"**{page.total_count}** properties found")
    if not page.properties:
        st.info("No properties match your filters.")
        return

    columns = st.columns(3)
    for i, prop in enumerate(page.properties):
        with columns[i % 3]:
            render_property_card(prop)

    render_pagination(page)


if __name__ == "__main__":
    main()
