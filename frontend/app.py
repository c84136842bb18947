"""Streamlit frontend for bindery.

Builds an input form from the configured template's extracted schema,
renders the input through the API and saves it for later.
"""

import json
import logging
import os
from typing import Any

import httpx
import streamlit as st
import streamlit.components.v1 as components
from typing_extensions import TypedDict

# Configuration
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")

# Page config
st.set_page_config(
    page_title="bindery",
    page_icon="🧩",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

ROOT_SCOPE = "root"


# =============================================================================
# Type Definitions
# =============================================================================


class ComponentDocument(TypedDict, total=False):
    """One node of a schema document returned by /schema."""
    properties: dict[str, str]
    components: dict[str, "ComponentDocument"]
    array: bool
    itemName: str
    toggles: list[str]


# =============================================================================
# API Client
# =============================================================================


class BinderyAPIClient:
    """API client for the bindery endpoints."""

    def __init__(self, base_url: str):
        """Initialize the API client.

        Args:
            base_url: Base URL of the API.
        """
        self.base_url = base_url.rstrip("/")

    def health_check(self) -> bool:
        """Check if the API is healthy.

        Returns:
            True if API is healthy, False otherwise.
        """
        try:
            response = httpx.get(f"{self.base_url}/health", timeout=5.0)
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    def get_schema(self) -> dict[str, ComponentDocument] | None:
        """Fetch the schema of the configured template."""
        try:
            response = httpx.get(f"{self.base_url}/schema", timeout=10.0)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Schema fetch failed: {e.response.status_code} - {e.response.text}")
            st.error(f"Schema fetch failed: {e.response.status_code}")
            st.error(e.response.text)
            return None
        except httpx.HTTPError as e:
            logger.error(f"Schema fetch error: {e}")
            st.error(f"Schema fetch error: {e}")
            return None

    def render(self, data: dict[str, Any]) -> str | None:
        """Render input data into the template."""
        try:
            response = httpx.post(
                f"{self.base_url}/render",
                content=json.dumps(data),
                headers={"Content-Type": "application/json"},
                timeout=30.0,
            )
            response.raise_for_status()
            return response.text
        except httpx.HTTPStatusError as e:
            logger.error(f"Render failed: {e.response.status_code} - {e.response.text}")
            st.error(f"Render failed: {e.response.status_code}")
            st.error(e.response.text)
            return None
        except httpx.HTTPError as e:
            logger.error(f"Render error: {e}")
            st.error(f"Render error: {e}")
            return None

    def save(self, data: dict[str, Any]) -> str | None:
        """Save input data, returning the stored name."""
        try:
            response = httpx.post(f"{self.base_url}/save", content=json.dumps(data), timeout=10.0)
            response.raise_for_status()
            return response.json()["filename"]
        except httpx.HTTPError as e:
            logger.error(f"Save error: {e}")
            st.error(f"Save error: {e}")
            return None

    def list_forms(self) -> list[str]:
        try:
            response = httpx.get(f"{self.base_url}/forms", timeout=10.0)
            response.raise_for_status()
            return response.json()["forms"]
        except httpx.HTTPError as e:
            logger.error(f"Form list error: {e}")
            return []

    def load_form(self, name: str) -> dict[str, Any] | None:
        try:
            response = httpx.get(f"{self.base_url}/forms/{name}", timeout=10.0)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            logger.error(f"Form load error: {e}")
            st.error(f"Could not load {name}: {e}")
            return None


# =============================================================================
# Form Builder
# =============================================================================


def render_component(
    node: ComponentDocument,
    key: str,
    defaults: dict[str, Any],
) -> dict[str, Any]:
    """Render inputs for one schema component and return the entered data.

    Args:
        node: Schema node to render.
        key: Unique widget key prefix.
        defaults: Previously saved values for this component.

    Returns:
        The component's data as entered.
    """
    data: dict[str, Any] = {}

    for prop in node.get("properties", {}):
        data[prop] = st.text_input(
            prop,
            value=str(defaults.get(prop, "")),
            key=f"{key}.{prop}",
        )

    for name, child in node.get("components", {}).items():
        child_defaults = defaults.get(name)
        if child.get("array"):
            data[name] = render_list(name, child, f"{key}.{name}", child_defaults or [])
        else:
            with st.container(border=True):
                st.markdown(f"**{name}**")
                data[name] = render_component(
                    child, f"{key}.{name}", child_defaults if isinstance(child_defaults, dict) else {}
                )

    return data


def render_list(
    name: str,
    node: ComponentDocument,
    key: str,
    defaults: list[Any],
) -> list[dict[str, Any]]:
    """Render a list component with add/remove controls."""
    count_key = f"{key}#count"
    if count_key not in st.session_state:
        st.session_state[count_key] = len(defaults)

    item_name = node.get("itemName", "item")
    items = []
    with st.container(border=True):
        st.markdown(f"**{name}** (list of {item_name})")
        for index in range(st.session_state[count_key]):
            item_defaults = defaults[index] if index < len(defaults) else {}
            st.caption(f"{item_name} {index + 1}")
            items.append(
                render_component(
                    node,
                    f"{key}[{index}]",
                    item_defaults if isinstance(item_defaults, dict) else {},
                )
            )

        add_col, remove_col = st.columns(2)
        if add_col.button(f"➕ Add {item_name}", key=f"{key}#add"):
            st.session_state[count_key] += 1
            st.rerun()
        if remove_col.button(
            f"➖ Remove {item_name}", key=f"{key}#remove", disabled=not st.session_state[count_key]
        ):
            st.session_state[count_key] -= 1
            st.rerun()
    return items


def build_input(schema: dict[str, ComponentDocument], defaults: dict[str, Any]) -> dict[str, Any]:
    """Render the whole form and assemble the input document."""
    name, root = next(iter(schema.items()))
    root_defaults = defaults if name == ROOT_SCOPE else defaults.get(name, {})

    data = render_component(root, name, root_defaults)

    toggles = root.get("toggles", [])
    flags = {}
    if toggles:
        st.subheader("Sections")
        for flag in toggles:
            flags[flag] = st.checkbox(flag, value=defaults.get(flag, True) is not False, key=f"toggle.{flag}")

    document = data if name == ROOT_SCOPE else {name: data}
    document.update(flags)
    return document


# =============================================================================
# Page
# =============================================================================


def render_sidebar(client: BinderyAPIClient) -> dict[str, Any]:
    """Render the sidebar and return saved values to prefill, if any.

    Args:
        client: The API client instance.
    """
    with st.sidebar:
        st.title("🧩 bindery")

        st.divider()

        # Connection status
        if client.health_check():
            st.success("✅ API Connected")
        else:
            st.error("❌ API Disconnected")
            st.info(f"API URL: {API_BASE_URL}")

        st.divider()

        st.subheader("Saved inputs")
        forms = client.list_forms()
        choice = st.selectbox("Load", ["(new)"] + forms)
        if choice != "(new)" and st.button("Load input"):
            loaded = client.load_form(choice)
            if loaded is not None:
                for key in [k for k in st.session_state if k != "defaults"]:
                    del st.session_state[key]
                st.session_state.defaults = loaded
                st.rerun()

        st.divider()
        st.caption(f"API: `{API_BASE_URL}`")

    return st.session_state.get("defaults", {})


def main() -> None:
    """Main application entry point."""
    client = BinderyAPIClient(API_BASE_URL)
    defaults = render_sidebar(client)

    st.title("bindery")
    st.markdown("Fill in the template's data and render it")

    schema = client.get_schema()
    if not schema:
        st.stop()

    document = build_input(schema, defaults)

    st.divider()
    render_col, save_col = st.columns(2)
    if render_col.button("🚀 Render", type="primary", use_container_width=True):
        html = client.render(document)
        if html is not None:
            st.session_state.rendered = html
    if save_col.button("💾 Save", use_container_width=True):
        filename = client.save(document)
        if filename:
            st.success(f"Saved as {filename}")

    with st.expander("Input JSON"):
        st.json(document)

    if st.session_state.get("rendered"):
        st.subheader("Preview")
        components.html(st.session_state.rendered, height=800, scrolling=True)


if __name__ == "__main__":
    main()
