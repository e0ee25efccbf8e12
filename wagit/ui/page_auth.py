"""Auth stage: check a personal access token against GitHub."""

from __future__ import annotations

import streamlit as st

from wagit.config import Config
from wagit.errors import UpstreamCallError, ValidationError
from wagit.ui.components import get_github_client
from wagit.ui.presentation import Presentation
from wagit.wizard.flow import WizardContext, authenticated, validate_token

TOKEN_SETTINGS_URL = "https://github.com/settings/tokens"


def render(ctx: WizardContext, config: Config, presentation: Presentation, view: dict) -> WizardContext | None:
    """Render the auth stage. Returns the next context once the token checks out."""
    in_flight = view.get("in_flight", False)

    st.subheader(presentation.label("\U0001f419", "GitHub Authentication"))
    st.caption("Enter your GitHub Personal Access Token to continue")

    with st.form("auth_form"):
        token = st.text_input("GitHub Token", type="password", placeholder="Enter your GitHub token")
        submitted = st.form_submit_button(
            presentation.label("\U0001f419", "Connect to GitHub"),
            key="auth_submit",
            type="primary",
            disabled=in_flight,
        )

    st.caption(f"Don't have a token? [Create one here]({TOKEN_SETTINGS_URL})")

    if view.get("auth_error"):
        st.error(f"**Authentication Error:** {view['auth_error']}")

    if submitted:
        try:
            token = validate_token(token)
        except ValidationError as e:
            st.error(str(e))
            return None
        view.pop("auth_error", None)
        view["pending_token"] = token
        view["in_flight"] = True
        st.rerun()

    if not in_flight:
        return None

    token = view.pop("pending_token", "")
    client = get_github_client(token, config)
    try:
        with st.spinner("Authenticating..."):
            client.authenticate()
    except UpstreamCallError as e:
        view["auth_error"] = str(e)
    finally:
        client.close()
        view["in_flight"] = False

    if "auth_error" in view:
        st.rerun()
    return authenticated(ctx, token)
