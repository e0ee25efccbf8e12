"""Repository stage: pick one of the caller's repositories."""

from __future__ import annotations

import streamlit as st

from wagit.config import Config
from wagit.errors import UpstreamCallError
from wagit.ui.components import get_github_client, render_error_with_retry, render_repository_card
from wagit.ui.presentation import Presentation
from wagit.wizard.flow import WizardContext, repository_selected


def render(ctx: WizardContext, config: Config, presentation: Presentation, view: dict) -> WizardContext | None:
    """Render the repository list. Returns the next context once one is selected."""
    if "repositories" not in view and "error" not in view:
        client = get_github_client(ctx.token, config)
        try:
            with st.spinner("Loading repositories..."):
                view["repositories"] = client.list_repositories()
        except UpstreamCallError as e:
            view["error"] = str(e)
        finally:
            client.close()

    if "error" in view:
        if render_error_with_retry("Error", view["error"], key="repos_retry"):
            view.clear()
            st.rerun()
        return None

    st.subheader("Select a Repository")
    st.caption("Choose a repository to work with.")

    repositories = view["repositories"]
    if not repositories:
        st.info("No repositories found for this token.")
        return None

    columns = st.columns(presentation.repo_columns)
    for i, repo in enumerate(repositories):
        with columns[i % presentation.repo_columns]:
            if render_repository_card(repo, i + 1, presentation):
                return repository_selected(ctx, repo)

    return None
