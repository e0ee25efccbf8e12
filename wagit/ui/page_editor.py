"""Editor stage: browse top-level source files and edit one of them.

The "Current Code" tab shows the file as fetched; the "Edit Code" tab holds
an independent buffer seeded with the same text. No diff is computed.
"""

from __future__ import annotations

import streamlit as st

from wagit.config import Config
from wagit.errors import UpstreamCallError, ValidationError
from wagit.github.models import FileRef
from wagit.ui.components import (
    code_language,
    file_button_label,
    get_github_client,
    render_error_with_retry,
)
from wagit.ui.presentation import Presentation
from wagit.wizard.flow import WizardContext, edit_submitted


def render(ctx: WizardContext, config: Config, presentation: Presentation, view: dict) -> WizardContext | None:
    """Render the file browser and editor. Returns the next context on submit."""
    repository = ctx.repository
    if repository is None:
        return None

    if "files" not in view and "error" not in view:
        client = get_github_client(ctx.token, config)
        try:
            with st.spinner("Loading files..."):
                view["files"] = client.list_source_files(repository.full_name)
        except UpstreamCallError as e:
            view["error"] = str(e)
        finally:
            client.close()

    if "error" in view:
        if render_error_with_retry("Error", view["error"], key="files_retry"):
            view.clear()
            st.rerun()
        return None

    st.subheader("Code Diff Viewer")
    st.caption(f"Repository: [{repository.full_name}]({repository.html_url})")

    files_col, editor_col = st.columns([1, 2])
    with files_col:
        _render_file_list(ctx, config, presentation, view)
    with editor_col:
        return _render_editor(ctx, presentation, view)


def _render_file_list(ctx: WizardContext, config: Config, presentation: Presentation, view: dict) -> None:
    files: list[FileRef] = view["files"]
    st.markdown(f"**Files ({len(files)})**")
    if not files:
        st.info("No source files in the top-level directory.")
        return

    selected: FileRef | None = view.get("selected")
    in_flight = view.get("in_flight", False)
    for file in files:
        is_selected = selected is not None and selected.path == file.path
        clicked = st.button(
            file_button_label(file, presentation),
            key=f"file_{file.path}",
            type="primary" if is_selected else "secondary",
            help=file.path,
            use_container_width=True,
            disabled=in_flight,
        )
        if clicked:
            view["pending_file"] = file
            view["in_flight"] = True
            st.rerun()

    if in_flight:
        _load_file(ctx, config, view, view.pop("pending_file", None))

    if view.get("content_error"):
        st.error(view["content_error"])


def _load_file(ctx: WizardContext, config: Config, view: dict, file: FileRef | None) -> None:
    if file is None:
        view["in_flight"] = False
        return
    client = get_github_client(ctx.token, config)
    try:
        with st.spinner(f"Loading {file.name}..."):
            view["selected"] = client.fetch_content(file)
        view.pop("content_error", None)
    except UpstreamCallError as e:
        view["content_error"] = str(e)
    finally:
        client.close()
        view["in_flight"] = False
    st.rerun()


def _render_editor(ctx: WizardContext, presentation: Presentation, view: dict) -> WizardContext | None:
    selected: FileRef | None = view.get("selected")
    if selected is None:
        st.info(presentation.label("\U0001f4c4", "Select a file from the list to view and edit its content"))
        return None

    st.markdown(f"**Editing: {selected.name}**")
    current_tab, edit_tab = st.tabs(["Current Code", "Edit Code"])

    with current_tab:
        st.code(selected.content or "", language=code_language(selected.name))

    with edit_tab:
        with st.form(f"edit_form_{selected.path}"):
            new_code = st.text_area(
                "Modify the code below:",
                value=selected.content or "",
                height=400,
                placeholder="Enter your code here...",
            )
            commit_message = st.text_input("Commit Message:", placeholder="Enter commit message...")
            submitted = st.form_submit_button(
                "Push Changes to GitHub",
                key="edit_submit",
                type="primary",
                use_container_width=True,
                disabled=view.get("in_flight", False),
            )

        if submitted:
            try:
                return edit_submitted(ctx, selected.path, new_code, commit_message)
            except ValidationError as e:
                st.error(str(e))

    return None
