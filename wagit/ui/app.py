"""Streamlit UI for wagit.

Two views:
1. Edit files: the four-stage GitHub edit wizard
2. Webhook activity: recent WhatsApp webhook traffic

Run with ``wagit ui`` or ``streamlit run wagit/ui/app.py``.
"""

from __future__ import annotations

import streamlit as st

from wagit.config import Config
from wagit.ui import page_activity, page_auth, page_editor, page_push, page_repos
from wagit.ui.presentation import Presentation
from wagit.wizard.flow import STAGE_TITLES, Stage, WizardContext, back, progress_state

CONTEXT_KEY = "wizard_context"
VIEW_KEY = "wizard_view"
NOTICE_KEY = "wizard_notice"


def _context() -> WizardContext:
    if CONTEXT_KEY not in st.session_state:
        st.session_state[CONTEXT_KEY] = WizardContext()
    return st.session_state[CONTEXT_KEY]


def _view() -> dict:
    """Stage-local view state (fetched lists, selections); dropped on every transition."""
    if VIEW_KEY not in st.session_state:
        st.session_state[VIEW_KEY] = {}
    return st.session_state[VIEW_KEY]


def _advance(ctx: WizardContext, notice: str | None = None) -> None:
    st.session_state[CONTEXT_KEY] = ctx
    st.session_state[VIEW_KEY] = {}
    if notice:
        st.session_state[NOTICE_KEY] = notice
    st.rerun()


def main() -> None:
    st.set_page_config(page_title="wagit", page_icon="\U0001f419", layout="wide")
    config = Config.load()
    presentation = Presentation.for_flag(config.simple_ui)

    page = st.sidebar.radio("Navigate", ["Edit files", "Webhook activity"])
    if page == "Webhook activity":
        page_activity.render(config)
        return

    render_wizard(config, presentation)


def render_wizard(config: Config, presentation: Presentation) -> None:
    ctx = _context()
    view = _view()
    _render_header(ctx, presentation, view)

    notice = st.session_state.pop(NOTICE_KEY, None)
    if notice:
        st.warning(notice)

    next_ctx: WizardContext | None = None

    if ctx.stage is Stage.AUTH:
        next_ctx = page_auth.render(ctx, config, presentation, view)
    elif ctx.stage is Stage.REPOS:
        next_ctx = page_repos.render(ctx, config, presentation, view)
    elif ctx.stage is Stage.CODE:
        next_ctx = page_editor.render(ctx, config, presentation, view)
    elif ctx.stage is Stage.PUSH:
        bundle = ctx.push_bundle()
        if bundle is None:
            _advance(back(ctx), notice="Nothing to push yet. Pick a file and describe your change first.")
        else:
            next_ctx = page_push.render(ctx, bundle, config, presentation, view)

    if next_ctx is not None:
        _advance(next_ctx)


def _render_header(ctx: WizardContext, presentation: Presentation, view: dict) -> None:
    title, description = STAGE_TITLES[ctx.stage]
    header_col, back_col = st.columns([5, 1])
    with header_col:
        st.title(presentation.label("\U0001f419", title))
        st.caption(description)
    with back_col:
        in_flight = view.get("in_flight", False)
        if ctx.can_go_back and st.button("← Back", key="wizard_back", disabled=in_flight):
            _advance(back(ctx))

    if ctx.stage is not Stage.AUTH:
        steps = progress_state(ctx)
        cols = st.columns(len(steps))
        for col, (number, label, status) in zip(cols, steps):
            text = f"{number}. {label}"
            if status == "active":
                col.markdown(f":blue[**{text}**]")
            elif status == "done":
                col.markdown(f":green[{presentation.label('✅', text)}]")
            else:
                col.markdown(f":gray[{text}]")
        st.divider()


if __name__ == "__main__":
    main()
