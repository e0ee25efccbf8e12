"""Push stage: run the commit sequence and report the result."""

from __future__ import annotations

import streamlit as st

from wagit.config import Config
from wagit.ui.components import get_github_client
from wagit.ui.presentation import Presentation
from wagit.wizard.flow import PushBundle, WizardContext, push_completed
from wagit.wizard.push import PUSH_STEPS, CommitPusher, PushOutcome, PushState


def render(
    ctx: WizardContext,
    bundle: PushBundle,
    config: Config,
    presentation: Presentation,
    view: dict,
) -> WizardContext | None:
    """Render the push stage. Returns the next context after "Work on Another File"."""
    outcome: PushOutcome | None = view.get("outcome")
    in_flight = view.get("in_flight", False)

    if outcome is not None and outcome.succeeded:
        st.success(presentation.label("✅", "Successfully Pushed to GitHub!"))
        st.caption(f"Your changes have been committed to {bundle.repository.full_name}")
        col1, col2 = st.columns(2)
        with col1:
            if outcome.commit_url:
                st.link_button("View Commit on GitHub", outcome.commit_url, type="primary")
        with col2:
            if st.button("Work on Another File", key="push_another"):
                return push_completed(ctx)
        return None

    st.subheader("Push Changes to GitHub")
    st.caption(f"Repository: {bundle.repository.full_name} | File: {bundle.file_path}")

    with st.container(border=True):
        st.markdown("**Commit Message:**")
        st.code(bundle.commit_message, language="text")
        st.markdown("**File Path:**")
        st.code(bundle.file_path, language="text")

    steps_placeholder = st.empty()
    _render_steps(steps_placeholder, presentation, outcome)

    if outcome is not None:
        st.error(f"**Push Failed:** {outcome.error}")
        label = "Retry"
    else:
        label = presentation.label("⬆️", "Push to GitHub")

    if st.button(label, key="push_run", type="primary", disabled=in_flight):
        view.pop("outcome", None)
        view["in_flight"] = True
        st.rerun()

    if in_flight:
        # push_run stays disabled until this run ends.
        try:
            view["outcome"] = _run_push(bundle, config, presentation, steps_placeholder)
        finally:
            view["in_flight"] = False
        st.rerun()

    return None


def _run_push(bundle: PushBundle, config: Config, presentation: Presentation, placeholder) -> PushOutcome:
    client = get_github_client(bundle.token, config)
    pusher = CommitPusher(client)

    def show(state: PushState) -> None:
        _render_steps(placeholder, presentation, PushOutcome(state=state), running=True)

    try:
        with st.spinner("Pushing changes..."):
            return pusher.run(bundle, on_state=show)
    finally:
        client.close()


def _render_steps(placeholder, presentation: Presentation, outcome: PushOutcome | None, running: bool = False) -> None:
    """Draw the three push steps with the current one highlighted."""
    current = outcome.state if outcome is not None else None
    if outcome is not None and outcome.state is PushState.FAILED:
        current = outcome.failed_at

    order = [state for state, _, _ in PUSH_STEPS]
    current_index = order.index(current) if current in order else -1

    lines = []
    for i, (state, title, description) in enumerate(PUSH_STEPS):
        if current is PushState.DONE or i < current_index:
            marker = "✅"
        elif i == current_index:
            marker = "⏳" if running else ("❌" if outcome and outcome.state is PushState.FAILED else "▶️")
        else:
            marker = "⬜"
        line = f"{marker} **{i + 1}. {title}**"
        if presentation.show_step_descriptions:
            line += f" \u2014 {description}"
        lines.append(line)

    with placeholder.container():
        st.markdown("\n\n".join(lines))
