# -*- coding: utf-8 -*-
from __future__ import annotations

import streamlit as st
from ui.strings import S
from ui.widgets import _normalize_math_markdown, _render_app_title, _render_fix_preview, _render_status_badge

from qbank.auth import require_admin
from qbank.config import Settings, load_settings
from qbank.fix_service import fix_question, preview_fix
from qbank.models import Question, QuestionStatus
from qbank.question_store import QuestionStore

_STATUS_OPTIONS = ["all", "PENDING", "VERIFIED", "DISCARDED"]
_LEVEL_OPTIONS = [None, 1, 2, 3, 4, 5]


def _current_user() -> str:
    uid = st.sidebar.text_input(S["user"], value=st.session_state.get("user_id", ""), key="user_input")
    st.session_state["user_id"] = (uid or "").strip()
    return st.session_state["user_id"]


def _render_question(store: QuestionStore, q: Question, user_id: str, focused: bool = False) -> None:
    with st.container(border=True):
        head = st.columns([6, 1, 1])
        with head[0]:
            level = f" | level {q.difficulty_level}" if q.difficulty_level is not None else ""
            st.markdown(f"**{q.question_id}**{level}")
        with head[1]:
            _render_status_badge(q.status)
        if not focused and head[2].button(S["open"], key=f"open_{q.question_id}"):
            st.session_state["focus_id"] = q.question_id
            st.rerun()

        st.caption(S["question"])
        st.markdown(_normalize_math_markdown(q.question_text))
        if q.solution_text.strip():
            with st.expander(S["solution"], expanded=False):
                st.markdown(_normalize_math_markdown(q.solution_text))

        dups = store.find_duplicates(q.question_text, exclude_id=q.question_id)
        if dups:
            st.caption(f"{S['duplicates']}: {', '.join(dups)}")

        btns = st.columns(4)
        if q.status != QuestionStatus.VERIFIED and btns[0].button(S["verify"], key=f"verify_{q.question_id}"):
            store.set_status(q.question_id, QuestionStatus.VERIFIED, user_id)
            st.rerun()
        if q.status != QuestionStatus.DISCARDED and btns[1].button(S["discard"], key=f"discard_{q.question_id}"):
            store.set_status(q.question_id, QuestionStatus.DISCARDED, user_id)
            st.rerun()
        if q.status != QuestionStatus.PENDING and btns[2].button(S["restore"], key=f"restore_{q.question_id}"):
            store.set_status(q.question_id, QuestionStatus.PENDING, user_id)
            st.rerun()

        fix_key = f"fix_open_{q.question_id}"
        if btns[3].button(S["quick_fix"], key=f"fix_{q.question_id}"):
            st.session_state[fix_key] = not st.session_state.get(fix_key, False)
        if st.session_state.get(fix_key):
            previews = fix_question(store, q.question_id)
            for p in previews:
                st.markdown(f"*{p.field}*")
                _render_fix_preview(p)
            if any(p.changed for p in previews) and st.button(S["apply_fix"], key=f"apply_{q.question_id}"):
                fix_question(store, q.question_id, apply=True)
                st.session_state[fix_key] = False
                st.toast(S["saved"])
                st.rerun()


def _page_review(settings: Settings, store: QuestionStore, user_id: str) -> None:
    with st.sidebar:
        st.subheader(S["filters"])
        subject = st.text_input(S["subject"], key="f_subject")
        chapter = st.text_input(S["chapter"], key="f_chapter")
        topic = st.text_input(S["topic"], key="f_topic")
        status = st.selectbox(S["status"], _STATUS_OPTIONS, key="f_status")
        level = st.selectbox(
            S["level"],
            _LEVEL_OPTIONS,
            format_func=lambda v: S["level_any"] if v is None else str(v),
            key="f_level",
        )

    if not (subject.strip() and chapter.strip() and topic.strip()):
        st.info(S["need_topic"])
        return

    filt = (subject, chapter, topic, status, level)
    if st.session_state.get("_filter_key") != filt:
        st.session_state["_filter_key"] = filt
        st.session_state["page_no"] = 1
        st.session_state.pop("focus_id", None)

    focus_id = st.session_state.get("focus_id")
    if focus_id:
        _page_focus(store, focus_id, user_id)
        return

    counts = store.count_by_status(subject, chapter, topic)
    st.caption(S["counts"].format(**counts))

    page_no = int(st.session_state.get("page_no", 1))
    result = store.list_questions(
        subject, chapter, topic, status=status, level=level, page=page_no, page_size=settings.page_size
    )
    if not result.questions:
        st.info(S["empty"])
        return

    for q in result.questions:
        _render_question(store, q, user_id)

    nav = st.columns([1, 2, 1])
    if nav[0].button(S["prev"], disabled=page_no <= 1):
        st.session_state["page_no"] = page_no - 1
        st.rerun()
    nav[1].caption(f"{S['page']} {result.page} / {max(1, result.total_pages)} ({result.total_count})")
    if nav[2].button(S["next"], disabled=page_no >= result.total_pages):
        st.session_state["page_no"] = page_no + 1
        st.rerun()


def _page_focus(store: QuestionStore, question_id: str, user_id: str) -> None:
    """One question at a time, stepping through its topic in list order."""
    q = store.get(question_id)
    prev_id, next_id = store.neighbors(question_id)
    nav = st.columns([1, 2, 1])
    if nav[0].button(S["prev_question"], disabled=prev_id is None, key="focus_prev"):
        st.session_state["focus_id"] = prev_id
        st.rerun()
    if nav[1].button(S["back_to_list"], key="focus_back"):
        st.session_state.pop("focus_id", None)
        st.rerun()
    if nav[2].button(S["next_question"], disabled=next_id is None, key="focus_next"):
        st.session_state["focus_id"] = next_id
        st.rerun()
    _render_question(store, q, user_id, focused=True)


def _page_playground() -> None:
    st.caption(S["playground_hint"])
    text = st.text_area("LaTeX", key="playground_text", height=200, label_visibility="collapsed")
    if st.button(S["run_fix"]):
        if not (text or "").strip():
            st.warning(S["text_required"])
            return
        _render_fix_preview(preview_fix(text))


def main() -> None:
    st.set_page_config(page_title=S["title"], layout="wide")
    _render_app_title()

    settings = load_settings()
    store = QuestionStore(settings.db_path)

    user_id = _current_user()
    try:
        require_admin(user_id, settings)
    except PermissionError as e:
        st.error(f"{S['not_admin']} ({e})")
        return

    with st.sidebar:
        page = st.radio("page", [S["page_review"], S["page_playground"]], key="page_radio", label_visibility="collapsed")

    try:
        if page == S["page_review"]:
            _page_review(settings, store, user_id)
        else:
            _page_playground()
    except (KeyError, ValueError) as e:
        st.error(f"Error: {e}")


if __name__ == "__main__":
    main()
