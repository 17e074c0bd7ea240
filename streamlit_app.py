# streamlit_app.py
import logging

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from json_table_editor.client import ApiClient
from json_table_editor.config import LOG_LEVEL
from json_table_editor.errors import EditorError
from json_table_editor.grid import diff_frames
from json_table_editor.projector import KEY_COLUMN, Projection
from json_table_editor.session import EditorSession

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("streamlit_app")

st.set_page_config(page_title="JSON Table Editor", layout="wide")
st.title("JSON Table Editor")
st.write("Edit the server JSON file as raw text or as a table, then save it back.")

# -------------------------
# Session state
# -------------------------
if "editor" not in st.session_state:
    st.session_state.editor = EditorSession()
    st.session_state.client = ApiClient()
    st.session_state.message = ("", "info")
    st.session_state.grid_version = 0
    st.session_state.needs_initial_load = True

editor: EditorSession = st.session_state.editor
client: ApiClient = st.session_state.client


def set_message(text: str, kind: str = "info") -> None:
    st.session_state.message = (text, kind)


def show_message() -> None:
    text, kind = st.session_state.message
    if not text:
        return
    if kind == "error":
        st.error(text)
    elif kind == "success":
        st.success(text)
    else:
        st.info(text)


def refresh_views() -> None:
    # new widget keys so the text area and grid pick up the session's state
    st.session_state.grid_version += 1


def run_action(action, success: str) -> None:
    """Run one user action, turning editor errors into a status message."""
    try:
        action()
    except EditorError as e:
        logger.warning("%s failed: %s", action.__name__, e)
        set_message(str(e), "error")
        return
    refresh_views()
    set_message(success, "success")


# -------------------------
# Helpers
# -------------------------
def plotly_table_from_df(df: pd.DataFrame) -> go.Figure:
    header_vals = list(df.columns)
    cells = [df[col].astype(str).replace({"nan": "", "None": ""}) for col in df.columns]
    fig = go.Figure(data=[go.Table(
        header=dict(values=header_vals, fill_color="#0f62fe", font=dict(color="white", size=12)),
        cells=dict(values=cells, fill_color=[["#f8fbff" if i % 2 == 0 else "white" for i in range(df.shape[0])] for _ in df.columns],
                   align="left"))
    ])
    fig.update_layout(margin=dict(l=5, r=5, t=5, b=5), height=400)
    return fig


def column_config(projection: Projection) -> dict:
    # nested values and entry names are edited through row-edit mode only
    locked = set(projection.nested_columns())
    if KEY_COLUMN in projection.columns:
        locked.add(KEY_COLUMN)
    return {c: st.column_config.Column(disabled=True) for c in locked}


# -------------------------
# Initial load (like opening the page)
# -------------------------
if st.session_state.needs_initial_load:
    st.session_state.needs_initial_load = False
    set_message("Loading JSON from the server...")
    run_action(lambda: editor.load_from_server(client), "JSON loaded from the server")

# -------------------------
# Sidebar: server & files
# -------------------------
with st.sidebar:
    st.header("Document")
    if st.button("Load from server"):
        run_action(lambda: editor.load_from_server(client), "JSON loaded from the server")
    if st.button("Save to server"):
        run_action(lambda: editor.save_to_server(client), "JSON saved successfully")

    uploaded = st.file_uploader("Load a local JSON file", type=None)
    if uploaded is not None and editor.claim_upload(uploaded.file_id):
        run_action(
            lambda: editor.import_file(uploaded.name, uploaded.getvalue()),
            f'JSON loaded from "{uploaded.name}". You can edit it and save it to the server.',
        )

    if editor.document is not None:
        st.download_button("Download JSON", data=editor.export_bytes(), file_name="data.json", mime="application/json")

show_message()

# -------------------------
# Raw text
# -------------------------
raw_tab, table_tab = st.tabs(["Raw JSON", "Table"])

with raw_tab:
    label = "Row JSON (row edit mode)" if editor.in_row_edit else "Document JSON"
    text = st.text_area(label, value=editor.text, height=500, key=f"text-{st.session_state.grid_version}")
    if text != editor.text:
        editor.text = text

    if editor.in_row_edit:
        col_apply, col_cancel = st.columns(2)
        if col_apply.button("Apply row"):
            run_action(editor.apply_row_edit, "Row updated")
            st.rerun()
        if col_cancel.button("Cancel row edit"):
            run_action(editor.cancel_row_edit, "Row edit cancelled")
            st.rerun()
    elif st.button("Apply text to table"):
        run_action(lambda: editor.load_text(editor.text), "Table refreshed from the editor text")
        st.rerun()

# -------------------------
# Table
# -------------------------
with table_tab:
    sections = editor.sections()
    if not sections:
        st.info("No data available: the document has no array of objects or object of objects.")
    else:
        ids = [s.id for s in sections]
        current = editor.current_section()
        chosen = st.selectbox(
            "Section",
            options=ids,
            index=ids.index(current.id),
            format_func=lambda i: next(s.label for s in sections if s.id == i),
            disabled=editor.in_row_edit,
        )
        if chosen != current.id:
            editor.select_section(chosen)
            refresh_views()
            st.rerun()

        projection = editor.projection()
        df = projection.to_frame()

        if editor.in_row_edit:
            st.warning("A row is being edited in the Raw JSON tab. Apply or cancel it first.")
            st.dataframe(df, use_container_width=True)
        else:
            edited = st.data_editor(
                df,
                num_rows="fixed",
                use_container_width=True,
                column_config=column_config(projection),
                key=f"grid-{editor.selected_section_id}-{st.session_state.grid_version}",
            )
            edits = diff_frames(df, edited)
            if edits:
                run_action(lambda: editor.apply_grid_edits(edits), f"{len(edits)} cell(s) updated")
                st.rerun()

            row_choice = st.number_input("Row to edit as JSON", min_value=0, max_value=max(len(projection) - 1, 0), step=1)
            if st.button("Edit row", disabled=projection.is_empty):
                run_action(lambda: editor.begin_row_edit(int(row_choice)), "Row edit mode: edit the row in the Raw JSON tab")
                st.rerun()

        with st.expander("Preview"):
            st.plotly_chart(plotly_table_from_df(df), use_container_width=True)
