"""
Streamlit UI for indent-guesser.

Run from repo root:
  streamlit run app.py
"""

from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd
import streamlit as st

# Ensure the package is importable whether or not it has been installed.
ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))

from indent_guesser.config import GuessDefaults, IndentConfigError, load_defaults
from indent_guesser.core import IndentationGuesser
from indent_guesser.files import analyze_paths
from indent_guesser.sources import StringLineSource


def parse_inputs(raw: str) -> list[str]:
    parts = []
    for line in raw.splitlines():
        for piece in line.split(","):
            cleaned = piece.strip()
            if cleaned:
                parts.append(cleaned)
    return parts


def to_rows(results):
    for res in results:
        report = res.report
        yield {
            "path": str(res.path),
            "style": report.style,
            "tab_size": res.tab_size,
            "tabbed_lines": report.tabbed_lines,
            "spaced_lines": report.spaced_lines,
            "scanned_lines": report.scanned_lines,
        }


def sidebar_defaults() -> GuessDefaults:
    env_defaults = load_defaults()
    with st.sidebar:
        st.header("Fallback settings")
        tab_size = st.number_input("Tab size", min_value=1, value=env_defaults.tab_size, step=1)
        insert_spaces = st.toggle("Insert spaces", value=env_defaults.insert_spaces)
    return GuessDefaults(tab_size=int(tab_size), insert_spaces=insert_spaces)


def render_paths_tab(defaults: GuessDefaults) -> None:
    raw = st.text_area(
        "Paths (comma or newline separated)",
        value=".",
        placeholder="e.g. src/, README.md",
        height=120,
    )

    if st.button("Analyze", type="primary"):
        paths = parse_inputs(raw)
        if not paths:
            st.warning("Enter at least one file or directory path.")
            return

        with st.spinner("Scanning..."):
            results = analyze_paths(paths, defaults)

        if not results:
            st.info("No readable text files found in the provided paths.")
            return

        df = pd.DataFrame(to_rows(results))
        st.success(f"Analyzed {len(results)} file(s).")
        st.dataframe(df, use_container_width=True)


def render_text_tab(defaults: GuessDefaults) -> None:
    text = st.text_area("Paste a document", height=240)
    if not text.strip():
        return

    source = StringLineSource.from_text(text)
    report = IndentationGuesser(source, defaults.tab_size, defaults.insert_spaces).report()
    col_style, col_size = st.columns(2)
    col_style.metric("Indent with", report.style)
    col_size.metric("Tab size", report.guess.tab_size)

    histogram = pd.DataFrame(
        {"diff": range(len(report.spaces_diff_count)), "line pairs": report.spaces_diff_count}
    ).set_index("diff")
    st.bar_chart(histogram)


def main() -> None:
    st.set_page_config(page_title="Indent Guesser", layout="wide")
    st.title("Indent Guesser")
    st.write("Guess whether files indent with tabs or spaces, and which tab size they use.")

    try:
        defaults = sidebar_defaults()
    except IndentConfigError as exc:
        st.error(str(exc))
        return

    paths_tab, text_tab = st.tabs(["Files", "Paste text"])
    with paths_tab:
        render_paths_tab(defaults)
    with text_tab:
        render_text_tab(defaults)


if __name__ == "__main__":
    main()
