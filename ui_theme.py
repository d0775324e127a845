import streamlit as st

from explorer_state import IS_LOADING


def inject_global_css() -> None:
    """Base CSS shared by every page (dark mode, cards, detail facts)."""
    st.markdown(
        """
        <style>
        /* ============================
           Global layout and colors
        ============================ */
        .stApp {
            background-color: #111111;
            color: #f5f5f5;
        }

        div.block-container {
            max-width: 95vw;
            padding-left: 2rem;
            padding-right: 2rem;
            padding-top: 1.3rem;
            padding-bottom: 2.5rem;
        }

        section[data-testid="stSidebar"] {
            background-color: #181818 !important;
        }

        h1, h2, h3 {
            font-weight: 600;
        }

        div[data-testid="stMarkdownContainer"] a {
            color: #a51c30 !important;
            text-decoration: none;
        }
        div[data-testid="stMarkdownContainer"] a:hover {
            text-decoration: underline;
        }

        /* ============================
           Result list (preview)
        ============================ */
        .object-preview {
            background-color: #181818;
            border-radius: 12px;
            padding: 0.6rem;
            border: 1px solid #262626;
            margin-bottom: 0.75rem;
        }

        /* ============================
           Detail view (feature)
        ============================ */
        .facts-title {
            font-weight: 600;
            color: #c7c7c7;
        }
        .facts-content {
            color: #f5f5f5;
        }
        .feature-photos-title {
            font-weight: 600;
            margin-top: 1.25rem;
            margin-bottom: 0.5rem;
        }

        /* ============================
           Page intro block
        ============================ */
        .page-intro-wrapper {
            margin-top: 0.5rem;
            margin-bottom: 1.1rem;
        }

        .page-intro-title {
            font-weight: 600;
            font-size: 1.0rem;
            margin-bottom: 0.4rem;
        }

        .page-intro-list {
            margin-top: 0;
            margin-bottom: 0;
            padding-left: 1.2rem;
        }

        /* ============================
           Footer
        ============================ */
        .explorer-footer {
            margin-top: 2.5rem;
            padding-top: 0.75rem;
            border-top: 1px solid #262626;
            font-size: 0.8rem;
            color: #aaaaaa;
            text-align: center;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def show_page_intro(title: str, bullets: list[str]) -> None:
    """Intro block at the top of a page."""
    items_html = "".join(f"<li>{b}</li>" for b in bullets)
    st.markdown(
        f"""
        <div class="page-intro-wrapper">
            <p class="page-intro-title">{title}</p>
            <ul class="page-intro-list">
                {items_html}
            </ul>
        </div>
        """,
        unsafe_allow_html=True,
    )


LOADING_MESSAGE = "Loading results..."


def loading_banner(placeholder):
    """
    State listener that mirrors the loading flag into `placeholder`:
    the banner appears when the flag turns on and is cleared when it turns off.
    """

    def on_change(slot: str, value) -> None:
        if slot != IS_LOADING:
            return
        if value:
            placeholder.info(LOADING_MESSAGE)
        else:
            placeholder.empty()

    return on_change


def show_global_footer() -> None:
    """Footer shared by every page."""
    st.markdown(
        """
        <div class="explorer-footer">
            Harvard Art Explorer: prototype created for study purposes.<br>
            Data &amp; images provided by the Harvard Art Museums API.
        </div>
        """,
        unsafe_allow_html=True,
    )
