import streamlit as st
import streamlit.components.v1 as components

from infrastructure.api.backend_client import BackendRejectedError, BackendTransportError
from use_cases.password_recovery import TRANSPORT_ERROR_MESSAGE

GENERIC_RETRY_MESSAGE = "Something went wrong. Please try again."
TRANSPORT_RETRY_MESSAGE = TRANSPORT_ERROR_MESSAGE


def setup_style():
    st.markdown("""
    <style>
        .block-container { max-width: 720px; padding-top: 3rem; }
        div[data-testid="stHorizontalBlock"] input[aria-label^="Digit"] {
            text-align: center;
            font-size: 1.4rem;
            font-weight: 600;
        }
    </style>
    """, unsafe_allow_html=True)


def error_message(error: Exception) -> str:
    """Text shown to the visitor for a failed backend call."""
    if isinstance(error, BackendTransportError):
        return TRANSPORT_RETRY_MESSAGE
    if isinstance(error, BackendRejectedError):
        return str(error) or GENERIC_RETRY_MESSAGE
    return GENERIC_RETRY_MESSAGE


def render_flash(flash):
    if not flash:
        return
    level, message = flash
    {"success": st.success, "warning": st.warning, "error": st.error}.get(level, st.info)(message)


def render_checking_placeholder(slot):
    # Neither protected content nor a redirect while the session is being checked.
    slot.info("⏳ Checking your session…")


def focus_input(label: str):
    """Move browser focus to the text input with the given aria-label."""
    components.html(
        f"""
        <script>
          const input = window.parent.document.querySelector('input[aria-label="{label}"]');
          if (input) {{ input.focus(); input.select(); }}
        </script>
        """,
        height=0,
    )


def enable_backspace_chaining(labels):
    """Backspace on an empty OTP cell jumps to the previous cell."""
    labels_js = ", ".join(f'"{label}"' for label in labels)
    components.html(
        f"""
        <script>
          const doc = window.parent.document;
          const labels = [{labels_js}];
          labels.forEach((label, index) => {{
            const input = doc.querySelector('input[aria-label="' + label + '"]');
            if (!input || input.dataset.otpChained) return;
            input.dataset.otpChained = "1";
            input.addEventListener("keydown", (event) => {{
              if (event.key !== "Backspace" || input.value || index === 0) return;
              const prev = doc.querySelector('input[aria-label="' + labels[index - 1] + '"]');
              if (prev) prev.focus();
            }});
          }});
        </script>
        """,
        height=0,
    )
