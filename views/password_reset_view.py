import streamlit as st

import ui
from use_cases.password_recovery import PasswordRecoveryFlow, Stage, can_go_back
from use_cases.session_models import LOGIN_PATH
from utils import session_manager

CELL_LABELS = [f"Digit {i + 1}" for i in range(6)]

STRENGTH_PROGRESS = {"very weak": 0.05, "weak": 0.33, "medium": 0.66, "strong": 1.0}


def _render_error(flow: PasswordRecoveryFlow):
    if flow.error:
        st.error(flow.error)


def _render_forgot(flow: PasswordRecoveryFlow):
    st.subheader("Forgot Password?")
    st.caption("Enter your email address and we'll send you a verification code to reset your password.")

    with st.form("forgot_form"):
        email = st.text_input("Email Address", value=flow.email, placeholder="Enter your email")
        submitted = st.form_submit_button("Send Reset Code", disabled=flow.pending)

    if submitted:
        flow.set_email(email)
        if flow.submit_email():
            st.rerun()
    _render_error(flow)


def _on_cell_change(flow: PasswordRecoveryFlow, index: int):
    flow.otp.set_digit(index, st.session_state[f"otp_cell_{index}"])


def _on_paste(flow: PasswordRecoveryFlow):
    flow.otp.paste(st.session_state.otp_paste)
    st.session_state.otp_paste = ""


def _render_code_cells(flow: PasswordRecoveryFlow):
    for i, digit in enumerate(flow.code):
        st.session_state[f"otp_cell_{i}"] = digit

    columns = st.columns(len(flow.code))
    for i, column in enumerate(columns):
        with column:
            st.text_input(
                CELL_LABELS[i],
                key=f"otp_cell_{i}",
                on_change=_on_cell_change,
                args=(flow, i),
                label_visibility="collapsed",
            )

    st.text_input(
        "Paste code",
        key="otp_paste",
        on_change=_on_paste,
        args=(flow,),
        placeholder="…or paste the code from the email",
    )

    ui.enable_backspace_chaining(CELL_LABELS)
    if st.session_state.get("otp_focus_applied") != (flow.otp.focus, flow.otp.joined()):
        ui.focus_input(CELL_LABELS[flow.otp.focus])
        st.session_state.otp_focus_applied = (flow.otp.focus, flow.otp.joined())


@st.fragment(run_every=1)
def _render_resend(flow: PasswordRecoveryFlow):
    remaining = flow.cooldown.sync()
    if remaining > 0:
        st.caption(f"Didn't receive the code? You can request a new one in {remaining}s.")
    else:
        st.caption("Didn't receive the code?")

    if st.button("Resend Code", disabled=not flow.can_resend(), key="resend_code"):
        if flow.resend_code():
            st.success(flow.message)
        else:
            _render_error(flow)


def _render_verify(flow: PasswordRecoveryFlow):
    st.subheader("Enter Verification Code")
    st.caption(flow.message or f"Enter the 6-digit code we sent to {flow.email or 'your email'}.")

    if not flow.email.strip() or "verify_email" in st.session_state:
        # Opened directly from a link, so the flow has not seen the email step.
        flow.set_email(st.text_input("Email Address", key="verify_email", placeholder="Enter your email"))

    _render_code_cells(flow)

    if st.button("Verify Code", type="primary", disabled=flow.pending, use_container_width=True):
        if flow.submit_code():
            st.rerun()
    _render_error(flow)

    _render_resend(flow)


def _on_new_password(flow: PasswordRecoveryFlow):
    flow.set_new_password(st.session_state.new_password)


def _on_confirm_password(flow: PasswordRecoveryFlow):
    flow.set_confirm_password(st.session_state.confirm_password)


def _render_reset(flow: PasswordRecoveryFlow):
    st.subheader("Reset Password")
    st.caption("Create a new password for your account")

    st.text_input("New Password", type="password", key="new_password", on_change=_on_new_password, args=(flow,))
    st.text_input(
        "Confirm Password", type="password", key="confirm_password", on_change=_on_confirm_password, args=(flow,)
    )

    checks = flow.password_checks
    for passed, label in (
        (checks.length, "At least 8 characters long"),
        (checks.has_digit, "Contains at least one number"),
        (checks.mixed_case, "Contains both uppercase and lowercase letters"),
    ):
        st.markdown(f"{'✅' if passed else '⬜'} {label}")

    st.progress(STRENGTH_PROGRESS[flow.strength], text=f"Strength: {flow.strength}")

    if flow.confirm_password and flow.new_password != flow.confirm_password:
        st.caption("Passwords do not match.")

    if st.button(
        "Reset Password",
        type="primary",
        disabled=flow.pending or not flow.can_submit_password(),
        use_container_width=True,
    ):
        if flow.submit_new_password():
            st.rerun()
    _render_error(flow)


def _render_success(flow: PasswordRecoveryFlow):
    st.subheader("✅ Password Reset Successfully")
    st.write(flow.message)
    if st.button("Sign In", type="primary", use_container_width=True):
        session_manager.unmount_recovery_flow()
        session_manager.navigate(LOGIN_PATH)


STAGE_RENDERERS = {
    Stage.FORGOT: _render_forgot,
    Stage.VERIFY: _render_verify,
    Stage.RESET: _render_reset,
    Stage.SUCCESS: _render_success,
}


def render_password_reset(path: str):
    flow = session_manager.mount_recovery_flow(path)

    if can_go_back(flow.stage) and st.button("← Back"):
        flow.back()
        st.rerun()

    STAGE_RENDERERS[flow.stage](flow)
