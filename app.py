"""Streamlit Web App for ContractGuard."""

from datetime import datetime

import streamlit as st

from contractguard.config import get_api_key
from contractguard.errors import ContractGuardError
from contractguard.models import DOCX_MIME, PDF_MIME, TEXT_MIME, UploadedDocument
from contractguard.output import (
    export_filename,
    generate_analysis_report,
    generate_revised_contract,
    generate_summary,
    highlight_revisions,
)
from contractguard.pipeline import run_pipeline
from contractguard.plans import PLANS, format_price

# Browsers do not always report a MIME type; fall back on the extension
_EXTENSION_MIME = {"txt": TEXT_MIME, "docx": DOCX_MIME, "pdf": PDF_MIME}

st.set_page_config(
    page_title="ContractGuard",
    page_icon="",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .badge { padding: 4px 12px; border-radius: 12px; color: white; font-size: 0.85em; font-weight: 600; display: inline-block; }
    .high-badge { background: #e74c3c; }
    .medium-badge { background: #f39c12; }
    .low-badge { background: #27ae60; }
    .revision-highlight { background: #bbf7d0; font-weight: 500; }
</style>
""", unsafe_allow_html=True)


# ---------------------------------------------------------------------------
# SIDEBAR
# ---------------------------------------------------------------------------
page = st.sidebar.radio("Navigation", ["Upload & Analyze", "Analysis", "Compare", "Pricing"])
st.sidebar.markdown("---")
st.sidebar.markdown("**ContractGuard**")
st.sidebar.caption(f"LLM: {'Available' if get_api_key() else 'Not configured'}")

result = st.session_state.get("analysis_result")
file_name = st.session_state.get("file_name", "")
uploaded_at = st.session_state.get("uploaded_at", datetime.now())


# ---------------------------------------------------------------------------
# PAGE 1: UPLOAD & ANALYZE
# ---------------------------------------------------------------------------
if page == "Upload & Analyze":
    st.title("Upload & Analyze Contract")
    st.markdown("Upload a contract and get a plain-English risk review with suggested revisions.")

    if not get_api_key():
        st.warning("ANTHROPIC_API_KEY not set in .env. Analysis will fail until it is configured.")

    uploaded_file = st.file_uploader("Upload contract", type=["docx", "txt", "pdf"])

    if st.button("Analyze Contract", type="primary", use_container_width=True, disabled=uploaded_file is None):
        ext = uploaded_file.name.rsplit(".", 1)[-1].lower()
        document = UploadedDocument(
            content=uploaded_file.getvalue(),
            mime_type=uploaded_file.type or _EXTENSION_MIME.get(ext, ""),
            filename=uploaded_file.name,
            uploaded_at=datetime.now(),
        )
        st.session_state.pop("analysis_result", None)

        progress_bar = st.progress(0, text="Starting analysis...")

        def progress_callback(step, total, msg):
            progress_bar.progress(min(step / total, 1.0), text=msg)

        try:
            with st.spinner("Analyzing contract..."):
                analysis = run_pipeline(document, progress_callback=progress_callback)
        except ContractGuardError as e:
            progress_bar.empty()
            st.error(f"Analysis failed: {e}")
            st.info("Please try another file.")
        else:
            st.session_state["analysis_result"] = analysis
            st.session_state["file_name"] = document.filename
            st.session_state["uploaded_at"] = document.uploaded_at
            st.success("Analysis complete! Open **Analysis** in the sidebar to see the results.")


# ---------------------------------------------------------------------------
# PAGE 2: ANALYSIS
# ---------------------------------------------------------------------------
elif page == "Analysis":
    st.title("Contract Analysis")
    if result is None:
        st.info("No analysis yet. Go to **Upload & Analyze** to review a contract.")
        st.stop()

    summary = generate_summary(result)
    sev = summary["severity_breakdown"]
    c1, c2, c3, c4, c5 = st.columns(5)
    c1.metric("Overall Score", f"{result.overall_score}/100")
    c2.metric("Clauses", result.total_clauses)
    c3.metric("High Risk", sev.get("high", 0))
    c4.metric("Medium Risk", sev.get("medium", 0))
    c5.metric("Low Risk", sev.get("low", 0))

    d1, d2 = st.columns(2)
    d1.download_button(
        "Export Analysis Report",
        generate_analysis_report(result, file_name, uploaded_at),
        file_name=export_filename("Analysis", file_name),
        mime="text/plain",
        use_container_width=True,
    )
    d2.download_button(
        "Export Revised Contract",
        generate_revised_contract(result.original_text, result),
        file_name=export_filename("Revised", file_name),
        mime="text/plain",
        use_container_width=True,
    )

    st.markdown("---")
    if not result.risks:
        st.success("No risks identified.")

    risk_color = {"high": "red", "medium": "orange", "low": "green"}
    for r in result.risks:
        severity = (r.type or "").lower()
        color = risk_color.get(severity, "gray")
        with st.expander(f":{color}[{(r.type or 'unknown').upper()}] | {r.category} | {r.description[:80]}"):
            if severity in risk_color:
                st.markdown(
                    f'<span class="badge {severity}-badge">{severity.upper()} RISK</span>',
                    unsafe_allow_html=True,
                )
            st.markdown(f"**Why it matters:** {r.explanation}")
            st.markdown(f"**Suggestion:** {r.suggestion}")
            if r.location:
                st.caption(f"Location: {r.location}")
            if r.original_clause or r.suggested_clause:
                left, right = st.columns(2)
                with left:
                    st.markdown("**Original Clause**")
                    st.text_area("Original", r.original_clause or "", height=120, disabled=True,
                                 key=f"orig_{r.id}", label_visibility="collapsed")
                with right:
                    st.markdown("**Suggested Clause**")
                    st.text_area("Suggested", r.suggested_clause or "", height=120, disabled=True,
                                 key=f"sugg_{r.id}", label_visibility="collapsed")


# ---------------------------------------------------------------------------
# PAGE 3: COMPARE
# ---------------------------------------------------------------------------
elif page == "Compare":
    st.title("Original vs Suggested Revisions")
    if result is None or not result.revised_sections:
        st.info(
            "The AI analysis didn't generate specific section revisions for this contract."
            if result is not None else
            "No analysis yet. Go to **Upload & Analyze** to review a contract."
        )
        st.stop()

    left, right = st.columns(2)
    with left:
        st.markdown("### Original Contract")
        for s in result.revised_sections:
            st.markdown(f"**{s.section}**")
            st.text(s.original)
    with right:
        st.markdown("### Suggested Revisions")
        for s in result.revised_sections:
            st.markdown(f"**{s.section}**")
            st.markdown(highlight_revisions(s.revised), unsafe_allow_html=True)


# ---------------------------------------------------------------------------
# PAGE 4: PRICING
# ---------------------------------------------------------------------------
elif page == "Pricing":
    st.title("Pricing")
    cols = st.columns(len(PLANS))
    for col, plan in zip(cols, PLANS):
        with col:
            st.markdown(f"### {plan.name}" + (" (Most Popular)" if plan.popular else ""))
            st.markdown(f"## {format_price(plan.price, plan.mode, plan.interval)}")
            if plan.description:
                st.caption(plan.description)
            for feature in plan.features:
                st.markdown(f"- {feature}")
