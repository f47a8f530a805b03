import base64
import json
import os

import requests
import streamlit as st
import streamlit.components.v1 as components

API_BASE = os.getenv("CHART_SERVICE_API_BASE", os.getenv("API_BASE", "http://localhost:8080")).rstrip("/")
REQUEST_TIMEOUT = float(os.getenv("CHART_SERVICE_UI_TIMEOUT", "120"))

FORMATS = {
    "vega": ["svg", "html", "png", "jpeg", "pdf"],
    "vega-lite": ["svg", "html", "png", "jpeg", "pdf", "vega"],
}
EXTENSIONS = {"svg": "svg", "html": "html", "png": "png", "jpeg": "jpeg", "pdf": "pdf", "vega": "vg.json"}
MIME = {
    "svg": "image/svg+xml",
    "html": "text/html",
    "png": "image/png",
    "jpeg": "image/jpeg",
    "pdf": "application/pdf",
    "vega": "application/json",
}

EXAMPLE_SPEC = {
    "$schema": "https://vega.github.io/schema/vega-lite/v5.json",
    "data": {"values": [{"a": "A", "b": 28}, {"a": "B", "b": 55}, {"a": "C", "b": 43}]},
    "mark": "bar",
    "encoding": {
        "x": {"field": "a", "type": "nominal"},
        "y": {"field": "b", "type": "quantitative"},
    },
}


def _reset_state():
    for key in ["result", "error"]:
        if key in st.session_state:
            del st.session_state[key]


def _convert(spec_text: str, grammar: str, fmt: str, params: dict[str, object]) -> tuple[str, object]:
    """Call the conversion API and return a ("ok"|"error", payload) pair.

    Binary payloads come back as bytes, everything else as text.
    """
    query = {
        k: (str(v).lower() if isinstance(v, bool) else v)
        for k, v in params.items()
        if v is not None
    }
    try:
        resp = requests.post(
            f"{API_BASE}/convert/{grammar}/{fmt}",
            data=spec_text.encode("utf-8"),
            params=query,
            headers={"Content-Type": "application/json"},
            timeout=REQUEST_TIMEOUT,
        )
    except Exception as e:
        return "error", f"Failed to connect to API: {e}"

    if resp.headers.get("X-Conversion-Status") == "ok":
        return "ok", resp.content
    try:
        data = resp.json()
    except ValueError:
        return "error", f"Conversion error: {resp.status_code} {resp.text}"
    if isinstance(data, dict) and "payload" in data:
        if resp.status_code == 200 and data.get("status") == "ok":
            return "ok", str(data["payload"])
        return "error", str(data["payload"])
    return "error", f"Conversion error: {resp.status_code} {resp.text}"


def _preview(fmt: str, payload: object) -> None:
    if fmt == "svg":
        st.image(str(payload))
    elif fmt == "html":
        components.html(str(payload), height=500, scrolling=True)
    elif fmt in ("png", "jpeg"):
        st.image(payload)
    elif fmt == "pdf":
        encoded = base64.b64encode(payload).decode("ascii")  # type: ignore[arg-type]
        st.markdown(
            f'<iframe src="data:application/pdf;base64,{encoded}" width="100%" height="600"></iframe>',
            unsafe_allow_html=True,
        )
    else:
        st.json(json.loads(str(payload)))


def main() -> None:
    st.set_page_config(page_title="Chart Conversion Service", page_icon="📊", layout="centered")
    st.title("📊 Chart Conversion Service")
    st.caption(f"API base: {API_BASE}")

    if st.button("Restart", type="secondary"):
        _reset_state()
        st.rerun()

    grammar = st.radio("Grammar", list(FORMATS), horizontal=True, index=1)
    fmt = st.selectbox("Output format", FORMATS[grammar])
    spec_text = st.text_area("Specification (JSON)", value=json.dumps(EXAMPLE_SPEC, indent=2), height=300)

    params: dict[str, object] = {}
    with st.expander("Options"):
        if fmt in ("png", "jpeg"):
            params["scale"] = st.number_input("Scale", value=1.0, min_value=0.1, step=0.5)
        if fmt == "png":
            params["ppi"] = st.number_input("PPI", value=72.0, min_value=1.0, step=24.0)
        if fmt == "jpeg":
            params["quality"] = st.slider("Quality", min_value=0, max_value=100, value=90)
        if fmt == "html":
            params["bundle"] = st.checkbox("Bundle JavaScript dependencies", value=True)
            params["renderer"] = st.selectbox("Renderer", ["svg", "canvas", "hybrid"])

    if st.button("Convert", type="primary"):
        _reset_state()
        with st.spinner("Converting..."):
            status, payload = _convert(spec_text, grammar, fmt, params)
        if status == "ok":
            st.session_state["result"] = (fmt, payload)
        else:
            st.session_state["error"] = payload

    if "result" in st.session_state:
        result_fmt, payload = st.session_state["result"]
        st.success("Conversion complete!")
        data = payload.encode("utf-8") if isinstance(payload, str) else payload
        st.download_button(
            label=f"Download {result_fmt.upper()}",
            data=data,
            file_name=f"chart.{EXTENSIONS[result_fmt]}",
            mime=MIME[result_fmt],
        )
        with st.expander("Preview", expanded=True):
            _preview(result_fmt, payload)

    if err := st.session_state.get("error"):
        st.error(err)


if __name__ == "__main__":
    main()
