import streamlit as st
import requests
import os

API_BASE = os.getenv("API_BASE", "http://127.0.0.1:8000")

st.set_page_config(page_title="Policy Summaries", layout="wide")
st.title("📄 Policy Summaries")

def _headers():
    token = st.session_state.get("token", "")
    return {"Authorization": f"Bearer {token}"} if token else {}

def _error(resp):
    try:
        err = resp.json()["error"]
        st.error(f"{err['kind']}: {err['message']}")
    except (ValueError, KeyError):
        st.error(resp.text)

@st.cache_data(ttl=3600)
def _languages():
    r = requests.get(f"{API_BASE}/summary/languages", timeout=10)
    return r.json()["languages"] if r.ok else []

with st.sidebar:
    st.header("Sign in")
    st.session_state["token"] = st.text_input("Access token", value=st.session_state.get("token", ""), type="password")

    st.header("Upload Policy")
    file = st.file_uploader("Policy PDF", type=["pdf"])
    if st.button("Summarize", type="primary") and file:
        with st.spinner("Summarizing..."):
            resp = requests.post(
                f"{API_BASE}/summary/create",
                files={"PolicyPdf": (file.name, file.getvalue(), "application/pdf")},
                headers=_headers(),
                timeout=300,
            )
        if resp.ok:
            st.session_state["current_id"] = resp.json()["id"]
            st.success(f"Summary created: {resp.json()['title'] or file.name}")
        else:
            _error(resp)

# History, most recent first
summaries = []
if st.session_state.get("token"):
    r = requests.get(f"{API_BASE}/summary/get/all", headers=_headers(), timeout=30)
    if r.ok:
        summaries = r.json()
    else:
        _error(r)

st.subheader("🗂️ Your summaries")
if not summaries:
    st.info("No summaries yet. Upload a policy PDF to get started.")
else:
    labels = {s["id"]: f"{s['title'] or 'Untitled'} ({s['created_at'][:10]})" for s in summaries}
    ids = list(labels)
    current = st.session_state.get("current_id")
    chosen = st.selectbox("Summary", ids, index=ids.index(current) if current in ids else 0, format_func=labels.get)
    doc = next(s for s in summaries if s["id"] == chosen)

    st.markdown(f"### {doc['title'] or 'Untitled'}")
    st.write(doc["summarized_text"])

    st.subheader("🌐 Regional language")
    col1, col2 = st.columns([3, 1])
    with col1:
        language = st.selectbox("Language", _languages())
    with col2:
        if st.button("Translate") and language:
            with st.spinner("Translating..."):
                tr = requests.post(
                    f"{API_BASE}/summary/translate/{chosen}",
                    json={"language": language},
                    headers=_headers(),
                    timeout=300,
                )
            if tr.ok:
                doc["translation"] = {"language": tr.json()["language"], "translated_text": tr.json()["translated_text"]}
            else:
                _error(tr)
    if doc.get("translation"):
        st.caption(doc["translation"]["language"])
        st.write(doc["translation"]["translated_text"])

    if st.button("Delete summary"):
        d = requests.delete(f"{API_BASE}/summary/delete/{chosen}", headers=_headers(), timeout=30)
        if d.ok:
            st.session_state.pop("current_id", None)
            st.rerun()
        else:
            _error(d)
