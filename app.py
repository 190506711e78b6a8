"""Streamlit UI — chat-based interface for the document requirements conversation."""

import asyncio

import streamlit as st

from graph.engine import ConversationEngine
from graph.llm import clear_llm_instance
from graph.requirements import answer_label
from graph.state import Phase, initial_state
from langsmith_tracing import conversation_trace, close_conversation_trace

# ── Page config ─────────────────────────────────────────────────────────
st.set_page_config(page_title="Deal Documents", page_icon="📄", layout="centered")

# ── Custom CSS ──────────────────────────────────────────────────────────
st.markdown("""
<style>
    .stApp { max-width: 800px; margin: 0 auto; }
    div[data-testid="stChatMessage"] {
        border-radius: 12px;
        margin-bottom: 8px;
    }
    .phase-chip {
        display: inline-block; padding: 3px 10px; border-radius: 8px;
        font-size: 0.78em; font-weight: 500;
    }
    .phase-select_type { background: #FEF3C7; color: #92400E; }
    .phase-gathering   { background: #DBEAFE; color: #1E40AF; }
    .phase-confirming  { background: #FDE68A; color: #78350F; }
    .phase-complete    { background: #D1FAE5; color: #065F46; }
</style>
""", unsafe_allow_html=True)

SESSION_ID = "streamlit-main"


# ── Session state init ──────────────────────────────────────────────────
def _init_session():
    if "engine" not in st.session_state:
        st.session_state.engine = ConversationEngine()
        st.session_state.conversation = initial_state()
        st.session_state.messages = []
        st.session_state.options = []
        st.session_state.document = None
        st.session_state.disclaimer = None
        st.session_state.preview = None
        st.session_state.deal_context = {}

_init_session()

engine = st.session_state.engine


def run_turn(message: str):
    """Run one engine turn and fold the response into the session."""
    # Each asyncio.run() creates a new loop; a cached LLM holds HTTP clients tied to the old loop
    clear_llm_instance()
    with conversation_trace(SESSION_ID, user_id="streamlit-user"):
        turn = asyncio.run(engine.take_turn(st.session_state.conversation, message, st.session_state.deal_context))

    st.session_state.conversation = turn.state
    st.session_state.options = turn.options or []
    if turn.partial_document:
        st.session_state.preview = turn.partial_document
    if turn.error:
        st.session_state.messages.append({"role": "assistant", "content": f"⚠️ {turn.error}", "avatar": "📄"})
    st.session_state.messages.append({"role": "assistant", "content": turn.message, "avatar": "📄"})
    if turn.is_complete and turn.generated_document:
        st.session_state.document = turn.generated_document
        st.session_state.disclaimer = turn.disclaimer
        close_conversation_trace(SESSION_ID)


def submit(text: str):
    st.session_state.messages.append({"role": "user", "content": text, "avatar": "👤"})
    run_turn(text)


# ── Sidebar ─────────────────────────────────────────────────────────────
with st.sidebar:
    st.markdown("### 📄 Document Builder")
    conversation = st.session_state.conversation
    phase = conversation.phase
    st.markdown(
        f'<span class="phase-chip phase-{phase.value}">{phase.value.replace("_", " ")}</span>',
        unsafe_allow_html=True,
    )

    entry = engine.catalog.get(conversation.document_type)
    if entry:
        st.caption(entry.display_name)
        answered = len(conversation.gathered_answers)
        st.progress(answered / len(entry.questions), text=f"{answered} of {len(entry.questions)} answered")

        if conversation.gathered_answers:
            with st.expander("📝 Your Answers", expanded=False):
                for question in entry.questions:
                    answer = conversation.gathered_answers.get(question.id)
                    if answer is not None:
                        st.caption(f"**{question.id.replace('_', ' ').title()}**: {answer_label(question, answer)}")

    with st.expander("🏢 Deal Details", expanded=False):
        title = st.text_input("Deal title", value=st.session_state.deal_context.get("title", ""))
        business = st.text_input("Business name", value=st.session_state.deal_context.get("businessName", ""))
        counterparty = st.text_input("Counterparty", value=st.session_state.deal_context.get("counterpartyName", ""))
        st.session_state.deal_context = {
            k: v for k, v in {"title": title, "businessName": business, "counterpartyName": counterparty}.items() if v
        }

    if st.session_state.preview and phase in (Phase.GATHERING, Phase.CONFIRMING):
        with st.expander("👁️ Draft Preview", expanded=False):
            st.code(st.session_state.preview, language=None)

    if st.button("🔄 Reset"):
        clear_llm_instance()
        close_conversation_trace(SESSION_ID)
        for key in list(st.session_state.keys()):
            del st.session_state[key]
        st.rerun()


# ── Main ────────────────────────────────────────────────────────────────
st.title("📄 Deal Document Assistant")
st.caption("Answer a few questions and get a first draft of your deal document.")

# Chat history
for msg in st.session_state.messages:
    with st.chat_message(msg["role"], avatar=msg.get("avatar")):
        st.markdown(msg["content"])

# Opening turn
if not st.session_state.messages:
    if st.button("🚀 Start", type="primary", use_container_width=True):
        run_turn("")
        st.rerun()

elif st.session_state.conversation.phase != Phase.COMPLETE:
    # Quick-reply buttons for the current options
    if st.session_state.options:
        cols = st.columns(min(len(st.session_state.options), 4))
        for i, option in enumerate(st.session_state.options):
            if cols[i % len(cols)].button(option.label, key=f"opt-{i}-{option.value}", help=option.description):
                submit(option.label)
                st.rerun()

    if user_text := st.chat_input("Type your response..."):
        submit(user_text)
        st.rerun()

else:
    st.success("🎉 Your document is ready!")
    if st.session_state.document:
        st.text_area("Generated document", st.session_state.document, height=400)
        st.download_button("⬇️ Download", st.session_state.document, file_name="document.txt")
    if st.session_state.disclaimer:
        st.caption(st.session_state.disclaimer)
