"""App-wide configuration and environment settings."""

import os
try:
    import streamlit as st
except ImportError:
    st = None
from dotenv import load_dotenv

load_dotenv()  # Load from .env file

def get_secret(key, default=None):
    """Try st.secrets first, then os.getenv."""
    if st is not None:
        try:
            # Accessing st.secrets might raise FileNotFoundError if no secrets.toml on local
            if key in st.secrets:
                return st.secrets[key]
        except (FileNotFoundError, AttributeError, KeyError):
            pass
    return os.getenv(key, default)

# LLM (Google Gemini) used as the document generator
GOOGLE_API_KEY = get_secret("GOOGLE_API_KEY", "")
GENERATION_MODEL = get_secret("GENERATION_MODEL", "gemini-2.5-flash")
GENERATION_TEMPERATURE = float(get_secret("GENERATION_TEMPERATURE", "0.3"))

# Sessions kept by the HTTP layer between turns
SESSION_TTL_SECONDS = int(os.getenv("SESSION_TTL_SECONDS", "3600"))

# LangSmith
LANGSMITH_TRACING = os.getenv("LANGSMITH_TRACING", "false").lower() in ("true", "1")
LANGSMITH_PROJECT = os.getenv("LANGSMITH_PROJECT", "dealdocs-agent")

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
