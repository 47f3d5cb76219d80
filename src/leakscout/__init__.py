"""leakscout: find hardcoded secrets and summarize them with a local LLM."""

__version__ = "0.3.0"
