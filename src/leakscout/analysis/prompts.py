"""Prompt templates sent to the model."""

from __future__ import annotations


def log_chunk_prompt(log_content: str) -> str:
    return (
        "You must respond in English only. Analyze this log chunk and provide "
        "a concise summary of key information found.\n"
        "\n"
        "Focus on:\n"
        "- Errors and warnings\n"
        "- Important events or state changes\n"
        "- Performance issues\n"
        "- Security-related messages\n"
        "\n"
        "Do not provide suggestions, recommendations, or improvements. "
        "Only report what is in the logs.\n"
        "\n"
        "Log:\n" + log_content
    )


def log_secrets_chunk_prompt(log_content: str) -> str:
    return (
        "Analyze this log chunk for secrets, errors and information.\n"
        "Output only findings of secrets, errors or general data found, "
        "nothing else.\n"
        "\n"
        "Log:\n" + log_content
    )


def secrets_chunk_prompt(findings_context: str) -> str:
    """Prompt for one chunk of the formatted findings report."""
    return (
        "You are reviewing the output of a secret scanner. For every entry "
        "below, state the type of secret, whether it looks like a real "
        "credential or a placeholder, and why it is a risk.\n"
        "Be concise and keep the file:line references.\n"
        "\n"
        "Findings:\n" + findings_context
    )


def secrets_resume_prompt(analysis: str) -> str:
    return (
        "Summarize the following secret analysis into a short security "
        "resume. List the most critical exposures first, then group the "
        "rest by secret type, and finish with the overall risk level "
        "(high, medium or low).\n"
        "\n"
        "Analysis:\n" + analysis
    )


def single_secret_prompt(file_content: str) -> str:
    return (
        "Analyze the following code/config content and identify potential "
        "secrets, API keys, tokens, or sensitive information that should not "
        "be exposed.\n"
        "\n"
        "For each finding, provide:\n"
        "1. The type of secret (API key, password, token, etc.)\n"
        "2. Why it's a security risk\n"
        "3. Recommendation for remediation\n"
        "\n"
        "Code/Config:\n" + file_content
    )
