"""Secret detection patterns: the fixed catalog every scan evaluates."""

from __future__ import annotations

import re
from dataclasses import dataclass

from leakscout.scanner.models import Severity


@dataclass(frozen=True)
class Pattern:
    """A named detection rule with compiled regex and severity."""

    name: str
    description: str
    regex: re.Pattern[str]
    severity: Severity


# Evaluation order follows this tuple. Patterns are not mutually exclusive:
# a line may produce one finding per matching pattern.
PATTERNS: tuple[Pattern, ...] = (
    Pattern(
        name="AWS Access Key",
        description="AWS Access Key ID",
        regex=re.compile(r"AKIA[0-9A-Z]{16}", re.IGNORECASE),
        severity=Severity.HIGH,
    ),
    Pattern(
        name="AWS Secret Key",
        description="AWS Secret Access Key",
        regex=re.compile(
            r"aws_secret_access_key\s*=\s*['\"]?([A-Za-z0-9/+=]{40})['\"]?",
            re.IGNORECASE,
        ),
        severity=Severity.HIGH,
    ),
    Pattern(
        name="Private SSH Key",
        description="Private SSH Key",
        regex=re.compile(r"-----BEGIN [A-Z0-9 ]+ PRIVATE KEY-----"),
        severity=Severity.HIGH,
    ),
    Pattern(
        name="GitHub Token",
        description="GitHub Personal Access Token",
        regex=re.compile(
            r"github[_-]?token\s*=\s*['\"]?([a-z0-9]{40})['\"]?",
            re.IGNORECASE,
        ),
        severity=Severity.HIGH,
    ),
    Pattern(
        name="Generic API Key",
        description="Generic API Key Pattern",
        regex=re.compile(
            r"(api[_-]?key|apikey)\s*[=:]\s*['\"]?([a-zA-Z0-9\-_]{20,})['\"]?",
            re.IGNORECASE,
        ),
        severity=Severity.HIGH,
    ),
    Pattern(
        name="Database Password",
        description="Database Connection String with Password",
        regex=re.compile(
            r"(password|passwd|pwd)\s*[=:]\s*['\"]([^'\"]+)['\"]",
            re.IGNORECASE,
        ),
        severity=Severity.HIGH,
    ),
    Pattern(
        name="JWT Token",
        description="JWT Token Pattern",
        regex=re.compile(r"eyJ[A-Za-z0-9_-]+\.eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+"),
        severity=Severity.HIGH,
    ),
    Pattern(
        name="Slack Token",
        description="Slack API Token",
        regex=re.compile(
            r"xox[baprs]-[0-9]{10,13}-[0-9]{10,13}[a-z0-9_-]*",
            re.IGNORECASE,
        ),
        severity=Severity.HIGH,
    ),
    Pattern(
        name="Firebase Key",
        description="Firebase API Key",
        regex=re.compile(r"AIza[0-9A-Za-z\-_]{35}"),
        severity=Severity.HIGH,
    ),
    Pattern(
        name="Heroku API Key",
        description="Heroku API Key",
        regex=re.compile(
            r"heroku[_-]?api[_-]?key\s*[=:]\s*['\"]?"
            r"([a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12})['\"]?",
            re.IGNORECASE,
        ),
        severity=Severity.HIGH,
    ),
    Pattern(
        name="PagerDuty Token",
        description="PagerDuty Integration Key",
        regex=re.compile(
            r"pagerduty[_-]?token\s*[=:]\s*['\"]?([a-z0-9]{20})['\"]?",
            re.IGNORECASE,
        ),
        severity=Severity.MEDIUM,
    ),
    Pattern(
        name="Generic Secret",
        description="Generic Secret Variable",
        regex=re.compile(
            r"(secret|token|passwd|password)\s*[=:]\s*['\"]([^'\"]+)['\"]",
            re.IGNORECASE,
        ),
        severity=Severity.MEDIUM,
    ),
    Pattern(
        name="Private Key File",
        description="Private Key File Reference",
        regex=re.compile(
            r"(private_key|private.key|id_rsa|id_ed25519)\s*[=:]\s*['\"]?([^'\"]+\.key)['\"]?",
            re.IGNORECASE,
        ),
        severity=Severity.HIGH,
    ),
    Pattern(
        name="Basic Auth",
        description="HTTP Basic Authentication",
        regex=re.compile(
            r"(http|https)://[a-zA-Z0-9_-]+:[a-zA-Z0-9_-]+@",
            re.IGNORECASE,
        ),
        severity=Severity.HIGH,
    ),
    Pattern(
        name="Stripe Key",
        description="Stripe API Key",
        regex=re.compile(
            r"stripe[_-]?(api|secret|public)[_-]?key\s*[=:]\s*['\"]?"
            r"(sk_live_[a-zA-Z0-9]{24,}|pk_live_[a-zA-Z0-9]{24,})['\"]?",
            re.IGNORECASE,
        ),
        severity=Severity.HIGH,
    ),
)


def get_patterns() -> tuple[Pattern, ...]:
    """Return the full catalog in evaluation order."""
    return PATTERNS


def get_patterns_by_name(name: str) -> list[Pattern]:
    return [p for p in PATTERNS if p.name == name]


def get_patterns_by_severity(severity: Severity | str) -> list[Pattern]:
    if isinstance(severity, str):
        severity = Severity(severity)
    return [p for p in PATTERNS if p.severity == severity]
