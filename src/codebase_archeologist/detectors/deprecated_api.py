"""DEPRECATED_API: legacy engine API usage.

Each rule is a single-line pattern with its own replacement advice. Matches
inside comments and strings are reported as well, and the AttachTo rule only
fires when both calls share one line.
"""

import re
from dataclasses import dataclass

from ..models import AntiPatternHit, Category, Severity
from .base import Detector, line_of


@dataclass(frozen=True)
class DeprecationRule:
    pattern: re.Pattern
    message: str
    suggestion: str


DEPRECATION_RULES: tuple[DeprecationRule, ...] = (
    DeprecationRule(
        re.compile(r'\bFName\s*\(\s*TEXT\s*\(\s*"[^"]*"\s*\)\s*\)'),
        'FName(TEXT("...")) is redundant; use FName literals',
        'Use FName("Literal") directly or NAME_None',
    ),
    DeprecationRule(
        re.compile(r"\bGetCharacterMovement\b"),
        "GetCharacterMovement() is legacy",
        "Use GetCharacterMovement<UCharacterMovementComponent>() or cached pointer",
    ),
    DeprecationRule(
        re.compile(r"\bUProperty\b"),
        "UProperty is deprecated in UE5",
        "Use FProperty instead",
    ),
    DeprecationRule(
        re.compile(r"\bCreateDefaultSubobject\b.*\bAttachTo\b"),
        "AttachTo is deprecated",
        "Use SetupAttachment() in constructor instead",
    ),
    DeprecationRule(
        re.compile(r"\bTArray\s*<\s*FString\s*>\s*\w+\s*=\s*\{"),
        "Initializer list for TArray<FString> may cause copies",
        "Consider using a static const TArray or TConstArrayView",
    ),
)


class DeprecatedApiDetector(Detector):
    """Applies the deprecation table in order."""

    name = "deprecated_api"
    category = Category.DEPRECATED_API

    def __init__(self, rules: tuple[DeprecationRule, ...] = DEPRECATION_RULES):
        self.rules = rules

    def detect(self, content: str, file: str) -> list[AntiPatternHit]:
        hits = []
        for rule in self.rules:
            for m in rule.pattern.finditer(content):
                hits.append(
                    self._hit(
                        Severity.INFO,
                        file,
                        rule.message,
                        rule.suggestion,
                        line=line_of(content, m.start()),
                    )
                )
        return hits
