"""The production signal catalog."""

from __future__ import annotations

from plumbline.registry import Registry
from plumbline.signals.fixers import (
    AgentInstructionsFixer,
    CommitRulesFixer,
    ContributorGuideFixer,
    PRTemplateFixer,
)
from plumbline.signals.l3 import AcceptanceTracking, ErrorMonitoring, UserFeedback
from plumbline.signals.l4 import WorktreeAgents

_SIGNAL_TYPES = (
    AgentInstructionsFixer,
    CommitRulesFixer,
    ContributorGuideFixer,
    PRTemplateFixer,
    AcceptanceTracking,
    ErrorMonitoring,
    UserFeedback,
    WorktreeAgents,
)


def default_registry() -> Registry:
    """A fresh registry holding every signal plumbline ships."""
    registry = Registry()
    for signal_type in _SIGNAL_TYPES:
        registry.register(signal_type())
    return registry