"""Orchestrator module for starterkit.

Interactive workflows with:
- Explicit stage transitions for project initialization
- Bounded prompt loops with a circuit breaker
- Manifest field edits (project name, domain name)
"""

from .init_workflow import InitOrchestrator, TRANSITIONS
from .metadata_workflows import SetDomainNameWorkflow, SetNameWorkflow
from .naming import NamingResolver
from .prompts import ConsolePrompter, PromptLimitExceeded, Prompter

__all__ = [
    "InitOrchestrator",
    "TRANSITIONS",
    "SetNameWorkflow",
    "SetDomainNameWorkflow",
    "NamingResolver",
    "ConsolePrompter",
    "PromptLimitExceeded",
    "Prompter",
]
