"""Agents: the shared contract and the general, productivity and writing variants."""

from .base import Agent, AgentContract, ResponseBackend
from .general import DELEGATE_ACTION, GENERAL_AGENT_ID, GeneralAgent
from .models import (
    AgentProfile,
    AgentResponse,
    ConversationContext,
    IntentAnalysis,
    Message,
    TaskContext,
    UserProfile,
)
from .productivity import ProductivityAgent
from .writing import WritingAgent


def default_agents(backend: ResponseBackend | None = None, clock=None) -> list[AgentContract]:
    """One instance of every agent kind, general first."""
    return [
        GeneralAgent(backend=backend, clock=clock),
        ProductivityAgent(backend=backend, clock=clock),
        WritingAgent(backend=backend, clock=clock),
    ]


__all__ = [
    "Agent",
    "AgentContract",
    "AgentProfile",
    "AgentResponse",
    "ConversationContext",
    "DELEGATE_ACTION",
    "GENERAL_AGENT_ID",
    "GeneralAgent",
    "IntentAnalysis",
    "Message",
    "ProductivityAgent",
    "ResponseBackend",
    "TaskContext",
    "UserProfile",
    "WritingAgent",
    "default_agents",
]
