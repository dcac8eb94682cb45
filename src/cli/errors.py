"""CLI-level exceptions."""


class CopilotError(Exception):
    """Base exception for note-copilot."""


class UnknownAgentError(CopilotError):
    """Raised when a command names an agent that is not registered."""

    def __init__(self, agent_id: str, available: list[str]):
        self.agent_id = agent_id
        self.available = available
        super().__init__(f"Unknown agent: {agent_id}. Available: {', '.join(available)}")
