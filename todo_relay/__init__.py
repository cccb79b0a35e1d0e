"""todo-relay: LLM todo summaries relayed to Slack."""

__version__ = "0.1.0"
