"""Agent service integration.

Public API:
    AgentGateway            - prompt in, assistant text out
    AgentsClient            - thread/message/run resource calls
    extract_assistant_text  - tolerant list-messages text extraction
"""

from mealplanner.agents.client import AgentsClient
from mealplanner.agents.extract import extract_assistant_text, messages_from_payload
from mealplanner.agents.gateway import AgentGateway
from mealplanner.agents.schemas import FAILURE_STATUSES, SUCCESS_STATUSES, Run, RunOutcome

__all__ = [
    "AgentGateway",
    "AgentsClient",
    "FAILURE_STATUSES",
    "Run",
    "RunOutcome",
    "SUCCESS_STATUSES",
    "extract_assistant_text",
    "messages_from_payload",
]
