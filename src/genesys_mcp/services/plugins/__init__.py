"""Resource plugin implementations."""

from genesys_mcp.services.plugins.conversations import ConversationResource
from genesys_mcp.services.plugins.directory import DivisionResource, GroupResource, UserResource
from genesys_mcp.services.plugins.integrations import DataActionResource, OAuthClientResource
from genesys_mcp.services.plugins.routing import QueueResource

__all__ = [
    "ConversationResource",
    "DivisionResource",
    "GroupResource",
    "UserResource",
    "DataActionResource",
    "OAuthClientResource",
    "QueueResource",
]
