"""Resource-specific clients for the Attio API."""

from .attributes import ATTRIBUTE_TARGETS, AttributesClient
from .base import BaseResourceClient, CursorPage, next_cursor, unwrap_data
from .comments import CommentsClient
from .entries import EntriesClient
from .lists import ListsClient
from .meetings import MeetingsClient
from .members import MembersClient
from .notes import NotesClient
from .objects import ObjectsClient
from .records import RecordsClient
from .tasks import TasksClient
from .threads import ThreadsClient
from .webhooks import WebhooksClient

__all__: list[str] = [
    "ATTRIBUTE_TARGETS",
    "AttributesClient",
    "BaseResourceClient",
    "CommentsClient",
    "CursorPage",
    "EntriesClient",
    "ListsClient",
    "MeetingsClient",
    "MembersClient",
    "NotesClient",
    "ObjectsClient",
    "RecordsClient",
    "TasksClient",
    "ThreadsClient",
    "WebhooksClient",
    "next_cursor",
    "unwrap_data",
]
