from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel


class NotificationKind(str, Enum):
    REMINDER = "reminder"
    ACTION = "action"
    ASSIGN = "assign"


class TaskAction(str, Enum):
    ADD_TASK = "AddTask"
    REMOVE_TASK = "RemoveTask"
    COMPLETE_TASK = "CompleteTask"


class ReminderNotificationRequest(BaseModel):
    """Body of a task reminder notification"""
    taskId: Optional[str] = None
    taskName: Optional[str] = None
    tokens: Optional[List[str]] = None


class AssignNotificationRequest(ReminderNotificationRequest):
    """Body of a task assignment notification"""
    actor: Optional[str] = None


class ActionNotificationRequest(AssignNotificationRequest):
    """Body of a task action notification.

    ``action`` is kept as a plain string: unknown actions are still delivered,
    just without an alert body.
    """
    action: Optional[str] = None


class DispatchResult(BaseModel):
    successCount: int = 0
    failureCount: int = 0
    failedTokens: List[str] = []


class PushMessage(BaseModel):
    """Platform-neutral push message addressed to a list of device tokens."""
    data: Dict[str, str]
    title: Optional[str]
    category: str
    tokens: List[str]
    body: Optional[str] = None


class DeliveryOutcome(BaseModel):
    """Delivery result for a single device token."""
    success: bool
    error_code: Optional[str] = None
    error_message: Optional[str] = None


class MulticastOutcome(BaseModel):
    """Result of one multicast send, one response per token in input order."""
    success_count: int
    failure_count: int
    responses: List[DeliveryOutcome] = []
