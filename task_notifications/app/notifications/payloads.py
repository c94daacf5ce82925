from typing import Dict, Optional, Union

from .schemas import (
    ActionNotificationRequest,
    AssignNotificationRequest,
    NotificationKind,
    PushMessage,
    ReminderNotificationRequest,
    TaskAction,
)

# Data keys read by the mobile clients
DATA_MESSAGE_TYPE = "DATA_MESSAGE_TYPE"
DATA_TASK_ID = "DATA_TASK_ID"
DATA_ACTOR = "DATA_ACTOR"
DATA_ACTION = "DATA_ACTION"

MESSAGE_TYPE_REMINDER = "MESSAGE_TYPE_REMINDER"
MESSAGE_TYPE_ACTION = "MESSAGE_TYPE_ACTION"
MESSAGE_TYPE_ASSIGNED = "MESSAGE_TYPE_ASSIGNED"

CATEGORY_REMINDER = "reminder"
CATEGORY_ACTION = "action"
CATEGORY_ASSIGNED = "assigned"

ACTION_LABELS: Dict[str, str] = {
    TaskAction.ADD_TASK.value: "{actor} added",
    TaskAction.REMOVE_TASK.value: "{actor} removed",
    TaskAction.COMPLETE_TASK.value: "{actor} completed",
}

NotificationRequest = Union[
    ReminderNotificationRequest,
    ActionNotificationRequest,
    AssignNotificationRequest,
]


def _text(value: Optional[str]) -> str:
    # FCM data payloads only accept string values
    return "" if value is None else str(value)


def action_label(action: Optional[str], actor: Optional[str]) -> str:
    """Alert body for an action notification, empty for unknown actions."""
    template = ACTION_LABELS.get(action)
    if template is None:
        return ""
    return template.format(actor=_text(actor))


def build_reminder_message(request: ReminderNotificationRequest) -> PushMessage:
    return PushMessage(
        data={
            DATA_MESSAGE_TYPE: MESSAGE_TYPE_REMINDER,
            DATA_TASK_ID: _text(request.taskId),
        },
        title=request.taskName,
        category=CATEGORY_REMINDER,
        tokens=list(request.tokens or []),
    )


def build_action_message(request: ActionNotificationRequest) -> PushMessage:
    return PushMessage(
        data={
            DATA_MESSAGE_TYPE: MESSAGE_TYPE_ACTION,
            DATA_TASK_ID: _text(request.taskId),
            DATA_ACTOR: _text(request.actor),
            DATA_ACTION: _text(request.action),
        },
        title=request.taskName,
        body=action_label(request.action, request.actor),
        category=CATEGORY_ACTION,
        tokens=list(request.tokens or []),
    )


def build_assign_message(request: AssignNotificationRequest) -> PushMessage:
    return PushMessage(
        data={
            DATA_MESSAGE_TYPE: MESSAGE_TYPE_ASSIGNED,
            DATA_TASK_ID: _text(request.taskId),
            DATA_ACTOR: _text(request.actor),
        },
        title=request.taskName,
        body=f"{_text(request.actor)} assigned to you",
        category=CATEGORY_ASSIGNED,
        tokens=list(request.tokens or []),
    )


MESSAGE_BUILDERS = {
    NotificationKind.REMINDER: build_reminder_message,
    NotificationKind.ACTION: build_action_message,
    NotificationKind.ASSIGN: build_assign_message,
}


def build_message(kind: NotificationKind, request: NotificationRequest) -> PushMessage:
    """Build the push message for a notification kind."""
    return MESSAGE_BUILDERS[kind](request)
