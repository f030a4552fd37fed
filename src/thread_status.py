"""
Thread Status - Workflow state for bug report threads.

The status of a triage thread lives only in its name, as an emoji prefix:

    "🔍 someuser"  -> FOUND
    "🛠️ someuser"  -> INVESTIGATING

State Machine:
    ┌───────────────┬──────────────────────────────────────────┐
    │ FOUND         │ → ASKED, INVESTIGATING                   │
    │ ASKED         │ → WAITING, INVESTIGATING, CLOSED         │
    │ WAITING       │ → ASKED, INVESTIGATING, UNRELEASED, FIXED│
    │ INVESTIGATING │ → ASKED, WAITING, UNRELEASED, CLOSED     │
    │ UNRELEASED    │ → ASKED, WAITING, INVESTIGATING, FIXED   │
    │ FIXED         │ → ASKED, WAITING, INVESTIGATING, CLOSED  │
    │ CLOSED        │ (terminal)                               │
    └───────────────┴──────────────────────────────────────────┘

The state machine works on ThreadStatus values only. Thread names and
button ids are converted at the edges by the codec functions below.
"""

from enum import Enum
from typing import Optional


class ThreadStatus(Enum):
    """Bug report workflow status. Definition order is decode order."""
    FOUND = "found"
    ASKED = "asked"
    WAITING = "waiting"
    INVESTIGATING = "investigating"
    UNRELEASED = "unreleased"
    FIXED = "fixed"
    CLOSED = "closed"

    @property
    def emoji(self) -> str:
        return STATUS_EMOJIS[self]

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


INITIAL_STATUS = ThreadStatus.FOUND

STATUS_EMOJIS: dict[ThreadStatus, str] = {
    ThreadStatus.FOUND: "🔍",
    ThreadStatus.ASKED: "❓",
    ThreadStatus.WAITING: "🔄",
    ThreadStatus.INVESTIGATING: "🛠️",
    ThreadStatus.UNRELEASED: "📦",
    ThreadStatus.FIXED: "✅",
    ThreadStatus.CLOSED: "🔒",
}

STATUS_LABELS: dict[ThreadStatus, str] = {
    ThreadStatus.FOUND: "Found",
    ThreadStatus.ASKED: "Asked",
    ThreadStatus.WAITING: "Waiting",
    ThreadStatus.INVESTIGATING: "Investigating",
    ThreadStatus.UNRELEASED: "Unreleased",
    ThreadStatus.FIXED: "Fixed",
    ThreadStatus.CLOSED: "Closed",
}

STATUS_TRANSITIONS: dict[ThreadStatus, tuple[ThreadStatus, ...]] = {
    ThreadStatus.FOUND: (ThreadStatus.ASKED, ThreadStatus.INVESTIGATING),
    ThreadStatus.ASKED: (ThreadStatus.WAITING, ThreadStatus.INVESTIGATING, ThreadStatus.CLOSED),
    ThreadStatus.WAITING: (
        ThreadStatus.ASKED,
        ThreadStatus.INVESTIGATING,
        ThreadStatus.UNRELEASED,
        ThreadStatus.FIXED,
    ),
    ThreadStatus.INVESTIGATING: (
        ThreadStatus.ASKED,
        ThreadStatus.WAITING,
        ThreadStatus.UNRELEASED,
        ThreadStatus.CLOSED,
    ),
    ThreadStatus.UNRELEASED: (
        ThreadStatus.ASKED,
        ThreadStatus.WAITING,
        ThreadStatus.INVESTIGATING,
        ThreadStatus.FIXED,
    ),
    ThreadStatus.FIXED: (
        ThreadStatus.ASKED,
        ThreadStatus.WAITING,
        ThreadStatus.INVESTIGATING,
        ThreadStatus.CLOSED,
    ),
    ThreadStatus.CLOSED: (),
}

STATUS_BUTTON_PREFIX = "status_"
MAX_THREAD_NAME_LENGTH = 100


# =============================================================================
# State machine
# =============================================================================

def next_statuses(status: ThreadStatus) -> tuple[ThreadStatus, ...]:
    """Statuses reachable from the given one, in display order."""
    return STATUS_TRANSITIONS.get(status, ())


def is_valid_transition(from_status: ThreadStatus, to_status: ThreadStatus) -> bool:
    """Check a transition against the table. Must be called before renaming."""
    return to_status in next_statuses(from_status)


# =============================================================================
# Thread name codec
# =============================================================================

def thread_name_length(name: str) -> int:
    """Length of a name as Discord counts it (UTF-16 code units)."""
    return len(name.encode("utf-16-le")) // 2


def format_thread_name(base_name: str, status: ThreadStatus = INITIAL_STATUS) -> str:
    """
    Build a thread name with its status emoji.

    The base name is shortened so the whole name fits in
    MAX_THREAD_NAME_LENGTH; the emoji prefix is never cut.

    Example:
        >>> format_thread_name("someuser")
        '🔍 someuser'
    """
    prefix = f"{STATUS_EMOJIS[status]} "
    budget = MAX_THREAD_NAME_LENGTH - thread_name_length(prefix)
    base_name = base_name[:budget]
    while thread_name_length(base_name) > budget:
        base_name = base_name[:-1]
    return prefix + base_name


def extract_status_from_name(thread_name: str) -> Optional[ThreadStatus]:
    """
    Read the status from a thread name.

    Returns:
        The first status (in enum order) whose emoji prefixes the name,
        or None if the name carries no status.
    """
    if not thread_name:
        return None
    for status in ThreadStatus:
        if thread_name.startswith(STATUS_EMOJIS[status]):
            return status
    return None


def strip_status(thread_name: str) -> str:
    """Remove the status emoji and its separating space, if present."""
    current = extract_status_from_name(thread_name)
    if current is None:
        return thread_name

    base_name = thread_name[len(STATUS_EMOJIS[current]):]
    if base_name.startswith(" "):
        base_name = base_name[1:]
    return base_name


def update_thread_name_status(current_name: str, new_status: ThreadStatus) -> str:
    """
    Replace the status emoji of a thread name.

    A name without a status is used whole as the base name.

    Example:
        >>> update_thread_name_status("🔍 someuser", ThreadStatus.ASKED)
        '❓ someuser'
    """
    return format_thread_name(strip_status(current_name), new_status)


# =============================================================================
# Button id codec
# =============================================================================

def status_button_id(status: ThreadStatus) -> str:
    """Custom id for the button moving a thread to `status`."""
    return f"{STATUS_BUTTON_PREFIX}{status.value}"


def parse_status_button_id(custom_id: str) -> Optional[ThreadStatus]:
    """Target status of a status button, or None for any other id."""
    if not custom_id or not custom_id.startswith(STATUS_BUTTON_PREFIX):
        return None
    try:
        return ThreadStatus(custom_id[len(STATUS_BUTTON_PREFIX):])
    except ValueError:
        return None
