from __future__ import annotations


class HeaderStateError(RuntimeError):
    # Misuse of the header block/line lifecycle (open line reused, block closed with a line open, ...).
    pass
