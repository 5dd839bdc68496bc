"""
Boundary handlers for cluttercut.

Payloads arriving here are loose dicts from an untrusted caller. They are
validated once, turned into typed requests, and the typed results are
flattened back into dicts on the way out.
"""

from typing import Any, Callable

from .contracts import ExecuteRequest, ExecutionResult, ReadFolderRequest, ReadFolderResponse
from .engine import execute
from .errors import InvalidRequestError
from .scanner import read_folder

READ_FOLDER = "READ_FOLDER"
EXECUTE_RULES = "EXECUTE_RULES"

INVALID_EXECUTE_MESSAGE = "Invalid parameters sent to execute."
INVALID_FOLDER_MESSAGE = "Invalid folder path."


def handle_read_folder(payload: Any) -> dict:
    folder_path = payload.get("folderPath") if isinstance(payload, dict) else None
    if not isinstance(folder_path, str) or not folder_path.strip():
        return ReadFolderResponse(error=INVALID_FOLDER_MESSAGE).to_dict()
    return read_folder(ReadFolderRequest(folder_path)).to_dict()


def handle_execute(payload: Any, max_workers: int = 1) -> dict:
    """
    Validate an execute payload and run the engine.

    A malformed payload never reaches the engine; it gets a system-error
    result with zero counts and empty snapshots instead.
    """
    try:
        request = ExecuteRequest.from_dict(payload)
    except InvalidRequestError as e:
        print(f"[WARN] Rejected execute request: {e}")
        return ExecutionResult.system_error(INVALID_EXECUTE_MESSAGE).to_dict()
    return execute(request, max_workers=max_workers).to_dict()


HANDLERS: dict[str, Callable[[Any], dict]] = {
    READ_FOLDER: handle_read_folder,
    EXECUTE_RULES: handle_execute,
}


def dispatch(channel: str, payload: Any = None) -> dict:
    """
    Route a payload to the handler registered for ``channel``.

    Raises:
        KeyError: If no handler is registered for the channel.
    """
    if channel not in HANDLERS:
        raise KeyError(f"No handler registered for channel: {channel}")
    return HANDLERS[channel](payload)
