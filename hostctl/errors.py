"""
hostctl error taxonomy.

Resolution and validation errors are raised before any remote mutation is
attempted. Workflow errors are raised after the remote service has accepted
a mutation, so the outcome must be treated as uncertain or unsuccessful.
"""

from typing import Iterable, Optional


class HostctlError(Exception):
    """Base class for every error raised by hostctl."""


class UnresolvedIdentifierError(HostctlError):
    """User input (ID or name) did not resolve to exactly one entity."""

    def __init__(
        self,
        kind: str,
        value: Optional[str],
        ambiguous: bool = False,
        message: Optional[str] = None,
    ) -> None:
        self.kind = kind
        self.value = value
        self.ambiguous = ambiguous
        if message is None:
            if ambiguous:
                message = f"The {kind} '{value}' is ambiguous; use its ID instead"
            elif value is None:
                message = f"No {kind} was given"
            else:
                message = f"Could not find {kind} '{value}'"
        super().__init__(message)


class InvalidRoleError(HostctlError):
    """Requested role is not in the currently valid role set."""

    def __init__(self, role: str, valid_roles: Iterable[str]) -> None:
        self.role = role
        self.valid_roles = list(valid_roles)
        super().__init__(
            f"Invalid role '{role}'. Valid roles: {', '.join(self.valid_roles)}"
        )


class EntityParseError(HostctlError):
    """A remote payload did not match the expected entity shape."""

    def __init__(self, kind: str, detail: str) -> None:
        self.kind = kind
        super().__init__(f"Malformed {kind} payload: {detail}")


class RemoteError(HostctlError):
    """
    A remote call failed.

    `authorization` is True when the service rejected the session
    (HTTP 401/403), False for any other transport or HTTP failure.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        authorization: bool = False,
    ) -> None:
        self.status_code = status_code
        self.authorization = authorization
        super().__init__(message)


class RemoteFetchError(RemoteError):
    """A read (listing, entity fetch, workflow poll) failed."""


class RemoteMutationError(RemoteError):
    """A mutating call failed before a workflow was returned."""


class WorkflowError(HostctlError):
    """Base class for errors about an accepted workflow."""

    def __init__(self, workflow_id: str, message: str) -> None:
        self.workflow_id = workflow_id
        super().__init__(message)


class WorkflowTimeoutError(WorkflowError):
    """The workflow did not settle within the configured bound."""

    def __init__(self, workflow_id: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(
            workflow_id,
            f"Workflow {workflow_id} did not finish within {timeout:g} seconds; "
            "it may still complete remotely",
        )


class WorkflowFailedError(WorkflowError):
    """The remote service reported the workflow as failed."""

    def __init__(self, workflow_id: str, reason: str) -> None:
        self.reason = reason
        super().__init__(workflow_id, reason)
