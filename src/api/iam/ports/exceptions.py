"""Exceptions for the IAM bounded context.

Raised by the user service and repository; the presentation layer maps
them to HTTP responses.
"""


class AuthenticationRequiredError(Exception):
    """Raised when an operation is called without an identity assertion.

    Never retried automatically; the caller has to sign in first.
    """

    pass


class UserNotFoundError(Exception):
    """Raised when the caller is authenticated but has no local User yet.

    This is the onboarding race: the identity is valid but profile sync
    has not run. Recoverable by resolving the current user first.
    """

    def __init__(self, external_subject: str):
        super().__init__("User not found in database")
        self.external_subject = external_subject


class DuplicateUserError(Exception):
    """Raised when more than one User row carries the same external subject.

    Picking one of them could attach a caller to somebody else's data, so
    the condition is always surfaced instead of resolved.
    """

    def __init__(self, external_subject: str, count: int):
        super().__init__("Database integrity error: Duplicate user found")
        self.external_subject = external_subject
        self.count = count


class ExternalSubjectConflictError(Exception):
    """Raised when inserting a User whose external subject is already stored.

    Signals that a concurrent first sign-in of the same subject committed
    first; the sync path answers it by reading the winner's row.
    """

    def __init__(self, external_subject: str):
        super().__init__(f"User for subject {external_subject} already exists")
        self.external_subject = external_subject
