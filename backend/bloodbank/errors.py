from __future__ import annotations


class BloodBankError(Exception):
    """Base class for errors raised by the service layer."""


class DuplicateIdentityError(BloodBankError):
    def __init__(self, email: str) -> None:
        super().__init__(f"Email {email} is already registered")
        self.email = email


class InvalidCredentialsError(BloodBankError):
    pass


class NotFoundError(BloodBankError):
    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(f"{kind.capitalize()} {record_id} not found")
        self.kind = kind
        self.record_id = record_id


class InvalidStatusError(BloodBankError):
    def __init__(self, status: str) -> None:
        super().__init__(f"Unsupported status '{status}'; expected 'approved' or 'rejected'")
        self.status = status


class InvalidTransitionError(BloodBankError):
    def __init__(self, kind: str, record_id: str, current: str) -> None:
        super().__init__(f"{kind.capitalize()} {record_id} is already {current}")
        self.kind = kind
        self.record_id = record_id
        self.current = current
