"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """Ledger entry or transaction is malformed and must not reach the calculator"""

    pass


class GroupNotFoundError(DomainException):
    """No group exists with the requested identifier"""

    pass


class MemberNotFoundError(DomainException):
    """Member identifier does not belong to the group"""

    pass


class EntryNotFoundError(DomainException):
    """Ledger entry does not exist in the group"""

    pass


class TransactionNotFoundError(DomainException):
    """Personal transaction is missing or owned by someone else"""

    pass


class AccessDeniedError(DomainException):
    """Caller is not allowed to read or mutate the group"""

    pass
