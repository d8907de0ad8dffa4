"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidCustomerDataError(DomainException):
    """A customer record could not be parsed"""

    pass


class CSVFormatError(DomainException):
    """Uploaded file is not a usable customer CSV"""

    pass
