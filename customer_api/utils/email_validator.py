"""Email address validation and normalization utilities."""
import re
from typing import Optional


class EmailValidator:
    """Utility class for email address validation and normalization."""

    # local-part@domain with at least one dot-separated label after the host
    _EMAIL_PATTERN = re.compile(
        r"^[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
        r"@[A-Za-z0-9]([A-Za-z0-9-]*[A-Za-z0-9])?(\.[A-Za-z0-9]([A-Za-z0-9-]*[A-Za-z0-9])?)+$"
    )
    MAX_LENGTH = 254

    @staticmethod
    def normalize(email: Optional[str]) -> str:
        """
        Normalize an email address for storage and lookup.

        Args:
            email: Email address as received

        Returns:
            The address with surrounding whitespace removed
        """
        return (email or "").strip()

    @classmethod
    def validate_format(cls, email: Optional[str]) -> bool:
        """
        Validate email address format.

        Args:
            email: Email address to validate

        Returns:
            True if valid, False otherwise
        """
        if not isinstance(email, str):
            return False
        normalized = cls.normalize(email)
        if not normalized or len(normalized) > cls.MAX_LENGTH:
            return False
        return bool(cls._EMAIL_PATTERN.match(normalized))
