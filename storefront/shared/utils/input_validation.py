# storefront/shared/utils/input_validation.py

import re
from typing import Optional, Tuple


class InputValidator:
    """
    Validation and sanitization of user input, complementing
    the Pydantic validations in the DTOs.
    """

    # Limits
    MAX_NAME_LENGTH = 255
    MIN_USERNAME_LENGTH = 3
    MAX_USERNAME_LENGTH = 50
    MIN_PASSWORD_LENGTH = 6
    MAX_PASSWORD_LENGTH = 72  # bcrypt limit
    MAX_EMAIL_LENGTH = 255
    MAX_URL_LENGTH = 500
    MAX_STRING_INPUT_LENGTH = 1000

    # Letters (accented included), digits, spaces, hyphens, apostrophes, dots and ampersands
    NAME_PATTERN = re.compile(r"^[A-Za-zÀ-ÖØ-öø-ÿ0-9\s\-'.&]+$")
    USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.\-]+$")
    EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
    URL_PATTERN = re.compile(r"^(https?://|/)\S+$")
    # Potentially dangerous characters in ordinary input
    DANGEROUS_CHARS = re.compile(r'[<>";%{}\[\]]')

    @classmethod
    def validate_name(cls, name: str) -> Tuple[bool, Optional[str]]:
        """
        Validate a display name (category, brand, product, person).

        Args:
            name: String to validate

        Returns:
            Tuple (valid, error_message)
        """
        if not name or not name.strip():
            return False, "Name cannot be empty"

        if len(name) > cls.MAX_NAME_LENGTH:
            return False, f"Name is too long (maximum {cls.MAX_NAME_LENGTH} characters)"

        if cls.DANGEROUS_CHARS.search(name):
            return False, "Name contains forbidden characters"

        if not cls.NAME_PATTERN.match(name):
            return False, "Name contains invalid characters"

        return True, None

    @classmethod
    def sanitize_name(cls, name: str) -> str:
        """Strip, collapse inner whitespace and truncate a name."""
        sanitized = re.sub(r"\s+", " ", name.strip())
        return sanitized[:cls.MAX_NAME_LENGTH]

    @classmethod
    def validate_username(cls, username: str) -> Tuple[bool, Optional[str]]:
        if not username:
            return False, "Username cannot be empty"

        if not cls.MIN_USERNAME_LENGTH <= len(username) <= cls.MAX_USERNAME_LENGTH:
            return False, (
                f"Username must have between {cls.MIN_USERNAME_LENGTH} "
                f"and {cls.MAX_USERNAME_LENGTH} characters"
            )

        if not cls.USERNAME_PATTERN.match(username):
            return False, "Username may only contain letters, digits, dots, hyphens and underscores"

        return True, None

    @classmethod
    def validate_password(cls, password: str) -> Tuple[bool, Optional[str]]:
        """
        Validate password length and complexity.

        Args:
            password: Password to validate

        Returns:
            Tuple (valid, error_message)
        """
        if not password:
            return False, "Password cannot be empty"

        if len(password) < cls.MIN_PASSWORD_LENGTH:
            return False, f"Password must have at least {cls.MIN_PASSWORD_LENGTH} characters"

        if len(password) > cls.MAX_PASSWORD_LENGTH:
            return False, f"Password is too long (maximum {cls.MAX_PASSWORD_LENGTH} characters)"

        if not any(c.isalpha() for c in password) or not any(c.isdigit() for c in password):
            return False, "Password must contain at least one letter and one digit"

        return True, None

    @classmethod
    def validate_email(cls, email: str) -> Tuple[bool, Optional[str]]:
        """
        Validate email format and length.

        Args:
            email: Email to validate

        Returns:
            Tuple (valid, error_message)
        """
        if not email:
            return False, "Email cannot be empty"

        if len(email) > cls.MAX_EMAIL_LENGTH:
            return False, f"Email is too long (maximum {cls.MAX_EMAIL_LENGTH} characters)"

        if not cls.EMAIL_PATTERN.match(email):
            return False, "Invalid email format"

        return True, None

    @classmethod
    def validate_url(cls, url: str) -> Tuple[bool, Optional[str]]:
        """Validate an absolute http(s) URL or a site-relative path."""
        if len(url) > cls.MAX_URL_LENGTH:
            return False, f"URL is too long (maximum {cls.MAX_URL_LENGTH} characters)"

        if not cls.URL_PATTERN.match(url):
            return False, "URL must start with http://, https:// or /"

        return True, None

