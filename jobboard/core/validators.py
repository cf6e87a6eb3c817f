"""
Input validation utilities
"""
import re
from typing import List, Optional, Union

from jobboard.core.exceptions import ValidationError

EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
MIN_PASSWORD_LENGTH = 6


class InputValidator:
    """Centralized input validation"""

    @staticmethod
    def clean_text(text: Optional[str], max_length: Optional[int] = None, field: str = "Value") -> str:
        """Trim surrounding whitespace and enforce a length limit; the text is otherwise stored as given.

        Escaping belongs to whatever renders the value (see the email templates).
        """
        if text is None:
            return ""
        if not isinstance(text, str):
            raise ValidationError(f"{field} must be a string")

        cleaned = text.strip()
        if max_length and len(cleaned) > max_length:
            raise ValidationError(f"{field} must be at most {max_length} characters")
        return cleaned

    @staticmethod
    def validate_email(email: Optional[str]) -> str:
        """Validate and normalize an email address"""
        if not email or not email.strip():
            raise ValidationError("Email is required")

        email = email.strip().lower()
        if not re.match(EMAIL_PATTERN, email):
            raise ValidationError("Invalid email format")

        return email

    @staticmethod
    def validate_password(password: Optional[str], field: str = "Password") -> str:
        if not password or not password.strip():
            raise ValidationError(f"{field} is required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"{field} must be at least {MIN_PASSWORD_LENGTH} characters long")
        # bcrypt only looks at the first 72 bytes
        if len(password.encode()) > 72:
            raise ValidationError(f"{field} too long")
        return password

    @staticmethod
    def normalize_skills(skills: Union[str, List[str], None]) -> Optional[List[str]]:
        """Accept a list or a comma separated string; drop blanks and duplicates."""
        if skills is None:
            return None
        if isinstance(skills, str):
            skills = skills.split(",")
        if not isinstance(skills, list):
            raise ValidationError("skills must be a list or a comma separated string")
        seen = []
        for skill in skills:
            cleaned = InputValidator.clean_text(skill, max_length=60, field="Skill")
            if cleaned and cleaned not in seen:
                seen.append(cleaned)
        return seen
