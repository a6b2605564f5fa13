"""Domain entity for a message submitted through the public contact form."""

from dataclasses import dataclass, field

from email_validator import EmailNotValidError, validate_email


@dataclass
class ContactMessage:
    """Visitor's message; ``errors`` collects validation and delivery failures."""

    email: str = ""
    subject: str = ""
    message: str = ""
    errors: list[str] = field(default_factory=list, compare=False)

    def validate(self) -> bool:
        self.errors = []

        try:
            validate_email(self.email, check_deliverability=False)
        except EmailNotValidError:
            self.errors.append("Please enter a valid email address")

        if not self.subject:
            self.errors.append("Please enter a subject")

        if not self.message:
            self.errors.append("Please enter a message")

        return not self.errors
