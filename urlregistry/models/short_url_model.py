from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ShortURLModel:
    """Represent one shortened URL record.

    The model is immutable: the registry replaces a record (via
    `dataclasses.replace`) whenever its hit counter or expiration changes,
    so `target` can never change after creation.

    Attributes:
        target (str):
            The original long URL that the alias expands to.
        shortcode (str):
            The unique alias representing the shortened URL.
        hits (int):
            Number of successful expansions so far.
        expires_at (datetime | None):
            Moment after which the alias is rejected on expansion.
            None means the alias never expires.

    Example:
        >>> from datetime import datetime, timedelta
        >>> url = ShortURLModel(
        ...     target="https://example.com/article/123",
        ...     shortcode="1a2b3c4d",
        ...     expires_at=datetime.now() + timedelta(days=365)
        ... )
        >>> url.target
        'https://example.com/article/123'
        >>> url.hits
        0
        >>> url.is_expired(datetime.now())
        False
    """

    target: str
    shortcode: str
    hits: int = 0
    expires_at: datetime | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        """Return True if `now` is strictly after the expiration date.

        NOTE: naive expiration dates are compared against local naive time,
              aware ones against the current time in their own timezone.
        """
        if self.expires_at is None:
            return False
        if now is None:
            now = datetime.now(self.expires_at.tzinfo)
        return now > self.expires_at
